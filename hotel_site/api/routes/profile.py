from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from sqlalchemy.orm import Session

from hotel_site.core.dependencies import get_avatar_uploader, get_current_user, get_db
from hotel_site.core.errors import BackendError, UploadRejected
from hotel_site.core.logging_config import get_logger
from hotel_site.models.profile import Profile
from hotel_site.models.user import User
from hotel_site.schemas.profile import ProfileOut, ProfileUpdate
from hotel_site.utils.cloudinary_utils import path_from_url
from hotel_site.utils.display import initials
from hotel_site.utils.image_upload import ImageFile, ImageUploader

router = APIRouter(prefix="/profile", tags=["Profile"])
logger = get_logger()


def get_or_create_profile(db: Session, user: User) -> Profile:
    profile = db.get(Profile, user.id)
    if profile is None:
        profile = Profile(id=user.id)
        db.add(profile)
        db.flush()
    return profile


def profile_out(user: User, profile: Profile) -> ProfileOut:
    return ProfileOut(
        id=user.id,
        email=user.email,
        full_name=profile.full_name,
        avatar_url=profile.avatar_url,
        initials=initials(profile.full_name or user.email),
    )


# ---------- GET MY PROFILE ----------
@router.get("", response_model=ProfileOut)
def get_profile(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    profile = get_or_create_profile(db, user)
    db.commit()
    return profile_out(user, profile)


# ---------- UPDATE MY PROFILE ----------
@router.put("", response_model=ProfileOut)
def update_profile(
    data: ProfileUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    profile = get_or_create_profile(db, user)

    for key, value in data.model_dump(exclude_unset=True).items():
        setattr(profile, key, value.strip() if isinstance(value, str) else value)

    db.commit()
    db.refresh(profile)
    logger.info(f"PROFILE UPDATED: {user.email}")

    return profile_out(user, profile)


# ---------- AVATAR ----------
@router.post("/avatar", response_model=ProfileOut)
async def upload_avatar(
    file: UploadFile = File(...),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    uploader: ImageUploader = Depends(get_avatar_uploader)
):
    image = ImageFile(
        filename=file.filename or "avatar",
        content_type=file.content_type or "",
        data=await file.read(),
    )

    try:
        url = await uploader.upload(image, f"avatars/{user.id}")
    except (UploadRejected, BackendError) as e:
        raise HTTPException(status_code=400, detail=e.message)

    profile = get_or_create_profile(db, user)
    old_path = path_from_url(profile.avatar_url)

    profile.avatar_url = url
    db.commit()
    db.refresh(profile)

    # The new avatar is already saved; a failed cleanup only leaves an orphan file
    if old_path:
        try:
            await uploader.delete(old_path)
        except BackendError as e:
            logger.warning(f"Old avatar not deleted: {old_path} -> {e.message}")

    return profile_out(user, profile)
