from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from hotel_site.core.config import ADMIN_EMAILS
from hotel_site.core.dependencies import get_db, get_current_user, get_optional_user, is_admin
from hotel_site.core.jwt import create_access_token
from hotel_site.core.logging_config import get_logger
from hotel_site.core.security import hash_password, verify_password
from hotel_site.models.enums import AppRole
from hotel_site.models.profile import Profile
from hotel_site.models.user import User, UserRole
from hotel_site.schemas.user import PasswordChange, SessionOut, SignIn, SignUp, TokenOut, UserOut

router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = get_logger()


# =====================================================================
#                           SIGN UP
# =====================================================================
@router.post("/signup", response_model=TokenOut)
def signup(data: SignUp, db: Session = Depends(get_db)):
    email = data.email.lower()
    if db.query(User).filter(User.email == email).first():
        raise HTTPException(status_code=400, detail="Email sudah terdaftar")

    user = User(email=email, password_hash=hash_password(data.password))
    db.add(user)
    db.flush()

    db.add(Profile(id=user.id, full_name=data.full_name))
    db.add(UserRole(user_id=user.id, role=AppRole.USER.value))
    if email in ADMIN_EMAILS:
        db.add(UserRole(user_id=user.id, role=AppRole.ADMIN.value))

    db.commit()
    logger.info(f"SIGNUP: {email}")

    return TokenOut(
        access_token=create_access_token({"sub": user.id}),
        is_admin=email in ADMIN_EMAILS
    )


# =====================================================================
#                           SIGN IN
# =====================================================================
@router.post("/login", response_model=TokenOut)
def login(data: SignIn, db: Session = Depends(get_db)):
    user = db.query(User).filter(User.email == data.email.lower()).first()

    if not user or not verify_password(data.password, user.password_hash):
        raise HTTPException(status_code=401, detail="Email atau password salah")

    return TokenOut(
        access_token=create_access_token({"sub": user.id}),
        is_admin=is_admin(db, user.id)
    )


# =====================================================================
#                           CURRENT SESSION
# =====================================================================
@router.get("/session", response_model=SessionOut)
def session(user: User | None = Depends(get_optional_user), db: Session = Depends(get_db)):
    if user is None:
        return SessionOut()
    return SessionOut(user=UserOut.model_validate(user), is_admin=is_admin(db, user.id))


# =====================================================================
#                           CHANGE PASSWORD
# =====================================================================
@router.post("/password")
def change_password(
    data: PasswordChange,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    # Current password is re-verified like a fresh sign-in
    if not verify_password(data.current_password, user.password_hash):
        raise HTTPException(status_code=400, detail="Password saat ini salah")

    user = db.get(User, user.id)
    user.password_hash = hash_password(data.new_password)
    db.commit()
    logger.bind(log_type="admin").info(f"PASSWORD CHANGED: {user.email}")

    return {"message": "Password berhasil diubah"}
