from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from hotel_site.core.auth_utils import decode_token
from hotel_site.core.config import MAX_AVATAR_BYTES
from hotel_site.core.errors import AuthorizationError
from hotel_site.db.session import SessionLocal
from hotel_site.models.enums import AppRole
from hotel_site.models.user import User, UserRole
from hotel_site.resources.registry import get_resource
from hotel_site.resources.store import ResourceStore, SettingsStore
from hotel_site.utils.image_upload import ImageUploader

security = HTTPBearer(auto_error=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# ---------------- REALTIME / STORES ----------------
def get_subscriptions(request: Request):
    return request.app.state.subscriptions


def get_settings_store(request: Request) -> SettingsStore:
    return SettingsStore(broker=request.app.state.broker)


def resource_store(table: str):
    resource = get_resource(table)

    def dependency(request: Request) -> ResourceStore:
        return ResourceStore(resource.model, broker=request.app.state.broker)

    return dependency


# ---------------- UPLOADS ----------------
def get_uploader() -> ImageUploader:
    return ImageUploader()


def get_avatar_uploader() -> ImageUploader:
    return ImageUploader(max_bytes=MAX_AVATAR_BYTES)


# ---------------- SESSION ----------------
def is_admin(db: Session, user_id: str) -> bool:
    return db.query(UserRole).filter(
        UserRole.user_id == user_id,
        UserRole.role == AppRole.ADMIN.value
    ).first() is not None


def get_optional_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: Session = Depends(get_db)
) -> User | None:
    if credentials is None:
        return None

    payload = decode_token(credentials.credentials)
    return db.get(User, payload["sub"])


def get_current_user(user: User | None = Depends(get_optional_user)) -> User:
    if user is None:
        raise AuthorizationError("Silakan masuk terlebih dahulu")
    return user


def require_admin(
    user: User | None = Depends(get_optional_user),
    db: Session = Depends(get_db)
) -> User:
    # Session and role are both resolved before refusing
    admin = user is not None and is_admin(db, user.id)

    if user is None:
        raise AuthorizationError("Silakan masuk terlebih dahulu")
    if not admin:
        raise AuthorizationError("Akses khusus admin", status_code=403)

    return user
