# storefront/api/deps.py
from functools import lru_cache

from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.roles import can_administer
from storefront.domain.schemas import UserRead
from storefront.services.auth_service import AuthService
from storefront.services.notification_service import NotificationService
from storefront.services.session_store import SessionStore
from storefront.utils.settings import SESSION_COOKIE_NAME


@lru_cache
def get_session_store() -> SessionStore:
    return SessionStore()


def get_notification_service() -> NotificationService:
    return NotificationService()


def get_session_token(request: Request) -> str | None:
    return request.cookies.get(SESSION_COOKIE_NAME)


def get_current_user(
    token: str | None = Depends(get_session_token),
    db: Session = Depends(get_db),
    store: SessionStore = Depends(get_session_store),
) -> UserRead | None:
    """Uzytkownik z sesji albo None - brak logowania to nie blad."""
    user_id = store.get_user_id(token)
    return AuthService(db).find_user(user_id)


def require_user(user: UserRead | None = Depends(get_current_user)) -> UserRead:
    if user is None:
        raise HTTPException(status_code=401, detail="Login required.")
    return user


def require_admin(user: UserRead = Depends(require_user)) -> UserRead:
    if not can_administer(user.role):
        raise HTTPException(status_code=403, detail="Forbidden: Admin access required")
    return user
