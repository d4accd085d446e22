# storefront/api/routers/auth.py
from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from storefront.api.deps import (
    get_current_user,
    get_notification_service,
    get_session_store,
    get_session_token,
)
from storefront.data.database import get_db
from storefront.domain.schemas import (
    ForgotPasswordIn,
    LoginIn,
    MessageOut,
    ResetPasswordIn,
    UserCreate,
    UserRead,
)
from storefront.services.auth_service import AuthService
from storefront.services.notification_service import NotificationService
from storefront.services.session_store import SessionStore
from storefront.utils.settings import SESSION_COOKIE_NAME, SESSION_COOKIE_SECURE, SESSION_TTL_SECONDS

router = APIRouter(prefix="/api/auth", tags=["auth"])


def get_service(db: Session, notifications: NotificationService | None = None):
    return AuthService(db, notification_service=notifications)


@router.post("/register", response_model=UserRead, status_code=201)
def register(payload: UserCreate, db: Session = Depends(get_db)):
    return get_service(db).register(payload)


@router.post("/login", response_model=UserRead)
def login(
    payload: LoginIn,
    response: Response,
    token: str | None = Depends(get_session_token),
    db: Session = Depends(get_db),
    store: SessionStore = Depends(get_session_store),
):
    user = get_service(db).authenticate(payload.identifier, payload.password)

    # nowa sesja, stara (innego usera) znika
    store.destroy(token)
    new_token = store.create(user.id)
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=new_token,
        max_age=SESSION_TTL_SECONDS,
        httponly=True,
        samesite="lax",
        secure=SESSION_COOKIE_SECURE,
    )
    return user


@router.post("/logout", response_model=MessageOut)
def logout(
    response: Response,
    token: str | None = Depends(get_session_token),
    store: SessionStore = Depends(get_session_store),
):
    store.destroy(token)
    response.delete_cookie(SESSION_COOKIE_NAME)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=UserRead)
def me(user: UserRead | None = Depends(get_current_user)):
    if user is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user


@router.post("/forgot-password", response_model=MessageOut)
def forgot_password(
    payload: ForgotPasswordIn,
    db: Session = Depends(get_db),
    notifications: NotificationService = Depends(get_notification_service),
):
    get_service(db, notifications).request_password_reset(payload.identifier)
    return {"message": "If an account exists, a password reset link has been sent."}


@router.post("/reset-password", response_model=MessageOut)
def reset_password(payload: ResetPasswordIn, db: Session = Depends(get_db)):
    get_service(db).reset_password(payload.token, payload.password)
    return {"message": "Password has been reset successfully"}
