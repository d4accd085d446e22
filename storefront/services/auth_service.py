# storefront/services/auth_service.py
from datetime import datetime, timezone, timedelta

from sqlalchemy.orm import Session

from storefront.data.models.user import UserModel
from storefront.domain.errors import (
    AuthenticationError,
    InvalidTokenError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from storefront.domain.roles import Role, can_administer
from storefront.domain.schemas import UserCreate, UserRead, UserUpdate
from storefront.repos.user_repo import UserRepo
from storefront.services.notification_service import NotificationService
from storefront.utils.hash_utils import hash_password, verify_password, new_token, token_digest
from storefront.utils.settings import FRONTEND_URL, RESET_TOKEN_TTL_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _as_utc(value: datetime | None) -> datetime | None:
    # sqlite oddaje naiwne daty
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class AuthService:
    """
    Use case'y tozsamosci: rejestracja, logowanie, reset i zmiana hasla, profil.
    Sesje trzyma SessionStore, tu tylko uzytkownicy.
    """

    def __init__(self, db: Session, notification_service: NotificationService | None = None):
        self.repo = UserRepo(db)
        self.notification_service = notification_service or NotificationService()

    #query
    def get_user(self, user_id: int) -> UserRead:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFoundError("User not found")
        return UserRead.model_validate(user)

    def find_user(self, user_id: int | None) -> UserRead | None:
        if user_id is None:
            return None
        user = self.repo.get_user(user_id)
        return UserRead.model_validate(user) if user else None

    def list_users(self) -> list[UserRead]:
        return [UserRead.model_validate(u) for u in self.repo.list_users()]

    #commands
    def register(self, payload: UserCreate, role: Role = Role.CUSTOMER) -> UserRead:
        email = payload.email.lower()
        if self.repo.get_by_email(email):
            raise ValidationError("Email already registered")
        if self.repo.get_by_phone(payload.phone_number):
            raise ValidationError("Phone number already registered")

        user = UserModel(
            name=payload.name,
            business_name=payload.business_name,
            gstin=payload.gstin,
            email=email,
            phone_number=payload.phone_number,
            address=payload.address,
            password=hash_password(payload.password),
            role=role.value,
        )
        created = self.repo.create_user(user)
        logger.info(f"Registered user {created.id} ({created.email})")
        return UserRead.model_validate(created)

    def authenticate(self, identifier: str, password: str) -> UserRead:
        identifier = identifier.strip()
        user = self.repo.get_by_identifier(identifier.lower() if "@" in identifier else identifier)
        if not user or not verify_password(password, user.password):
            logger.info(f"Failed login for '{identifier}'")
            raise AuthenticationError("Incorrect email or password.")
        return UserRead.model_validate(user)

    def request_password_reset(self, identifier: str) -> None:
        """
        Generuje jednorazowy token i wysyla link mailem.
        Brak konta nie jest bledem - nie zdradzamy kto ma konto.
        """
        identifier = identifier.strip()
        user = self.repo.get_by_identifier(identifier.lower() if "@" in identifier else identifier)
        if not user:
            logger.info(f"Password reset requested for unknown identifier '{identifier}'")
            return

        token = new_token()
        user.password_reset_token_hash = token_digest(token)
        user.password_reset_expires_at = datetime.now(timezone.utc) + timedelta(seconds=RESET_TOKEN_TTL_SECONDS)
        self.repo.save(user)

        reset_link = f"{FRONTEND_URL.rstrip('/')}/reset-password?token={token}"
        self.notification_service.send_password_reset(user.email, reset_link)
        logger.info(f"Password reset token issued for user {user.id}")

    def reset_password(self, token: str, new_password: str) -> None:
        if not token:
            raise InvalidTokenError()

        user = self.repo.get_by_reset_token_hash(token_digest(token))
        if not user:
            raise InvalidTokenError()

        expires_at = _as_utc(user.password_reset_expires_at)
        if expires_at is None or expires_at <= datetime.now(timezone.utc):
            # wygasly token tez zuzywamy
            user.password_reset_token_hash = None
            user.password_reset_expires_at = None
            self.repo.save(user)
            raise InvalidTokenError()

        # zuzycie tokenu i nowe haslo w jednym commicie
        user.password_reset_token_hash = None
        user.password_reset_expires_at = None
        user.password = hash_password(new_password)
        self.repo.save(user)
        logger.info(f"Password reset for user {user.id}")

    def change_password(self, actor: UserRead, user_id: int, current_password: str, new_password: str) -> None:
        if actor.id != user_id and not can_administer(actor.role):
            raise PermissionDeniedError("You can only change your own password.")

        user = self.repo.get_user(user_id)
        if not user:
            raise NotFoundError("User not found")

        if not verify_password(current_password, user.password):
            raise AuthenticationError("Incorrect current password.")

        user.password = hash_password(new_password)
        self.repo.save(user)
        logger.info(f"Password changed for user {user_id} by user {actor.id}")

    def update_profile(self, user_id: int, payload: UserUpdate) -> UserRead:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFoundError("User not found")

        changes = payload.model_dump(exclude_unset=True, exclude_none=True)
        phone = changes.get("phone_number")
        if phone and phone != user.phone_number:
            other = self.repo.get_by_phone(phone)
            if other and other.id != user.id:
                raise ValidationError("Phone number already registered")

        for field, value in changes.items():
            setattr(user, field, value)
        saved = self.repo.save(user)
        return UserRead.model_validate(saved)
