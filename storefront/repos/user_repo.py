# storefront/repos/user_repo.py
from datetime import datetime

from sqlalchemy import select, or_, update
from sqlalchemy.orm import Session

from storefront.data.models.user import UserModel


class UserRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: int) -> UserModel | None:
        return self.db.get(UserModel, user_id)

    def get_by_email(self, email: str) -> UserModel | None:
        return self.db.execute(
            select(UserModel).where(UserModel.email == email)
        ).scalar_one_or_none()

    def get_by_phone(self, phone_number: str) -> UserModel | None:
        return self.db.execute(
            select(UserModel).where(UserModel.phone_number == phone_number)
        ).scalar_one_or_none()

    def get_by_identifier(self, identifier: str) -> UserModel | None:
        #email albo telefon
        return self.db.execute(
            select(UserModel).where(
                or_(UserModel.email == identifier, UserModel.phone_number == identifier)
            )
        ).scalars().first()

    def get_by_reset_token_hash(self, token_hash: str) -> UserModel | None:
        return self.db.execute(
            select(UserModel).where(UserModel.password_reset_token_hash == token_hash)
        ).scalar_one_or_none()

    def list_users(self) -> list[UserModel]:
        return list(self.db.execute(select(UserModel).order_by(UserModel.id)).scalars())

    def create_user(self, user: UserModel) -> UserModel:
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def save(self, user: UserModel) -> UserModel:
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def clear_expired_reset_tokens(self, now: datetime) -> int:
        result = self.db.execute(
            update(UserModel)
            .where(
                UserModel.password_reset_token_hash.is_not(None),
                UserModel.password_reset_expires_at < now,
            )
            .values(password_reset_token_hash=None, password_reset_expires_at=None)
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        return result.rowcount
