from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime

from storefront.data.database import Base
from storefront.domain.roles import Role


class UserModel(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    business_name = Column(String, nullable=False)
    gstin = Column(String, nullable=True)
    email = Column(String, nullable=False, unique=True, index=True)
    phone_number = Column(String, nullable=False, unique=True, index=True)
    address = Column(String, nullable=False)
    password = Column(String, nullable=False)  # hash argon2
    role = Column(String, nullable=False, default=Role.CUSTOMER.value)

    # sha256 tokenu, nie sam token
    password_reset_token_hash = Column(String, nullable=True, index=True)
    password_reset_expires_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
