# storefront/domain/roles.py
import enum


class Role(str, enum.Enum):
    CUSTOMER = "customer"
    ADMIN = "admin"

    @classmethod
    def parse(cls, value) -> "Role":
        if isinstance(value, Role):
            return value
        # stare konta mialy role "user"
        if value in (None, "", "user"):
            return cls.CUSTOMER
        return cls(str(value).strip().lower())


def can_administer(role) -> bool:
    return Role.parse(role) is Role.ADMIN
