# storefront/client/guards.py
from dataclasses import dataclass
from typing import Callable, Optional

from storefront.domain.roles import can_administer
from storefront.domain.schemas import UserRead

LOGIN_PATH = "/login"
HOME_PATH = "/"


@dataclass(frozen=True)
class GuardResult:
    allowed: bool
    redirect_to: Optional[str] = None


ALLOW = GuardResult(allowed=True)

Guard = Callable[[Optional[UserRead]], GuardResult]


def require_login(user: Optional[UserRead]) -> GuardResult:
    if user is None:
        return GuardResult(allowed=False, redirect_to=LOGIN_PATH)
    return ALLOW


def require_admin(user: Optional[UserRead]) -> GuardResult:
    if user is None:
        return GuardResult(allowed=False, redirect_to=LOGIN_PATH)
    if not can_administer(user.role):
        return GuardResult(allowed=False, redirect_to=HOME_PATH)
    return ALLOW


async def check(identity, guard: Guard) -> GuardResult:
    """Sprawdzenie przed wejsciem do widoku; bez efektow ubocznych."""
    return guard(await identity.get_current_user())
