# storefront/client/identity.py
from pydantic import ValidationError as SchemaError

from storefront.client.api_client import ApiClient
from storefront.client.cache import QueryCache
from storefront.domain.errors import AuthenticationError, InvalidTokenError, StorefrontError
from storefront.domain.schemas import UserCreate, UserRead, UserUpdate
from storefront.utils.logging import get_logger
from storefront.utils.settings import ME_STALE_SECONDS

logger = get_logger(__name__)

ME_KEY = ("/api/auth/me",)
# dane przypiete do zalogowanej osoby - znikaja przy zmianie tozsamosci
IDENTITY_SCOPED_KEYS = (
    ("/api/cart",),
    ("/api/watchlist",),
    ("/api/orders",),
)


class IdentityProvider:
    """
    Kto jest zalogowany, po stronie klienta.
    Stan trzyma QueryCache pod ME_KEY, wiec wszyscy czytelnicy widza to samo.
    """

    def __init__(self, api: ApiClient, cache: QueryCache, stale_time: float = ME_STALE_SECONDS):
        self.api = api
        self.cache = cache
        self.stale_time = stale_time

    async def _fetch_me(self) -> UserRead | None:
        try:
            data = await self.api.get("/api/auth/me")
        except AuthenticationError:
            return None
        except StorefrontError as e:
            # brak odpowiedzi traktujemy jak brak sesji
            logger.warning(f"Identity lookup failed: {e}")
            return None
        try:
            return UserRead.model_validate(data)
        except SchemaError as e:
            logger.warning(f"Identity lookup returned malformed user: {e}")
            return None

    async def get_current_user(self) -> UserRead | None:
        return await self.cache.read(
            ME_KEY,
            self._fetch_me,
            stale_time=self.stale_time,
            refetch_on_focus=True,
        )

    def _drop_identity_scoped(self) -> None:
        for key in IDENTITY_SCOPED_KEYS:
            self.cache.remove(key)

    async def login(self, identifier: str, password: str) -> UserRead:
        data = await self.api.post(
            "/api/auth/login",
            json={"identifier": identifier, "password": password},
        )
        user = UserRead.model_validate(data)

        # moglo sie zmienic konto - nic po poprzednim nie zostaje
        self._drop_identity_scoped()
        self.cache.write(ME_KEY, user)
        logger.info(f"Logged in as user {user.id}")
        return user

    async def register(self, payload: UserCreate) -> UserRead:
        data = await self.api.post(
            "/api/auth/register",
            json=payload.model_dump(by_alias=True, mode="json"),
        )
        return UserRead.model_validate(data)

    async def update_profile(self, payload: UserUpdate) -> UserRead:
        data = await self.api.patch(
            "/api/users/me",
            json=payload.model_dump(by_alias=True, mode="json", exclude_unset=True),
        )
        user = UserRead.model_validate(data)
        self.cache.write(ME_KEY, user)
        # adres wplywa na koszt dostawy w koszyku
        self.cache.invalidate(("/api/cart",))
        return user

    async def change_password(self, user_id: int, current_password: str, new_password: str) -> str:
        data = await self.api.put(
            f"/api/users/{user_id}/password",
            json={"currentPassword": current_password, "newPassword": new_password},
        )
        return data["message"]

    async def request_password_reset(self, identifier: str) -> str:
        data = await self.api.post("/api/auth/forgot-password", json={"identifier": identifier})
        return data["message"]

    async def reset_password(self, token: str | None, password: str) -> str:
        if not token:
            raise InvalidTokenError()
        data = await self.api.post(
            "/api/auth/reset-password",
            json={"token": token, "password": password},
        )
        return data["message"]

    async def logout(self) -> None:
        """
        Konczy sesje. Po powrocie cache nie ma juz danych poprzedniej osoby:
        koszyk, lista obserwowanych i zamowienia sa usuniete, me = None.
        """
        await self.api.post("/api/auth/logout")
        self._drop_identity_scoped()
        self.cache.write(ME_KEY, None)
        logger.info("Logged out")
