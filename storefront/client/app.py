# storefront/client/app.py
import time

import requests

from storefront.client.api_client import ApiClient
from storefront.client.cache import QueryCache
from storefront.client.identity import IdentityProvider
from storefront.client.storefront import Storefront
from storefront.utils.logging import get_logger
from storefront.utils.settings import API_BASE_URL

logger = get_logger(__name__)


class StorefrontApp:
    """
    Korzen aplikacji klienckiej: tworzy cache i klienta HTTP przy starcie,
    zamyka je przy stopie. Kazda instancja ma wlasny cache.

        async with StorefrontApp() as app:
            user = await app.identity.get_current_user()
    """

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        session: requests.Session | None = None,
        clock=time.monotonic,
    ):
        self.base_url = base_url
        self._session = session
        self._clock = clock
        self.api: ApiClient | None = None
        self.cache: QueryCache | None = None
        self.identity: IdentityProvider | None = None
        self.storefront: Storefront | None = None

    async def start(self) -> "StorefrontApp":
        self.api = ApiClient(self.base_url, session=self._session)
        self.cache = QueryCache(clock=self._clock)
        self.identity = IdentityProvider(self.api, self.cache)
        self.storefront = Storefront(self.api, self.cache, self.identity)
        logger.info(f"Storefront client started against {self.base_url}")
        return self

    async def stop(self) -> None:
        if self.cache is not None:
            self.cache.close()
        if self.api is not None:
            self.api.close()
        logger.info("Storefront client stopped")

    async def focus(self) -> None:
        await self.cache.on_focus()

    async def __aenter__(self) -> "StorefrontApp":
        return await self.start()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop()
