# storefront/client/storefront.py
from dataclasses import dataclass
from typing import List, Optional

from storefront.client.api_client import ApiClient
from storefront.client.cache import QueryCache, key_of
from storefront.client.identity import IdentityProvider
from storefront.domain.errors import EmptyCartError
from storefront.domain.order_status import shows_payment_prompt
from storefront.domain.pricing import CartLine, CartTotals, compute_totals
from storefront.domain.schemas import (
    BannerOut,
    CartLineOut,
    CategoryOut,
    OrderOut,
    ProductOut,
    UpiSettings,
    WatchlistItemOut,
)
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

CART_KEY = ("/api/cart",)
ORDERS_KEY = ("/api/orders",)
WATCHLIST_KEY = ("/api/watchlist",)
CATEGORIES_KEY = ("/api/categories",)
PRODUCTS_KEY = ("/api/products",)
BANNERS_KEY = ("/api/banners",)
UPI_KEY = ("/api/settings/upi",)

CATALOG_STALE_SECONDS = 60


@dataclass(frozen=True)
class CartView:
    items: List[CartLineOut]
    totals: CartTotals

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def item_count(self) -> int:
        return sum(i.quantity for i in self.items)


class Storefront:
    """
    Koszyk, zamowienia i katalog od strony klienta.
    Odczyty przez QueryCache, mutacje uniewazniaja zalezne klucze.
    """

    def __init__(self, api: ApiClient, cache: QueryCache, identity: IdentityProvider):
        self.api = api
        self.cache = cache
        self.identity = identity

    def _read(self, key, path: str, params=None, stale_time: float = 0.0):
        return self.cache.read(key, lambda: self.api.get(path, params=params), stale_time=stale_time)

    # ---------- cart ----------

    async def cart(self) -> CartView:
        payload = await self._read(CART_KEY, "/api/cart")
        items = [CartLineOut.model_validate(i) for i in (payload or {}).get("items", [])]

        # sumy liczone ta sama funkcja co na serwerze, z adresem zalogowanego
        user = await self.identity.get_current_user()
        totals = compute_totals(
            [CartLine(price=i.product.price, quantity=i.quantity) for i in items],
            user.address if user else None,
        ).rounded()
        return CartView(items=items, totals=totals)

    async def add_to_cart(self, product_id: int, quantity: int = 1, variant_info=None) -> None:
        payload = {"productId": product_id, "quantity": quantity}
        if variant_info:
            payload["variantInfo"] = [v.model_dump() if hasattr(v, "model_dump") else dict(v) for v in variant_info]
        await self.api.post("/api/cart", json=payload)
        self.cache.invalidate(CART_KEY)

    async def update_cart_item(self, item_id: int, quantity: int) -> None:
        await self.api.put(f"/api/cart/{item_id}", json={"quantity": quantity})
        self.cache.invalidate(CART_KEY)

    async def remove_cart_item(self, item_id: int) -> None:
        await self.api.delete(f"/api/cart/{item_id}")
        self.cache.invalidate(CART_KEY)

    async def clear_cart(self) -> None:
        await self.api.delete("/api/cart")
        self.cache.invalidate(CART_KEY)

    # ---------- orders ----------

    async def place_order(self) -> int:
        """
        Zamowienie z koszyka. Pusty koszyk -> EmptyCartError bez wysylania zadania.
        Zwraca id nowego zamowienia.
        """
        view = await self.cart()
        if view.is_empty:
            raise EmptyCartError()

        data = await self.api.post("/api/orders")
        order = OrderOut.model_validate(data)

        self.cache.invalidate(CART_KEY)
        self.cache.invalidate(ORDERS_KEY)
        logger.info(f"Order {order.id} placed, total {order.total}")
        return order.id

    async def orders(self) -> List[OrderOut]:
        data = await self._read(ORDERS_KEY, "/api/orders")
        return [OrderOut.model_validate(o) for o in data or []]

    async def order(self, order_id: int) -> OrderOut:
        data = await self._read(key_of("/api/orders", order_id), f"/api/orders/{order_id}")
        return OrderOut.model_validate(data)

    async def update_order_status(self, order_id: int, status: str) -> OrderOut:
        data = await self.api.put(f"/api/orders/{order_id}/status", json={"status": status})
        self.cache.invalidate(ORDERS_KEY)
        return OrderOut.model_validate(data)

    async def upi_settings(self) -> UpiSettings:
        data = await self._read(UPI_KEY, "/api/settings/upi", stale_time=CATALOG_STALE_SECONDS)
        return UpiSettings.model_validate(data or {})

    async def update_upi_settings(self, settings: UpiSettings) -> UpiSettings:
        data = await self.api.put("/api/settings/upi", json=settings.model_dump(by_alias=True))
        saved = UpiSettings.model_validate(data)
        self.cache.write(UPI_KEY, saved.model_dump(by_alias=True))
        return saved

    async def payment_prompt(self, order: OrderOut) -> Optional[UpiSettings]:
        """Dane do przelewu UPI, tylko dopoki zamowienie czeka na platnosc."""
        if not shows_payment_prompt(order.status):
            return None
        return await self.upi_settings()

    # ---------- catalog ----------

    async def categories(self) -> List[CategoryOut]:
        data = await self._read(CATEGORIES_KEY, "/api/categories", stale_time=CATALOG_STALE_SECONDS)
        return [CategoryOut.model_validate(c) for c in data or []]

    async def products(self, category_slug: str | None = None) -> List[ProductOut]:
        if category_slug:
            key = key_of("/api/products", "category-slug", category_slug)
            path = f"/api/products/category-slug/{category_slug}"
        else:
            key, path = PRODUCTS_KEY, "/api/products"
        data = await self._read(key, path, stale_time=CATALOG_STALE_SECONDS)
        return [ProductOut.model_validate(p) for p in data or []]

    async def product(self, product_id: int) -> ProductOut:
        data = await self._read(
            key_of("/api/products", product_id),
            f"/api/products/{product_id}",
            stale_time=CATALOG_STALE_SECONDS,
        )
        return ProductOut.model_validate(data)

    async def banners(self, type: str | None = None) -> List[BannerOut]:
        params = {"type": type} if type else None
        data = await self._read(key_of("/api/banners", type), "/api/banners", params, CATALOG_STALE_SECONDS)
        return [BannerOut.model_validate(b) for b in data or []]

    async def _mutate(self, method: str, path: str, payload=None, *invalidates):
        json = payload.model_dump(by_alias=True, mode="json", exclude_unset=True) if payload is not None else None
        data = await self.api.request(method, path, json=json)
        for key in invalidates:
            self.cache.invalidate(key)
        return data

    # admin
    async def save_product(self, payload, product_id: int | None = None) -> ProductOut:
        if product_id is None:
            data = await self._mutate("POST", "/api/products", payload, PRODUCTS_KEY)
        else:
            data = await self._mutate("PUT", f"/api/products/{product_id}", payload, PRODUCTS_KEY)
        return ProductOut.model_validate(data)

    async def delete_product(self, product_id: int) -> None:
        # koszyk moze zawierac usuniety produkt
        await self._mutate("DELETE", f"/api/products/{product_id}", None, PRODUCTS_KEY, CART_KEY)

    async def save_category(self, payload, category_id: int | None = None) -> CategoryOut:
        if category_id is None:
            data = await self._mutate("POST", "/api/categories", payload, CATEGORIES_KEY)
        else:
            data = await self._mutate("PUT", f"/api/categories/{category_id}", payload, CATEGORIES_KEY, PRODUCTS_KEY)
        return CategoryOut.model_validate(data)

    async def delete_category(self, category_id: int) -> None:
        await self._mutate("DELETE", f"/api/categories/{category_id}", None, CATEGORIES_KEY)

    async def save_banner(self, payload, banner_id: int | None = None) -> BannerOut:
        if banner_id is None:
            data = await self._mutate("POST", "/api/banners", payload, BANNERS_KEY)
        else:
            data = await self._mutate("PUT", f"/api/banners/{banner_id}", payload, BANNERS_KEY)
        return BannerOut.model_validate(data)

    async def delete_banner(self, banner_id: int) -> None:
        await self._mutate("DELETE", f"/api/banners/{banner_id}", None, BANNERS_KEY)

    # ---------- watchlist ----------

    async def watchlist(self) -> List[WatchlistItemOut]:
        data = await self._read(WATCHLIST_KEY, "/api/watchlist")
        return [WatchlistItemOut.model_validate(w) for w in data or []]

    async def add_to_watchlist(self, product_id: int) -> None:
        await self.api.post("/api/watchlist", json={"productId": product_id})
        self.cache.invalidate(WATCHLIST_KEY)

    async def remove_from_watchlist(self, item_id: int) -> None:
        await self.api.delete(f"/api/watchlist/{item_id}")
        self.cache.invalidate(WATCHLIST_KEY)
