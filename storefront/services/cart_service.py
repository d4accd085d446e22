# storefront/services/cart_service.py
from decimal import Decimal
from typing import Dict, Any

from sqlalchemy.orm import Session

from storefront.data.models.cart_item import CartItemModel
from storefront.domain.errors import NotFoundError, PermissionDeniedError, ValidationError
from storefront.domain.pricing import CartLine, compute_totals
from storefront.domain.schemas import UserRead
from storefront.repos.cart_repo import CartRepo
from storefront.repos.catalog_repo import CatalogRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def cart_lines(items: list[CartItemModel]) -> list[CartLine]:
    return [CartLine(price=Decimal(i.product.price), quantity=i.quantity) for i in items]


def normalize_variant(variant_info) -> list[dict] | None:
    """
    Wariant jako posortowana lista {name, value}; pusty = brak wariantu.
    Kolejnosc cech nie ma znaczenia przy porownaniu pozycji.
    """
    if not variant_info:
        return None
    entries = [v.model_dump() if hasattr(v, "model_dump") else dict(v) for v in variant_info]
    return sorted(
        ({"name": e["name"], "value": e["value"]} for e in entries),
        key=lambda e: (e["name"].lower(), e["value"].lower()),
    )


def _check_variant(product, variant: list[dict] | None) -> None:
    # produkt z wariantami: wybrane cechy musza byc na jego liscie
    if not variant or not product.variants:
        return
    offered = {(v["name"].lower(), v["value"].lower()) for v in product.variants}
    for entry in variant:
        if (entry["name"].lower(), entry["value"].lower()) not in offered:
            raise ValidationError(f"Variant {entry['name']}={entry['value']} is not available for this product")


class CartService:
    """
    Koszyk uzytkownika = zbior pozycji (produkt, ilosc).
    commands (add, update, remove, clear) modyfikuja stan
    query (get) liczy sumy z aktualnych cen
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.catalog = CatalogRepo(db)

    #query - odczyt
    def get_cart(self, user: UserRead) -> Dict[str, Any]:
        items = self.repo.get_cart_items(user.id)
        totals = compute_totals(cart_lines(items), user.address)

        #dict przeksztalcany w jsona przez CartOut
        return {
            "items": [
                {
                    "id": i.id,
                    "product": i.product,
                    "quantity": i.quantity,
                    "variant_info": i.variant_info,
                    "line_total": Decimal(i.product.price) * i.quantity,
                }
                for i in items
            ],
            "totals": totals.as_dict(),
        }

    #commands
    def add_product(self, user: UserRead, product_id: int, quantity: int, variant_info=None) -> Dict[str, Any]:
        if quantity <= 0:
            raise ValidationError("Quantity must be at least 1")

        product = self.catalog.get_product(product_id)
        if not product:
            raise NotFoundError("Product not found")

        variant = normalize_variant(variant_info)
        _check_variant(product, variant)

        #ta sama pozycja = ten sam produkt i ten sam wariant
        existing = next(
            (i for i in self.repo.get_cart_items_for_product(user.id, product_id)
             if normalize_variant(i.variant_info) == variant),
            None,
        )
        if existing:
            logger.info(
                f"Product {product_id} already in cart of user {user.id}, "
                f"quantity {existing.quantity} -> {existing.quantity + quantity}"
            )
            existing.quantity += quantity
        else:
            logger.info(f"Adding product {product_id} to cart of user {user.id}")
            self.repo.add_cart_item(
                CartItemModel(user_id=user.id, product_id=product_id, quantity=quantity, variant_info=variant)
            )

        self.repo.commit()
        return self.get_cart(user)

    def _owned_item(self, user: UserRead, item_id: int) -> CartItemModel:
        item = self.repo.get_cart_item(item_id)
        if not item:
            raise NotFoundError("Cart item not found")
        if item.user_id != user.id:
            raise PermissionDeniedError("Forbidden: Not your cart item")
        return item

    def update_quantity(self, user: UserRead, item_id: int, quantity: int) -> Dict[str, Any]:
        if quantity < 0:
            raise ValidationError("Invalid quantity")

        item = self._owned_item(user, item_id)

        #ilosc 0 = usuniecie pozycji, w koszyku zawsze quantity >= 1
        if quantity == 0:
            self.repo.delete_cart_item(item)
            logger.info(f"Cart item {item_id} removed (quantity 0)")
        else:
            item.quantity = quantity

        self.repo.commit()
        return self.get_cart(user)

    def remove_item(self, user: UserRead, item_id: int) -> Dict[str, Any]:
        item = self._owned_item(user, item_id)
        self.repo.delete_cart_item(item)
        self.repo.commit()
        logger.info(f"Cart item {item_id} removed from cart of user {user.id}")
        return self.get_cart(user)

    def clear_cart(self, user: UserRead) -> int:
        removed = self.repo.clear_cart(user.id)
        self.repo.commit()
        logger.info(f"Cart of user {user.id} cleared ({removed} items)")
        return removed
