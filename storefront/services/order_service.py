# storefront/services/order_service.py
from decimal import Decimal

from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel, OrderItemModel
from storefront.domain.errors import EmptyCartError, NotFoundError, PermissionDeniedError, ValidationError
from storefront.domain.order_status import OrderStatus, can_transition
from storefront.domain.pricing import compute_totals, quantize_money
from storefront.domain.roles import can_administer
from storefront.domain.schemas import UpiSettings, UserRead
from storefront.repos.cart_repo import CartRepo
from storefront.repos.order_repo import OrderRepo
from storefront.repos.settings_repo import SettingsRepo
from storefront.services.cart_service import cart_lines
from storefront.services.notification_service import NotificationService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

UPI_SETTINGS_KEY = "upiDetails"
MANUAL_UPI = "manual_upi"


class OrderService:
    """
    Zamowienia: powstaja z koszyka w statusie 'pending payment',
    dalej status zmienia tylko admin po recznym potwierdzeniu platnosci.
    """

    def __init__(self, db: Session, notification_service: NotificationService | None = None):
        self.repo = OrderRepo(db)
        self.cart_repo = CartRepo(db)
        self.settings_repo = SettingsRepo(db)
        self.notification_service = notification_service or NotificationService()

    def place_order(self, user: UserRead) -> OrderModel:
        """
        Use Case: zamowienie z koszyka (platnosc reczna UPI).

        1. Pusty koszyk -> EmptyCartError, nic nie zapisujemy
        2. Snapshot pozycji (nazwa, zdjecie, cena jednostkowa) i adresu
        3. Sumy liczone raz, teraz
        4. Czyszczenie koszyka w tej samej transakcji
        5. Powiadomienie (async)
        """
        items = self.cart_repo.get_cart_items(user.id)
        if not items:
            raise EmptyCartError("Cannot place an order with an empty cart")

        address = user.address or "Address not provided"
        totals = compute_totals(cart_lines(items), address).rounded()

        order = OrderModel(
            user_id=user.id,
            status=OrderStatus.PENDING_PAYMENT.value,
            payment_method=MANUAL_UPI,
            address=address,
            subtotal=totals.subtotal,
            tax=totals.tax,
            shipping=totals.shipping,
            total=totals.total,
            items=[
                OrderItemModel(
                    product_id=i.product_id,
                    product_name=i.product.name,
                    product_image=(i.product.images or [None])[0],
                    quantity=i.quantity,
                    price=quantize_money(Decimal(i.product.price)),
                    variant_info=i.variant_info,
                )
                for i in items
            ],
        )

        try:
            self.repo.add_order(order)
            self.cart_repo.clear_cart(user.id)
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        self.repo.refresh(order)
        logger.info(f"Order {order.id} placed by user {user.id}, total {order.total}")

        self.notification_service.send_order_notification(user.id, order.id)
        return order

    def list_orders(self, user: UserRead) -> list[OrderModel]:
        # admin widzi wszystkie
        if can_administer(user.role):
            return self.repo.list_orders()
        return self.repo.list_orders(user_id=user.id)

    def get_order(self, order_id: int, user: UserRead) -> OrderModel:
        order = self.repo.get_order(order_id)
        if not order:
            raise NotFoundError("Order not found")
        if order.user_id != user.id and not can_administer(user.role):
            raise PermissionDeniedError("Forbidden: Not your order")
        return order

    def update_status(self, order_id: int, status: str) -> OrderModel:
        order = self.repo.get_order(order_id)
        if not order:
            raise NotFoundError("Order not found")

        target = OrderStatus.parse(status)
        current = OrderStatus.parse(order.status)
        if target is current:
            return order
        if not can_transition(current, target):
            raise ValidationError(f"Cannot change order status from '{current.value}' to '{target.value}'")

        updated = self.repo.update_order_status(order, target.value)
        logger.info(f"Order {order_id} status {current.value} -> {target.value}")
        return updated

    # dane do recznej platnosci
    def get_upi_settings(self) -> UpiSettings:
        value = self.settings_repo.get_value(UPI_SETTINGS_KEY) or {}
        return UpiSettings.model_validate(value)

    def update_upi_settings(self, payload: UpiSettings) -> UpiSettings:
        self.settings_repo.set_value(UPI_SETTINGS_KEY, payload.model_dump(by_alias=True))
        logger.info("UPI settings updated")
        return payload
