# storefront/domain/order_status.py
import enum

from storefront.domain.errors import ValidationError


class OrderStatus(str, enum.Enum):
    PENDING_PAYMENT = "pending payment"
    VERIFIED = "verified"
    FULFILLED = "fulfilled"
    CANCELLED = "cancelled"

    @classmethod
    def parse(cls, value) -> "OrderStatus":
        if isinstance(value, OrderStatus):
            return value
        normalized = " ".join(str(value or "").replace("-", " ").replace("_", " ").lower().split())
        try:
            return cls(normalized)
        except ValueError:
            raise ValidationError(f"Unknown order status: {value}") from None

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.FULFILLED, OrderStatus.CANCELLED)


# pending payment -> verified -> fulfilled, albo pending payment -> cancelled
TRANSITIONS = {
    OrderStatus.PENDING_PAYMENT: {OrderStatus.VERIFIED, OrderStatus.CANCELLED},
    OrderStatus.VERIFIED: {OrderStatus.FULFILLED},
    OrderStatus.FULFILLED: set(),
    OrderStatus.CANCELLED: set(),
}


def can_transition(current, target) -> bool:
    return OrderStatus.parse(target) in TRANSITIONS[OrderStatus.parse(current)]


def shows_payment_prompt(status) -> bool:
    """Prosba o potwierdzenie platnosci tylko dla 'pending payment'."""
    try:
        return OrderStatus.parse(status) is OrderStatus.PENDING_PAYMENT
    except ValidationError:
        return False
