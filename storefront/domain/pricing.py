# storefront/domain/pricing.py
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from storefront.domain.errors import ValidationError
from storefront.utils.settings import TAX_RATE, FREE_SHIPPING_CITY, SHIPPING_FLAT_FEE

ZERO = Decimal("0")
CENT = Decimal("0.01")


def to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # float przez str, zeby 0.1 nie zamienilo sie w 0.1000000000000000055
    return Decimal(str(value))


def quantize_money(value) -> Decimal:
    """Zaokraglenie do 2 miejsc - tylko na granicy (prezentacja, zapis)."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class CartLine:
    price: Decimal
    quantity: int


@dataclass(frozen=True)
class CartTotals:
    subtotal: Decimal
    tax: Decimal
    shipping: Decimal
    total: Decimal

    def rounded(self) -> "CartTotals":
        return CartTotals(
            subtotal=quantize_money(self.subtotal),
            tax=quantize_money(self.tax),
            shipping=quantize_money(self.shipping),
            total=quantize_money(self.total),
        )

    def as_dict(self) -> dict:
        r = self.rounded()
        return {"subtotal": r.subtotal, "tax": r.tax, "shipping": r.shipping, "total": r.total}


def subtotal_of(lines: Iterable[CartLine]) -> Decimal:
    subtotal = ZERO
    for line in lines:
        price = to_decimal(line.price)
        if line.quantity < 0 or price < 0:
            raise ValidationError("Price and quantity must not be negative")
        subtotal += price * line.quantity
    return subtotal


def shipping_for(
    address: str | None,
    free_city: str = FREE_SHIPPING_CITY,
    flat_fee: Decimal = SHIPPING_FLAT_FEE,
) -> Decimal:
    # TODO: dopasowanie po podciagu nazwy miasta w wolnym tekscie adresu lapie tez
    # podobnie nazwane miejscowosci; potrzebne osobne pole "miasto" w adresie
    if address and free_city and free_city.lower() in address.lower():
        return ZERO
    return to_decimal(flat_fee)


def compute_totals(
    lines: Iterable[CartLine],
    address: str | None,
    tax_rate: Decimal = TAX_RATE,
    free_city: str = FREE_SHIPPING_CITY,
    flat_fee: Decimal = SHIPPING_FLAT_FEE,
) -> CartTotals:
    subtotal = subtotal_of(lines)
    tax = subtotal * to_decimal(tax_rate)
    shipping = shipping_for(address, free_city, flat_fee)
    return CartTotals(subtotal=subtotal, tax=tax, shipping=shipping, total=subtotal + tax + shipping)
