# storefront/domain/schemas.py
from datetime import datetime
from decimal import Decimal
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, PlainSerializer, field_validator
from pydantic.alias_generators import to_camel

from storefront.domain.errors import StorefrontError
from storefront.domain.order_status import OrderStatus
from storefront.domain.pricing import quantize_money
from storefront.domain.roles import Role

# kwoty: pelna precyzja w srodku, 2 miejsca w JSON-ie
Money = Annotated[
    Decimal,
    PlainSerializer(lambda v: float(quantize_money(v)), return_type=float, when_used="json"),
]


class ApiModel(BaseModel):
    """JSON w camelCase (jak front), w Pythonie snake_case."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageOut(ApiModel):
    message: str


# ---------- users / auth ----------

class UserCreate(ApiModel):
    """Schema rejestracji."""

    name: str = Field(..., min_length=1, max_length=100)
    business_name: str = Field(..., min_length=1, max_length=200)
    gstin: Optional[str] = Field(None, max_length=15)
    email: EmailStr
    phone_number: str = Field(..., min_length=6, max_length=20)
    address: str = Field(..., min_length=1)
    password: str = Field(..., min_length=6)


class UserUpdate(ApiModel):
    """Edycja profilu - wszystkie pola opcjonalne."""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    business_name: Optional[str] = Field(None, min_length=1, max_length=200)
    gstin: Optional[str] = Field(None, max_length=15)
    phone_number: Optional[str] = Field(None, min_length=6, max_length=20)
    address: Optional[str] = Field(None, min_length=1)


class UserRead(ApiModel):
    id: int
    name: str
    business_name: str
    gstin: Optional[str] = None
    email: EmailStr
    phone_number: str
    address: str
    role: Role
    created_at: Optional[datetime] = None

    @field_validator("role", mode="before")
    @classmethod
    def _parse_role(cls, value):
        return Role.parse(value)

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


class LoginIn(ApiModel):
    identifier: str = Field(..., min_length=1, description="Email albo numer telefonu")
    password: str = Field(..., min_length=1)


class ForgotPasswordIn(ApiModel):
    identifier: str = Field(..., min_length=1)


class ResetPasswordIn(ApiModel):
    token: str = Field(..., min_length=1)
    password: str = Field(..., min_length=6)


class PasswordChangeIn(ApiModel):
    current_password: str
    new_password: str = Field(..., min_length=6)


# ---------- catalog ----------

class ProductVariant(ApiModel):
    """Jedna cecha wariantu, np. Size = XL."""

    name: str = Field(..., min_length=1, max_length=50)
    value: str = Field(..., min_length=1, max_length=50)


class CategoryCreate(ApiModel):
    name: str = Field(..., min_length=1, max_length=100)
    slug: Optional[str] = Field(None, max_length=120)
    description: Optional[str] = None


class CategoryUpdate(ApiModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    slug: Optional[str] = Field(None, min_length=1, max_length=120)
    description: Optional[str] = None


class CategoryOut(ApiModel):
    id: int
    name: str
    slug: str
    description: Optional[str] = None


class ProductCreate(ApiModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    sku: str = Field(..., min_length=1, max_length=64)
    price: Decimal = Field(..., ge=0)
    stock: int = Field(0, ge=0)
    images: List[str] = Field(default_factory=list)
    category_id: int = Field(..., gt=0)
    variants: List[ProductVariant] = Field(default_factory=list)


class ProductUpdate(ApiModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    sku: Optional[str] = Field(None, min_length=1, max_length=64)
    price: Optional[Decimal] = Field(None, ge=0)
    stock: Optional[int] = Field(None, ge=0)
    images: Optional[List[str]] = None
    category_id: Optional[int] = Field(None, gt=0)
    variants: Optional[List[ProductVariant]] = None


class ProductOut(ApiModel):
    id: int
    name: str
    description: Optional[str] = None
    sku: str
    price: Money
    stock: int
    images: List[str] = Field(default_factory=list)
    category_id: int
    variants: Optional[List[ProductVariant]] = None
    category: Optional[CategoryOut] = None


# ---------- cart / watchlist ----------

class CartItemIn(ApiModel):
    """Dodanie produktu do koszyka."""

    product_id: int = Field(..., gt=0)
    quantity: int = Field(1, gt=0)
    variant_info: Optional[List[ProductVariant]] = None


class CartItemUpdate(ApiModel):
    """Nowa ilosc; 0 usuwa pozycje."""

    quantity: int = Field(..., ge=0)


class CartLineOut(ApiModel):
    id: int
    product: ProductOut
    quantity: int
    variant_info: Optional[List[ProductVariant]] = None
    line_total: Money


class TotalsOut(ApiModel):
    subtotal: Money
    tax: Money
    shipping: Money
    total: Money


class CartOut(ApiModel):
    items: List[CartLineOut]
    totals: TotalsOut


class WatchlistIn(ApiModel):
    product_id: int = Field(..., gt=0)


class WatchlistItemOut(ApiModel):
    id: int
    product: ProductOut


# ---------- orders ----------

class OrderItemOut(ApiModel):
    id: int
    product_id: Optional[int] = None
    product_name: str
    product_image: Optional[str] = None
    quantity: int
    price: Money
    variant_info: Optional[List[ProductVariant]] = None


class OrderOut(ApiModel):
    id: int
    user_id: int
    status: OrderStatus
    payment_method: str
    address: str
    subtotal: Money
    tax: Money
    shipping: Money
    total: Money
    created_at: datetime
    items: List[OrderItemOut] = Field(default_factory=list)

    @field_validator("status", mode="before")
    @classmethod
    def _parse_status(cls, value):
        # "Pending Payment", "pending_payment" itp.
        try:
            return OrderStatus.parse(value)
        except StorefrontError as e:
            raise ValueError(e.message) from None


class OrderStatusIn(ApiModel):
    status: str = Field(..., min_length=1)


class UpiSettings(ApiModel):
    upi_id: str = ""
    qr_code_url: str = ""


# ---------- banners ----------

class BannerCreate(ApiModel):
    type: str = Field(..., min_length=1, max_length=40, description="Miejsce, np. hero")
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    image: str = Field(..., min_length=1)
    mobile_image: Optional[str] = None
    link: Optional[str] = None
    active: bool = True
    position: int = 0


class BannerUpdate(ApiModel):
    type: Optional[str] = Field(None, min_length=1, max_length=40)
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    image: Optional[str] = Field(None, min_length=1)
    mobile_image: Optional[str] = None
    link: Optional[str] = None
    active: Optional[bool] = None
    position: Optional[int] = None


class BannerOut(ApiModel):
    id: int
    type: str
    title: str
    description: Optional[str] = None
    image: str
    mobile_image: Optional[str] = None
    link: Optional[str] = None
    active: bool
    position: int
