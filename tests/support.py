import json

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.data import models  # noqa: F401
from storefront.data.database import Base
from storefront.domain.roles import Role
from storefront.domain.schemas import UserCreate
from storefront.services.auth_service import AuthService

BASE_URL = "http://api.test"

USER = {
    "id": 1,
    "name": "Asha",
    "businessName": "Asha Textiles",
    "gstin": None,
    "email": "asha@example.com",
    "phoneNumber": "9876543210",
    "address": "12 MG Road, Pune",
    "role": "customer",
    "createdAt": None,
}

ADMIN = {**USER, "id": 2, "name": "Ravi", "email": "ravi@example.com", "phoneNumber": "9000000002", "role": "admin"}

PRODUCT = {
    "id": 7,
    "name": "Cotton Kurta",
    "description": None,
    "sku": "KRT-7",
    "price": 500.0,
    "stock": 40,
    "images": ["kurta.jpg"],
    "categoryId": 1,
    "category": None,
}

CART = {
    "items": [{"id": 3, "product": PRODUCT, "quantity": 2, "lineTotal": 1000.0}],
    "totals": {"subtotal": 1000.0, "tax": 180.0, "shipping": 100.0, "total": 1280.0},
}

EMPTY_CART = {
    "items": [],
    "totals": {"subtotal": 0.0, "tax": 0.0, "shipping": 100.0, "total": 100.0},
}

ORDER = {
    "id": 42,
    "userId": 1,
    "status": "pending payment",
    "paymentMethod": "manual_upi",
    "address": "12 MG Road, Pune",
    "subtotal": 1000.0,
    "tax": 180.0,
    "shipping": 100.0,
    "total": 1280.0,
    "createdAt": "2026-01-05T10:00:00Z",
    "items": [
        {
            "id": 1,
            "productId": 7,
            "productName": "Cotton Kurta",
            "productImage": "kurta.jpg",
            "quantity": 2,
            "price": 500.0,
        }
    ],
}


def make_session_factory():
    """SQLite w pamieci, jedno polaczenie dla wszystkich sesji."""
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    return engine, sessionmaker(bind=engine, autocommit=False, autoflush=False)


def user_create(**overrides) -> UserCreate:
    fields = {
        "name": "Asha",
        "business_name": "Asha Textiles",
        "email": "asha@example.com",
        "phone_number": "9876543210",
        "address": "12 MG Road, Pune",
        "password": "secret123",
    }
    fields.update(overrides)
    return UserCreate(**fields)


def create_admin(db, notifications=None):
    return AuthService(db, notifications).register(
        user_create(name="Ravi", email="ravi@example.com", phone_number="9000000002"),
        role=Role.ADMIN,
    )


class FakeNotifications:
    def __init__(self):
        self.orders = []
        self.resets = []

    def send_order_notification(self, user_id, order_id):
        self.orders.append((user_id, order_id))

    def send_password_reset(self, email, reset_link):
        self.resets.append((email, reset_link))


class FakeRedis:
    """Tyle redisa, ile potrzebuje SessionStore."""

    def __init__(self):
        self.data = {}

    def set(self, name, value, ex=None):
        self.data[name] = value
        return True

    def get(self, name):
        return self.data.get(name)

    def delete(self, *names):
        removed = 0
        for name in names:
            if self.data.pop(name, None) is not None:
                removed += 1
        return removed


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeResponse:
    def __init__(self, status_code=200, body=None):
        self.status_code = status_code
        self._body = body
        self.content = b"" if body is None else json.dumps(body).encode()

    def json(self):
        if self._body is None:
            raise ValueError("No JSON body")
        return self._body


class FakeSession:
    """Zamiast requests.Session: odpowiedzi ustawiane per (metoda, sciezka)."""

    def __init__(self, base_url: str = BASE_URL):
        self.base_url = base_url
        self.routes = {}
        self.calls = []
        self.closed = False

    def on(self, method, path, status=200, body=None, error=None):
        self.routes[(method, path)] = (status, body, error)

    def request(self, method, url, json=None, params=None, timeout=None):
        path = url[len(self.base_url):]
        self.calls.append((method, path, json))
        status, body, error = self.routes.get(
            (method, path),
            (404, {"message": "Not found", "code": "not_found"}, None),
        )
        if error is not None:
            raise error
        return FakeResponse(status, body)

    def count(self, method, path) -> int:
        return sum(1 for m, p, _ in self.calls if m == method and p == path)

    def close(self):
        self.closed = True
