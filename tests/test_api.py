import unittest

from fastapi.testclient import TestClient

from storefront.api.deps import get_notification_service, get_session_store
from storefront.data.database import get_db
from storefront.main import create_app
from storefront.services.session_store import SessionStore

from tests.support import FakeNotifications, FakeRedis, create_admin, make_session_factory

REGISTRATION = {
    "name": "Asha",
    "businessName": "Asha Textiles",
    "gstin": "24AAACA1234A1Z5",
    "email": "asha@example.com",
    "phoneNumber": "9876543210",
    "address": "12 MG Road, Pune",
    "password": "secret123",
}


class ApiTestCase(unittest.TestCase):
    def setUp(self):
        self.engine, self.Session = make_session_factory()
        self.redis = FakeRedis()
        self.notifications = FakeNotifications()
        store = SessionStore(client=self.redis)

        def override_get_db():
            db = self.Session()
            try:
                yield db
            finally:
                db.close()

        app = create_app()
        app.dependency_overrides[get_db] = override_get_db
        app.dependency_overrides[get_session_store] = lambda: store
        app.dependency_overrides[get_notification_service] = lambda: self.notifications
        self.client = TestClient(app)

    def tearDown(self):
        self.client.close()
        self.engine.dispose()

    def register_and_login(self, **overrides):
        payload = {**REGISTRATION, **overrides}
        self.assertEqual(self.client.post("/api/auth/register", json=payload).status_code, 201)
        return self.login(payload["email"], payload["password"])

    def login(self, identifier, password="secret123"):
        response = self.client.post("/api/auth/login", json={"identifier": identifier, "password": password})
        self.assertEqual(response.status_code, 200, response.text)
        return response.json()

    def login_admin(self):
        db = self.Session()
        try:
            create_admin(db)
        finally:
            db.close()
        return self.login("ravi@example.com")


class AuthApiTestCase(ApiTestCase):
    def test_health(self):
        self.assertEqual(self.client.get("/api/health").json(), {"ok": True})

    def test_register_hides_password(self):
        response = self.client.post("/api/auth/register", json=REGISTRATION)
        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(body["businessName"], "Asha Textiles")
        self.assertEqual(body["role"], "customer")
        self.assertNotIn("password", body)

    def test_invalid_registration_is_a_validation_error(self):
        response = self.client.post("/api/auth/register", json={"email": "not-an-email"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["code"], "validation_error")

    def test_bad_credentials(self):
        self.client.post("/api/auth/register", json=REGISTRATION)
        response = self.client.post("/api/auth/login", json={"identifier": "asha@example.com", "password": "nope"})

        self.assertEqual(response.status_code, 401)
        self.assertEqual(
            response.json(),
            {"message": "Incorrect email or password.", "code": "authentication_failed"},
        )

    def test_session_lifecycle(self):
        self.assertEqual(self.client.get("/api/auth/me").status_code, 401)

        user = self.register_and_login()
        self.assertEqual(len(self.redis.data), 1)
        me = self.client.get("/api/auth/me")
        self.assertEqual(me.status_code, 200)
        self.assertEqual(me.json()["id"], user["id"])

        response = self.client.post("/api/auth/logout")
        self.assertEqual(response.json(), {"message": "Logged out successfully"})
        self.assertEqual(self.redis.data, {})
        self.assertEqual(self.client.get("/api/auth/me").status_code, 401)

    def test_login_by_phone(self):
        self.client.post("/api/auth/register", json=REGISTRATION)
        self.assertEqual(self.login("9876543210")["email"], "asha@example.com")

    def test_password_reset_flow(self):
        self.client.post("/api/auth/register", json=REGISTRATION)

        response = self.client.post("/api/auth/forgot-password", json={"identifier": "asha@example.com"})
        self.assertEqual(response.status_code, 200)
        unknown = self.client.post("/api/auth/forgot-password", json={"identifier": "ghost@example.com"})
        self.assertEqual(unknown.json(), response.json())

        token = self.notifications.resets[0][1].split("token=", 1)[1]
        reset = self.client.post("/api/auth/reset-password", json={"token": token, "password": "brand-new1"})
        self.assertEqual(reset.status_code, 200)

        reused = self.client.post("/api/auth/reset-password", json={"token": token, "password": "again123"})
        self.assertEqual(reused.status_code, 400)
        self.assertEqual(reused.json()["code"], "invalid_token")

        self.login("asha@example.com", "brand-new1")

    def test_user_list_is_admin_only(self):
        self.register_and_login()
        response = self.client.get("/api/users")
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["code"], "forbidden")

        self.login_admin()
        self.assertEqual(len(self.client.get("/api/users").json()), 2)

    def test_profile_update(self):
        self.register_and_login()
        response = self.client.patch("/api/users/me", json={"address": "Satellite, Ahmedabad"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["address"], "Satellite, Ahmedabad")


class CheckoutApiTestCase(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.login_admin()
        category = self.client.post("/api/categories", json={"name": "Kurtas"})
        self.assertEqual(category.status_code, 201, category.text)
        product = self.client.post(
            "/api/products",
            json={
                "name": "Cotton Kurta",
                "sku": "KRT-1",
                "price": 500,
                "stock": 40,
                "images": ["kurta.jpg"],
                "variants": [{"name": "Size", "value": "M"}, {"name": "Size", "value": "XL"}],
                "categoryId": category.json()["id"],
            },
        )
        self.assertEqual(product.status_code, 201, product.text)
        self.assertEqual(len(product.json()["variants"]), 2)
        self.product_id = product.json()["id"]
        self.client.post("/api/auth/logout")

    def test_anonymous_cart_requires_login(self):
        response = self.client.get("/api/cart")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["code"], "authentication_failed")

    def test_checkout(self):
        self.register_and_login()

        cart = self.client.post("/api/cart", json={"productId": self.product_id, "quantity": 2})
        self.assertEqual(cart.status_code, 201)
        self.assertEqual(
            cart.json()["totals"],
            {"subtotal": 1000.0, "tax": 180.0, "shipping": 100.0, "total": 1280.0},
        )

        order = self.client.post("/api/orders")
        self.assertEqual(order.status_code, 201, order.text)
        body = order.json()
        self.assertEqual(body["status"], "pending payment")
        self.assertEqual(body["paymentMethod"], "manual_upi")
        self.assertEqual(body["total"], 1280.0)
        self.assertEqual(body["items"][0]["productName"], "Cotton Kurta")
        self.assertEqual(self.notifications.orders, [(body["userId"], body["id"])])

        self.assertEqual(self.client.get("/api/cart").json()["items"], [])
        self.assertEqual([o["id"] for o in self.client.get("/api/orders").json()], [body["id"]])
        self.assertEqual(self.client.get(f"/api/orders/{body['id']}").json()["items"][0]["quantity"], 2)

        again = self.client.post("/api/orders")
        self.assertEqual(again.status_code, 400)
        self.assertEqual(again.json()["code"], "empty_cart")

    def test_variant_lines_reach_the_order(self):
        self.register_and_login()
        xl = [{"name": "Size", "value": "XL"}]
        self.client.post("/api/cart", json={"productId": self.product_id, "quantity": 1, "variantInfo": xl})
        cart = self.client.post("/api/cart", json={"productId": self.product_id, "quantity": 2, "variantInfo": xl})
        self.assertEqual([(i["quantity"], i["variantInfo"]) for i in cart.json()["items"]], [(3, xl)])

        bad = self.client.post(
            "/api/cart",
            json={"productId": self.product_id, "variantInfo": [{"name": "Size", "value": "S"}]},
        )
        self.assertEqual(bad.status_code, 400)
        self.assertEqual(bad.json()["code"], "validation_error")

        order = self.client.post("/api/orders").json()
        self.assertEqual(order["items"][0]["variantInfo"], xl)

    def test_cart_line_update_and_remove(self):
        self.register_and_login()
        cart = self.client.post("/api/cart", json={"productId": self.product_id}).json()
        item_id = cart["items"][0]["id"]

        updated = self.client.put(f"/api/cart/{item_id}", json={"quantity": 5}).json()
        self.assertEqual(updated["items"][0]["quantity"], 5)
        self.assertEqual(updated["items"][0]["lineTotal"], 2500.0)

        removed = self.client.delete(f"/api/cart/{item_id}").json()
        self.assertEqual(removed["items"], [])

        missing = self.client.delete(f"/api/cart/{item_id}")
        self.assertEqual(missing.status_code, 404)

    def test_status_changes_are_admin_only(self):
        self.register_and_login()
        self.client.post("/api/cart", json={"productId": self.product_id, "quantity": 1})
        order_id = self.client.post("/api/orders").json()["id"]

        denied = self.client.put(f"/api/orders/{order_id}/status", json={"status": "verified"})
        self.assertEqual(denied.status_code, 403)

        self.login("ravi@example.com")
        verified = self.client.put(f"/api/orders/{order_id}/status", json={"status": "Verified"})
        self.assertEqual(verified.json()["status"], "verified")

        backwards = self.client.put(f"/api/orders/{order_id}/status", json={"status": "pending payment"})
        self.assertEqual(backwards.status_code, 400)
        self.assertEqual(backwards.json()["code"], "validation_error")

    def test_watchlist(self):
        self.register_and_login()
        added = self.client.post("/api/watchlist", json={"productId": self.product_id})
        self.assertEqual(added.status_code, 201)

        duplicate = self.client.post("/api/watchlist", json={"productId": self.product_id})
        self.assertEqual(duplicate.status_code, 409)
        self.assertEqual(duplicate.json()["code"], "conflict")

        self.assertEqual(len(self.client.get("/api/watchlist").json()), 1)

    def test_catalog_is_public(self):
        products = self.client.get("/api/products").json()
        self.assertEqual(products[0]["price"], 500.0)
        self.assertEqual(products[0]["category"]["slug"], "kurtas")
        self.assertEqual(len(self.client.get("/api/products/category-slug/kurtas").json()), 1)
        self.assertEqual(self.client.get("/api/products/999").status_code, 404)

    def test_upi_settings(self):
        self.assertEqual(self.client.get("/api/settings/upi").json(), {"upiId": "", "qrCodeUrl": ""})

        self.assertEqual(
            self.client.put("/api/settings/upi", json={"upiId": "x@upi", "qrCodeUrl": ""}).status_code,
            401,
        )

        self.login("ravi@example.com")
        saved = self.client.put("/api/settings/upi", json={"upiId": "shop@okaxis", "qrCodeUrl": "qr.png"})
        self.assertEqual(saved.json(), {"upiId": "shop@okaxis", "qrCodeUrl": "qr.png"})
        self.assertEqual(self.client.get("/api/settings/upi").json()["upiId"], "shop@okaxis")

    def test_banners(self):
        self.login("ravi@example.com")
        for position, title in ((2, "Festive"), (1, "Summer")):
            response = self.client.post(
                "/api/banners",
                json={"type": "hero", "title": title, "image": f"{title}.jpg", "position": position},
            )
            self.assertEqual(response.status_code, 201, response.text)

        titles = [b["title"] for b in self.client.get("/api/banners", params={"type": "hero"}).json()]
        self.assertEqual(titles, ["Summer", "Festive"])
        self.assertEqual(self.client.get("/api/banners", params={"type": "sidebar"}).json(), [])


if __name__ == "__main__":
    unittest.main()
