"""Shopper load test scenarios.

Two stateful SequentialTaskSet journeys: a browser who fills a cart and walks
away, and a buyer who pays, checks out and sometimes cancels. Each journey
gets its own development token, so carts never collide across users.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import cart_quantity, checkout_data
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import ShopperState


class _ShopperJourney(SequentialTaskSet):
    def on_start(self):
        self.state = ShopperState()
        with self.client.post("/auth/token", json={}, catch_response=True, name="POST /auth/token") as resp:
            if resp.status_code == 201:
                data = resp.json()["data"]
                self.state.token = data["token"]
                self.state.customer_id = data["customer_id"]
            else:
                resp.failure(f"Token failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    def _browse(self):
        with self.client.get(
            "/products",
            params={"in_stock": "true", "limit": 24, "page": random.randint(1, 3)},
            catch_response=True,
            name="GET /products",
        ) as resp:
            if resp.status_code == 200:
                self.state.product_ids = [p["id"] for p in resp.json()["data"]["products"]]
            else:
                resp.failure(f"Browse failed: {resp.status_code} — {extract_error_detail(resp)}")

    def _add_to_cart(self, lines):
        for product_id in random.sample(self.state.product_ids, min(lines, len(self.state.product_ids))):
            with self.client.post(
                "/cart/add",
                json={"product_id": product_id, "quantity": cart_quantity()},
                headers=self.state.headers,
                catch_response=True,
                name="POST /cart/add",
            ) as resp:
                if resp.status_code == 200:
                    self.state.cart_lines += 1
                elif resp.status_code == 400:
                    # Stock ran low under load; the shopper skips the product
                    resp.success()
                else:
                    resp.failure(f"Add to cart failed: {resp.status_code} — {extract_error_detail(resp)}")


class BrowseAndAbandonJourney(_ShopperJourney):
    """Browse -> Product Detail -> Add to Cart -> View Cart -> Abandon.

    The most common storefront session. Reads dominate; the cart write is
    left behind.
    """

    @task
    def browse(self):
        self._browse()

    @task
    def view_product(self):
        if not self.state.product_ids:
            self.interrupt()
        product_id = random.choice(self.state.product_ids)
        self.client.get(f"/products/{product_id}", name="GET /products/{id}")
        self.client.get(f"/products/{product_id}/related", name="GET /products/{id}/related")
        self.client.get(f"/reviews/product/{product_id}", name="GET /reviews/product/{id}")

    @task
    def add_to_cart(self):
        self._add_to_cart(lines=random.randint(1, 2))

    @task
    def view_cart(self):
        self.client.get("/cart", headers=self.state.headers, name="GET /cart")

    @task
    def done(self):
        self.interrupt()


class CheckoutJourney(_ShopperJourney):
    """Browse -> Add to Cart -> Create Intent -> Place Order -> History -> (Cancel).

    The conversion path. Exercises the checkout Unit of Work: stock
    decrement, order snapshot and cart clearing under concurrent load.
    """

    @task
    def browse(self):
        self._browse()

    @task
    def add_to_cart(self):
        self._add_to_cart(lines=random.randint(1, 3))
        if not self.state.cart_lines:
            self.interrupt()

    @task
    def create_payment_intent(self):
        with self.client.post(
            "/payments/create-intent",
            json={"currency": "usd"},
            headers=self.state.headers,
            catch_response=True,
            name="POST /payments/create-intent",
        ) as resp:
            if resp.status_code == 200:
                self.state.payment_intent_id = resp.json()["data"]["payment_intent_id"]
            else:
                resp.failure(f"Create intent failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def place_order(self):
        with self.client.post(
            "/orders",
            json=checkout_data(self.state.payment_intent_id),
            headers=self.state.headers,
            catch_response=True,
            name="POST /orders",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_id = resp.json()["data"]["id"]
            elif resp.status_code in (400, 409):
                # Lost a race for the last units, or the product changed under us
                resp.success()
                self.interrupt()
            else:
                resp.failure(f"Place order failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def order_history(self):
        self.client.get("/orders", headers=self.state.headers, name="GET /orders")
        self.client.get(f"/orders/{self.state.order_id}", headers=self.state.headers, name="GET /orders/{id}")

    @task
    def maybe_cancel(self):
        if random.random() < 0.2:
            with self.client.put(
                f"/orders/{self.state.order_id}/cancel",
                json={"reason": "Changed my mind"},
                headers=self.state.headers,
                catch_response=True,
                name="PUT /orders/{id}/cancel",
            ) as resp:
                if resp.status_code != 200:
                    resp.failure(f"Cancel failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class ShopperUser(HttpUser):
    """Storefront traffic only: mostly browsing, some checkouts."""

    wait_time = between(0.5, 2.0)
    tasks = {
        BrowseAndAbandonJourney: 7,
        CheckoutJourney: 3,
    }
