"""Back-office load test scenarios.

Admins seed and restock the catalogue and move orders through fulfilment.
Their tokens carry the admin role, issued by the development token endpoint.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import product_data, restock_quantity
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import AdminState

FULFILMENT_STEPS = ("processing", "shipped", "delivered")


class _AdminJourney(SequentialTaskSet):
    def on_start(self):
        self.state = AdminState()
        with self.client.post(
            "/auth/token",
            json={"role": "admin"},
            catch_response=True,
            name="POST /auth/token (admin)",
        ) as resp:
            if resp.status_code == 201:
                self.state.token = resp.json()["data"]["token"]
            else:
                resp.failure(f"Admin token failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()


class CatalogueMaintenanceJourney(_AdminJourney):
    """Create Products -> Edit Price -> Restock -> Dashboard.

    Keeps the catalogue stocked so shopper journeys have something to buy.
    """

    @task
    def create_products(self):
        for _ in range(random.randint(1, 3)):
            with self.client.post(
                "/admin/products",
                json=product_data(),
                headers=self.state.headers,
                catch_response=True,
                name="POST /admin/products",
            ) as resp:
                if resp.status_code == 201:
                    self.state.product_ids.append(resp.json()["data"]["id"])
                else:
                    resp.failure(f"Create product failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def edit_price(self):
        if not self.state.product_ids:
            self.interrupt()
        product_id = random.choice(self.state.product_ids)
        self.client.put(
            f"/admin/products/{product_id}",
            json={"price": round(random.uniform(9.99, 999.99), 2)},
            headers=self.state.headers,
            name="PUT /admin/products/{id}",
        )

    @task
    def restock(self):
        for product_id in self.state.product_ids:
            self.client.put(
                f"/admin/products/{product_id}/stock",
                json={"quantity": restock_quantity()},
                headers=self.state.headers,
                name="PUT /admin/products/{id}/stock",
            )

    @task
    def dashboard(self):
        self.client.get("/admin/dashboard", headers=self.state.headers, name="GET /admin/dashboard")

    @task
    def done(self):
        self.interrupt()


class FulfilmentJourney(_AdminJourney):
    """List Pending Orders -> Processing -> Shipped -> Delivered."""

    @task
    def pending_orders(self):
        with self.client.get(
            "/admin/orders",
            params={"status": "pending", "limit": 10},
            headers=self.state.headers,
            catch_response=True,
            name="GET /admin/orders",
        ) as resp:
            if resp.status_code == 200:
                self.state.order_ids = [o["id"] for o in resp.json()["data"]["orders"]]
            else:
                resp.failure(f"List orders failed: {resp.status_code} — {extract_error_detail(resp)}")
        if not self.state.order_ids:
            self.interrupt()

    @task
    def fulfil(self):
        for order_id in self.state.order_ids:
            for status in FULFILMENT_STEPS:
                with self.client.put(
                    f"/admin/orders/{order_id}/status",
                    json={"status": status},
                    headers=self.state.headers,
                    catch_response=True,
                    name="PUT /admin/orders/{id}/status",
                ) as resp:
                    if resp.status_code == 400:
                        # The customer cancelled first
                        resp.success()
                        break
                    if resp.status_code != 200:
                        resp.failure(f"Status update failed: {resp.status_code} — {extract_error_detail(resp)}")
                        break

    @task
    def done(self):
        self.interrupt()


class AdminUser(HttpUser):
    """Back-office traffic only."""

    wait_time = between(2.0, 5.0)
    tasks = {
        CatalogueMaintenanceJourney: 2,
        FulfilmentJourney: 1,
    }
