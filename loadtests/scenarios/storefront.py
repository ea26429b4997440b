"""Storefront load test scenarios.

ShopperUser walks the customer journey: register, browse, fill a cart,
check out, and sometimes cancel. LastUnitUser hammers a product stocked
with a handful of units so concurrent checkouts contend for the same rows;
the expected outcome there is some 201s, then 409s, and never negative stock.
"""

import os
import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import category_data, order_data, product_data, shopper_data
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import ShopperState

ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@ecommerce.com")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "")


def admin_headers(client) -> dict:
    """Log in as the bootstrap admin; empty headers when that fails."""
    with client.post(
        "/auth/login",
        json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
        catch_response=True,
        name="POST /auth/login (admin)",
    ) as resp:
        if resp.status_code != 200:
            resp.failure(f"Admin login failed: {resp.status_code} - {extract_error_detail(resp)}")
            return {}
        return {"Authorization": f"Bearer {resp.json()['token']}"}


def seed_product(client, headers, quantity=None) -> str | None:
    with client.post(
        "/categories", json=category_data(), headers=headers, catch_response=True, name="POST /categories"
    ) as resp:
        if resp.status_code != 201:
            resp.failure(f"Create category failed: {resp.status_code} - {extract_error_detail(resp)}")
            return None
        category_id = resp.json()["id"]

    with client.post(
        "/products",
        json=product_data(category_id, quantity=quantity),
        headers=headers,
        catch_response=True,
        name="POST /products",
    ) as resp:
        if resp.status_code != 201:
            resp.failure(f"Create product failed: {resp.status_code} - {extract_error_detail(resp)}")
            return None
        return resp.json()["id"]


class ShopperJourney(SequentialTaskSet):
    """Register -> Browse -> Add to cart -> Check out -> View orders -> (Cancel)."""

    def on_start(self):
        self.state = ShopperState()

    @task
    def register(self):
        with self.client.post(
            "/auth/register", json=shopper_data(), catch_response=True, name="POST /auth/register"
        ) as resp:
            if resp.status_code == 201:
                body = resp.json()
                self.state.user_id = body["user_id"]
                self.state.token = body["token"]
            else:
                resp.failure(f"Register failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def browse(self):
        with self.client.get("/products", catch_response=True, name="GET /products") as resp:
            if resp.status_code != 200:
                resp.failure(f"Browse failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()
                return
            in_stock = [product["id"] for product in resp.json() if product["in_stock"]]

        if not in_stock:
            self.interrupt()
            return
        self.state.product_ids = random.sample(in_stock, k=min(len(in_stock), random.randint(1, 3)))

    @task
    def fill_cart(self):
        for product_id in self.state.product_ids:
            with self.client.post(
                f"/cart/{self.state.user_id}/items",
                json={"product_id": product_id, "quantity": random.randint(1, 2)},
                headers=self.state.headers,
                catch_response=True,
                name="POST /cart/{user_id}/items",
            ) as resp:
                if resp.status_code != 200:
                    resp.failure(f"Add to cart failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def checkout(self):
        with self.client.post(
            "/orders", json=order_data(), headers=self.state.headers, catch_response=True, name="POST /orders"
        ) as resp:
            if resp.status_code == 201:
                self.state.order_ids.append(resp.json()["id"])
            elif resp.status_code == 409:
                # Sold out between browse and checkout
                resp.success()
            else:
                resp.failure(f"Checkout failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def view_orders(self):
        self.client.get("/orders", headers=self.state.headers, name="GET /orders")

    @task
    def maybe_cancel(self):
        if not self.state.order_ids or random.random() > 0.3:
            return
        with self.client.patch(
            f"/orders/{self.state.order_ids[-1]}/cancel",
            headers=self.state.headers,
            catch_response=True,
            name="PATCH /orders/{id}/cancel",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Cancel failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class ShopperUser(HttpUser):
    """Customer traffic; needs products seeded by an admin."""

    tasks = [ShopperJourney]
    wait_time = between(1, 3)
    weight = 10

    def on_start(self):
        headers = admin_headers(self.client)
        if headers:
            seed_product(self.client, headers)


class LastUnitUser(HttpUser):
    """Many buyers, few units: exercises optimistic locking on product stock."""

    wait_time = between(0.1, 0.5)
    weight = 1

    def on_start(self):
        self.admin = admin_headers(self.client)
        self.product_id = seed_product(self.client, self.admin, quantity=3) if self.admin else None

    @task
    def race_for_stock(self):
        if not self.product_id:
            return

        buyers = []
        for _ in range(4):
            with self.client.post(
                "/auth/register", json=shopper_data(), catch_response=True, name="POST /auth/register"
            ) as resp:
                if resp.status_code != 201:
                    resp.failure(f"Register failed: {resp.status_code} - {extract_error_detail(resp)}")
                    continue
                body = resp.json()
                buyers.append((body["user_id"], {"Authorization": f"Bearer {body['token']}"}))

        for user_id, headers in buyers:
            self.client.post(
                f"/cart/{user_id}/items",
                json={"product_id": self.product_id, "quantity": 1},
                headers=headers,
                name="POST /cart/{user_id}/items",
            )

        for _, headers in buyers:
            with self.client.post(
                "/orders", headers=headers, catch_response=True, name="POST /orders (contended)"
            ) as resp:
                if resp.status_code in (201, 409):
                    resp.success()
                else:
                    resp.failure(f"Contended checkout: {resp.status_code} - {extract_error_detail(resp)}")

        with self.client.get(
            f"/products/{self.product_id}", catch_response=True, name="GET /products/{id}"
        ) as resp:
            if resp.status_code == 200 and resp.json()["quantity"] < 0:
                resp.failure("Stock went negative")

        # Restock for the next round
        self.client.put(
            f"/products/{self.product_id}",
            json={"quantity": 3},
            headers=self.admin,
            name="PUT /products/{id}",
        )
