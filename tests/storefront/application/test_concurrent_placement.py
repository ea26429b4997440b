"""Application tests for concurrent writers of stock."""

import threading
from unittest.mock import patch

import pytest
from protean import current_domain
from protean.exceptions import ExpectedVersionError

from storefront.domain import storefront
from storefront.exceptions import StockUnavailableError
from storefront.order.order import Order
from storefront.order.placement import place_order
from storefront.product.management import get_product
from storefront.product.product import Product


class TestStaleWrites:
    def test_stale_product_cannot_be_saved(self, make_product):
        product_id = make_product(quantity=1)
        repo = current_domain.repository_for(Product)
        first = repo.get(product_id)
        second = repo.get(product_id)

        first.withdraw_stock(1)
        repo.add(first)

        second.withdraw_stock(1)
        with pytest.raises(ExpectedVersionError):
            repo.add(second)

        assert get_product(product_id).quantity == 0

    def test_later_buyer_of_last_unit_is_refused(self, make_product, fill_cart):
        product_id = make_product(quantity=1)
        fill_cart("buyer-1", (product_id, 1))
        fill_cart("buyer-2", (product_id, 1))

        place_order("buyer-1")
        with pytest.raises(StockUnavailableError):
            place_order("buyer-2")

        assert get_product(product_id).quantity == 0


class TestSimultaneousPlacement:
    def test_only_one_of_two_racing_buyers_gets_the_last_unit(self, make_product, fill_cart):
        product_id = make_product(quantity=1)
        fill_cart("buyer-1", (product_id, 1))
        fill_cart("buyer-2", (product_id, 1))

        # Both buyers try to meet inside the stock check, after their reads
        barrier = threading.Barrier(2)
        real_can_supply = Product.can_supply

        def can_supply_at_barrier(product, quantity):
            try:
                barrier.wait(timeout=0.5)
            except threading.BrokenBarrierError:
                pass
            return real_can_supply(product, quantity)

        outcomes = {}

        def buy(user_id):
            with storefront.domain_context():
                try:
                    outcomes[user_id] = place_order(user_id)
                except Exception as exc:
                    outcomes[user_id] = exc

        with patch.object(Product, "can_supply", can_supply_at_barrier):
            threads = [threading.Thread(target=buy, args=(user_id,)) for user_id in ("buyer-1", "buyer-2")]
            for thread in threads:
                thread.start()
            for thread in threads:
                thread.join(timeout=10)

        placed = [value for value in outcomes.values() if not isinstance(value, Exception)]
        refused = [value for value in outcomes.values() if isinstance(value, StockUnavailableError)]
        assert len(placed) == 1
        assert len(refused) == 1
        assert get_product(product_id).quantity == 0
        assert current_domain.repository_for(Order)._dao.query.all().total == 1


class TestRetry:
    def test_retries_after_version_conflict(self, make_product, fill_cart):
        fill_cart("user-001", (make_product(), 1))
        real_process = current_domain.process
        calls = []

        def flaky_process(command, asynchronous=True):
            calls.append(command)
            if len(calls) == 1:
                raise ExpectedVersionError("product changed underneath")
            return real_process(command, asynchronous=asynchronous)

        with patch.object(storefront, "process", side_effect=flaky_process):
            order_id = place_order("user-001")

        assert order_id
        assert len(calls) == 2

    def test_gives_up_after_max_attempts(self):
        with patch.object(
            storefront,
            "process",
            side_effect=ExpectedVersionError("always stale"),
        ) as process:
            with pytest.raises(ExpectedVersionError):
                place_order("user-001", max_attempts=3)

        assert process.call_count == 3
