from __future__ import annotations

import random

import pytest

from sales_api.store import reconciliation
from sales_api.store.cart_store import CartStore
from sales_api.store.product_models import PatchProductInfo, ProductInfo
from sales_api.store.product_queries import ProductCatalog


@pytest.fixture()
def catalog() -> ProductCatalog:
	catalog = ProductCatalog()
	catalog.upsert("P1", ProductInfo(name="Drill", price=100.0, stock_count=5))
	catalog.upsert("P2", ProductInfo(name="Saw", price=None, stock_count=10))
	catalog.upsert("P3", ProductInfo(name="Hammer", price=15.0, stock_count=2))
	return catalog


def test_orderability_gates_add(catalog: ProductCatalog) -> None:
	cart = CartStore()
	p2 = catalog.get_one("P2")
	assert not reconciliation.can_add(cart, p2)
	assert not reconciliation.add(cart, p2)
	assert not cart.is_in_cart("P2")


def test_controls_follow_cart_state(catalog: ProductCatalog) -> None:
	cart = CartStore()
	p1 = catalog.get_one("P1")

	assert reconciliation.can_add(cart, p1)
	assert not reconciliation.can_increase(cart, p1)
	assert not reconciliation.can_decrease(cart, p1)

	reconciliation.add(cart, p1)
	assert not reconciliation.can_add(cart, p1)
	assert reconciliation.can_increase(cart, p1)
	assert not reconciliation.can_decrease(cart, p1)

	reconciliation.increase(cart, p1)
	assert reconciliation.can_decrease(cart, p1)


def test_add_increase_decrease_scenario(catalog: ProductCatalog) -> None:
	cart = CartStore()
	p1 = catalog.get_one("P1")

	reconciliation.add(cart, p1)
	assert cart.snapshot() == {"P1": 1}

	for _ in range(4):
		reconciliation.increase(cart, p1)
	assert cart.quantity_of("P1") == 5

	assert not reconciliation.increase(cart, p1)
	assert cart.quantity_of("P1") == 5

	for _ in range(3):
		reconciliation.decrease(cart, p1)
	assert cart.quantity_of("P1") == 2

	for _ in range(2):
		reconciliation.decrease(cart, p1)
	assert cart.quantity_of("P1") == 1
	assert cart.is_in_cart("P1")


def test_increase_uses_current_stock(catalog: ProductCatalog) -> None:
	cart = CartStore()
	reconciliation.add(cart, catalog.get_one("P1"))
	catalog.patch("P1", PatchProductInfo(stock_count=1))

	assert not reconciliation.increase(cart, catalog.get_one("P1"))
	assert cart.quantity_of("P1") == 1


def test_stock_drop_clamps_quantity(catalog: ProductCatalog) -> None:
	cart = CartStore.from_snapshot({"P1": 5})
	catalog.patch("P1", PatchProductInfo(stock_count=1))

	adjustments = reconciliation.reconcile(cart, catalog)

	assert cart.snapshot() == {"P1": 1}
	assert len(adjustments) == 1
	assert (adjustments[0].old_quantity, adjustments[0].new_quantity) == (5, 1)
	assert not adjustments[0].removed


def test_stock_drop_to_zero_removes_line(catalog: ProductCatalog) -> None:
	cart = CartStore.from_snapshot({"P1": 3, "P3": 1})
	catalog.patch("P1", PatchProductInfo(stock_count=0))

	adjustments = reconciliation.reconcile(cart, catalog)

	assert cart.snapshot() == {"P3": 1}
	assert [a.product_id for a in adjustments] == ["P1"]
	assert adjustments[0].removed


def test_deleted_product_is_removed_from_cart(catalog: ProductCatalog) -> None:
	cart = CartStore.from_snapshot({"P3": 2})
	catalog.delete("P3")

	reconciliation.reconcile(cart, catalog)

	assert not cart.is_in_cart("P3")


def test_reconcile_within_stock_is_noop(catalog: ProductCatalog) -> None:
	cart = CartStore.from_snapshot({"P1": 2})
	assert reconciliation.reconcile(cart, catalog) == []
	assert cart.snapshot() == {"P1": 2}


def test_reconcile_all_reports_changed_carts(catalog: ProductCatalog) -> None:
	first = CartStore.from_snapshot({"P1": 4})
	second = CartStore.from_snapshot({"P3": 1})
	catalog.patch("P1", PatchProductInfo(stock_count=2))

	changed = reconciliation.reconcile_all([(0, first), (1, second)], catalog)

	assert list(changed) == [0]
	assert first.quantity_of("P1") == 2


def test_quantity_stays_within_stock_under_random_actions(catalog: ProductCatalog) -> None:
	rng = random.Random(42)
	cart = CartStore()

	for _ in range(500):
		product_id = rng.choice(["P1", "P2", "P3"])
		action = rng.choice(["add", "increase", "decrease", "remove", "restock"])
		product = catalog.get_one(product_id)

		if action == "add":
			reconciliation.add(cart, product)
		elif action == "increase":
			reconciliation.increase(cart, product)
		elif action == "decrease":
			reconciliation.decrease(cart, product)
		elif action == "remove":
			reconciliation.remove(cart, product_id)
		else:
			catalog.patch(product_id, PatchProductInfo(stock_count=rng.randint(-1, 6)))
			reconciliation.reconcile(cart, catalog)

		for line in cart.lines():
			stock_count = catalog.get_one(line.product_id).info.stock_count
			assert 1 <= line.quantity <= stock_count


def test_unpriced_line_cannot_change_quantity(catalog: ProductCatalog) -> None:
	cart = CartStore()
	reconciliation.add(cart, catalog.get_one("P1"))
	reconciliation.increase(cart, catalog.get_one("P1"))
	catalog.patch("P1", PatchProductInfo(price=0.0))
	p1 = catalog.get_one("P1")

	assert not reconciliation.can_increase(cart, p1)
	assert not reconciliation.can_decrease(cart, p1)
	assert not reconciliation.increase(cart, p1)
	assert not reconciliation.decrease(cart, p1)
	assert cart.quantity_of("P1") == 2

	assert reconciliation.remove(cart, "P1")
	assert not cart.is_in_cart("P1")
