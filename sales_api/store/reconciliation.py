import logging
from typing import Iterable

from sales_api.store.cart_models import CartLineAdjustment
from sales_api.store.cart_store import CartStore
from sales_api.store.product_models import ProductEntity, is_orderable
from sales_api.store.product_queries import ProductCatalog

logger = logging.getLogger(__name__)


def can_add(cart: CartStore, product: ProductEntity) -> bool:
    return is_orderable(product.info) and not cart.is_in_cart(product.id)


def can_increase(cart: CartStore, product: ProductEntity) -> bool:
    return (
        is_orderable(product.info)
        and cart.is_in_cart(product.id)
        and cart.quantity_of(product.id) < product.info.stock_count
    )


def can_decrease(cart: CartStore, product: ProductEntity) -> bool:
    return is_orderable(product.info) and cart.is_in_cart(product.id) and cart.quantity_of(product.id) > 1


def add(cart: CartStore, product: ProductEntity) -> bool:
    return cart.add_item(product)


def increase(cart: CartStore, product: ProductEntity) -> bool:
    if not is_orderable(product.info):
        logger.debug("Increase ignored, product %s is not orderable", product.id)
        return False
    return cart.increase_quantity(product.id, product.info.stock_count)


def decrease(cart: CartStore, product: ProductEntity) -> bool:
    if not is_orderable(product.info):
        logger.debug("Decrease ignored, product %s is not orderable", product.id)
        return False
    return cart.decrease_quantity(product.id)


def remove(cart: CartStore, product_id: str) -> bool:
    return cart.remove_item(product_id)


def reconcile(cart: CartStore, catalog: ProductCatalog) -> list[CartLineAdjustment]:
    """
    Clamp every line to the stock currently reported by the catalog.

    A product that is no longer in the catalog counts as zero stock, so its
    line is dropped together with the ones whose stock fell to zero.
    """
    adjustments: list[CartLineAdjustment] = []
    with cart.lock:
        for line in cart.lines():
            product = catalog.get_one(line.product_id)
            stock_count = product.info.stock_count if product is not None else 0
            changed = cart.clamp_quantity(line.product_id, stock_count)
            if changed is None:
                continue
            adjustment = CartLineAdjustment(line.product_id, *changed)
            logger.info(
                "Cart line %s %s (%d -> %d)",
                adjustment.product_id,
                "removed" if adjustment.removed else "clamped",
                adjustment.old_quantity,
                adjustment.new_quantity,
            )
            adjustments.append(adjustment)
    return adjustments


def reconcile_all(
    carts: Iterable[tuple[int, CartStore]],
    catalog: ProductCatalog,
) -> dict[int, list[CartLineAdjustment]]:
    changed = dict[int, list[CartLineAdjustment]]()
    for cart_id, cart in carts:
        adjustments = reconcile(cart, catalog)
        if adjustments:
            changed[cart_id] = adjustments
    return changed
