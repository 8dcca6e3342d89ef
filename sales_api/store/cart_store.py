import logging
import threading
from typing import Mapping

from sales_api.store.cart_models import CartLine
from sales_api.store.product_models import ProductEntity, is_orderable

logger = logging.getLogger(__name__)


class CartStore:
    """
    Cart lines of one session, keyed by product id.

    Every operation is serialized on the store lock. Mutations never raise:
    a request that breaks a precondition leaves the cart unchanged and the
    method returns False.
    """

    def __init__(self) -> None:
        self._lines = dict[str, CartLine]()
        self._lock = threading.RLock()

    @staticmethod
    def from_snapshot(snapshot: Mapping[str, int]) -> "CartStore":
        store = CartStore()
        for product_id, quantity in snapshot.items():
            if quantity >= 1:
                store._lines[product_id] = CartLine(product_id, quantity)
        return store

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    def __len__(self) -> int:
        with self._lock:
            return len(self._lines)

    def is_in_cart(self, product_id: str) -> bool:
        with self._lock:
            return product_id in self._lines

    def quantity_of(self, product_id: str) -> int:
        with self._lock:
            line = self._lines.get(product_id)
            return line.quantity if line is not None else 0

    def lines(self) -> list[CartLine]:
        with self._lock:
            return [CartLine(line.product_id, line.quantity) for line in self._lines.values()]

    def snapshot(self) -> dict[str, int]:
        with self._lock:
            return {line.product_id: line.quantity for line in self._lines.values()}

    def add_item(self, product: ProductEntity) -> bool:
        with self._lock:
            if not is_orderable(product.info):
                logger.debug("Add ignored, product %s is not orderable", product.id)
                return False
            if product.id in self._lines:
                return False
            self._lines[product.id] = CartLine(product.id, 1)
            return True

    def increase_quantity(self, product_id: str, max_quantity: int) -> bool:
        # max_quantity must be the current stock count, not a cached one
        with self._lock:
            line = self._lines.get(product_id)
            if line is None or line.quantity >= max_quantity:
                logger.debug("Increase ignored for %s (max %d)", product_id, max_quantity)
                return False
            line.quantity += 1
            return True

    def decrease_quantity(self, product_id: str) -> bool:
        with self._lock:
            line = self._lines.get(product_id)
            if line is None or line.quantity <= 1:
                logger.debug("Decrease ignored for %s", product_id)
                return False
            line.quantity -= 1
            return True

    def remove_item(self, product_id: str) -> bool:
        with self._lock:
            return self._lines.pop(product_id, None) is not None

    def clamp_quantity(self, product_id: str, stock_count: int) -> tuple[int, int] | None:
        """
        Bring one line back within ``stock_count``; a non-positive stock drops the line.
        Returns ``(old, new)`` quantities when the line changed, otherwise None.
        """
        with self._lock:
            line = self._lines.get(product_id)
            if line is None:
                return None
            if stock_count <= 0:
                del self._lines[product_id]
                return line.quantity, 0
            if line.quantity > stock_count:
                old = line.quantity
                line.quantity = stock_count
                return old, stock_count
            return None
