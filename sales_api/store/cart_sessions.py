import logging
import threading
from typing import Iterator

from sales_api.store.cart_repository import SqlCartRepository
from sales_api.store.cart_store import CartStore
from sales_api.store.id_generator import int_id_generator

logger = logging.getLogger(__name__)


class CartSessions:
    """
    Owns one CartStore per session from open() until close().

    With a repository attached, carts are written through on save() and
    sessions unknown to this process are looked up there.
    """

    def __init__(self, repository: SqlCartRepository | None = None) -> None:
        self._carts = dict[int, CartStore]()
        self._repository = repository
        self._lock = threading.Lock()

        start = 0
        if repository is not None:
            last = repository.max_id()
            if last is not None:
                start = last + 1
        self._ids = int_id_generator(start)

    def open(self) -> tuple[int, CartStore]:
        with self._lock:
            _id = next(self._ids)
            cart = CartStore()
            self._carts[_id] = cart
        self.save(_id)
        logger.info("Cart session %d opened", _id)
        return _id, cart

    def get(self, id: int) -> CartStore | None:
        with self._lock:
            cart = self._carts.get(id)
            if cart is not None or self._repository is None:
                return cart

            snapshot = self._repository.load(id)
            if snapshot is None:
                return None
            cart = CartStore.from_snapshot(snapshot)
            self._carts[id] = cart
            logger.info("Cart session %d restored with %d lines", id, len(cart))
            return cart

    def save(self, id: int) -> None:
        if self._repository is None:
            return
        with self._lock:
            cart = self._carts.get(id)
        if cart is not None:
            self._repository.save(id, cart.snapshot())

    def close(self, id: int) -> None:
        with self._lock:
            self._carts.pop(id, None)
        if self._repository is not None:
            self._repository.delete(id)
        logger.info("Cart session %d closed", id)

    def items(self) -> Iterator[tuple[int, CartStore]]:
        with self._lock:
            snapshot = list(self._carts.items())
        yield from snapshot
