import logging
import threading
from dataclasses import fields, replace
from typing import Iterable

from sales_api.store.id_generator import int_id_generator
from sales_api.store.product_models import (
    PatchProductInfo,
    ProductEntity,
    ProductInfo,
    is_orderable,
)

logger = logging.getLogger(__name__)


def _snapshot(id: str, info: ProductInfo) -> ProductEntity:
    # entries leave the catalog as copies, only catalog writes move stock or price
    return ProductEntity(id=id, info=replace(info))


class ProductCatalog:
    """In-process catalog source keyed by opaque product id."""

    def __init__(self) -> None:
        self._products = dict[str, ProductInfo]()
        self._ids = int_id_generator(start=1)
        self._lock = threading.RLock()

    def add(self, info: ProductInfo) -> ProductEntity:
        with self._lock:
            _id = f"P{next(self._ids)}"
            while _id in self._products:
                _id = f"P{next(self._ids)}"
            self._products[_id] = replace(info)
            return _snapshot(_id, self._products[_id])

    def delete(self, id: str) -> None:
        with self._lock:
            if self._products.pop(id, None) is not None:
                logger.info("Product %s removed from catalog", id)

    def get_one(self, id: str) -> ProductEntity | None:
        with self._lock:
            info = self._products.get(id)
            if info is None:
                return None
            return _snapshot(id, info)

    def get_many(
        self,
        offset: int = 0,
        limit: int = 10,
        min_price: float | None = None,
        max_price: float | None = None,
        category: str | None = None,
        orderable_only: bool = False,
    ) -> Iterable[ProductEntity]:
        with self._lock:
            snapshot = list(self._products.items())

        curr = 0
        for id, info in snapshot:
            if orderable_only and not is_orderable(info):
                continue
            if min_price is not None and (info.price is None or info.price < min_price):
                continue
            if max_price is not None and (info.price is None or info.price > max_price):
                continue
            if category is not None and info.category.strip() != category:
                continue
            if offset <= curr < offset + limit:
                yield _snapshot(id, info)
            curr += 1

    def update(self, id: str, info: ProductInfo) -> ProductEntity | None:
        with self._lock:
            if id not in self._products:
                return None
            self._products[id] = replace(info)
            return _snapshot(id, self._products[id])

    def upsert(self, id: str, info: ProductInfo) -> ProductEntity:
        with self._lock:
            self._products[id] = replace(info)
            return _snapshot(id, self._products[id])

    def patch(self, id: str, patch_info: PatchProductInfo) -> ProductEntity | None:
        with self._lock:
            info = self._products.get(id)
            if info is None:
                return None

            changes = {
                field.name: getattr(patch_info, field.name)
                for field in fields(patch_info)
                if getattr(patch_info, field.name) is not None
            }
            self._products[id] = replace(info, **changes)
            return _snapshot(id, self._products[id])
