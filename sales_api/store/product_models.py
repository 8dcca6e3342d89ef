from dataclasses import dataclass


@dataclass(slots=True)
class ProductInfo:
    name: str
    stock_count: int = 0
    price: float | None = None
    price_wholesale: float | None = None
    article: str = ""
    category: str = ""


@dataclass(slots=True)
class ProductEntity:
    id: str
    info: ProductInfo


@dataclass(slots=True)
class PatchProductInfo:
    name: str | None = None
    stock_count: int | None = None
    price: float | None = None
    price_wholesale: float | None = None
    article: str | None = None
    category: str | None = None


def is_orderable(info: ProductInfo) -> bool:
    # a non-positive price is treated the same as a missing one
    return info.stock_count > 0 and info.price is not None and info.price > 0
