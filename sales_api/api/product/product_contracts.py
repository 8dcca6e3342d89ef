from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from sales_api.money import MoneyFormatter
from sales_api.store.availability import Availability, classify, status_text
from sales_api.store.product_models import (
    PatchProductInfo,
    ProductEntity,
    ProductInfo,
    is_orderable,
)


def _optional_label(value: str) -> str | None:
    value = value.strip()
    return value or None


class ProductResponse(BaseModel):
    id: str
    name: str
    article: str | None
    category: str | None
    price: float | None
    price_wholesale: float | None
    stock_count: int
    orderable: bool
    availability: Availability
    status: str
    price_display: str
    price_wholesale_display: str | None

    @staticmethod
    def from_entity(entity: ProductEntity, money: MoneyFormatter) -> ProductResponse:
        info = entity.info
        has_price = info.price is not None and info.price > 0
        has_wholesale = info.price_wholesale is not None and info.price_wholesale > 0
        return ProductResponse(
            id=entity.id,
            name=info.name,
            article=_optional_label(info.article),
            category=_optional_label(info.category),
            price=info.price,
            price_wholesale=info.price_wholesale,
            stock_count=info.stock_count,
            orderable=is_orderable(info),
            availability=classify(info.stock_count),
            status=status_text(info.stock_count),
            price_display=money(info.price) if has_price else "Price not set",
            price_wholesale_display=money(info.price_wholesale) if has_wholesale else None,
        )


class ProductRequest(BaseModel):
    name: str
    stock_count: int = 0
    price: float | None = None
    price_wholesale: float | None = None
    article: str = ""
    category: str = ""

    def as_product_info(self) -> ProductInfo:
        return ProductInfo(
            name=self.name,
            stock_count=self.stock_count,
            price=self.price,
            price_wholesale=self.price_wholesale,
            article=self.article,
            category=self.category,
        )


class PatchProductRequest(BaseModel):
    name: str | None = None
    stock_count: int | None = None
    price: float | None = None
    price_wholesale: float | None = None
    article: str | None = None
    category: str | None = None

    model_config = ConfigDict(extra="forbid")

    def as_patch_product_info(self) -> PatchProductInfo:
        return PatchProductInfo(
            name=self.name,
            stock_count=self.stock_count,
            price=self.price,
            price_wholesale=self.price_wholesale,
            article=self.article,
            category=self.category,
        )
