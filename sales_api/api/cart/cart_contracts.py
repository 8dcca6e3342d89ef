from __future__ import annotations

from pydantic import BaseModel

from sales_api.money import MoneyFormatter
from sales_api.store import reconciliation
from sales_api.store.cart_store import CartStore
from sales_api.store.product_models import ProductEntity
from sales_api.store.product_queries import ProductCatalog


class CartLineResponse(BaseModel):
    product_id: str
    name: str
    quantity: int
    max_quantity: int
    can_increase: bool
    can_decrease: bool
    price: float | None
    price_display: str | None

    @staticmethod
    def from_line(
        cart: CartStore,
        product_id: str,
        product: ProductEntity | None,
        money: MoneyFormatter,
    ) -> CartLineResponse:
        if product is None:
            return CartLineResponse(
                product_id=product_id,
                name=product_id,
                quantity=cart.quantity_of(product_id),
                max_quantity=0,
                can_increase=False,
                can_decrease=False,
                price=None,
                price_display=None,
            )

        price = product.info.price
        return CartLineResponse(
            product_id=product_id,
            name=product.info.name,
            quantity=cart.quantity_of(product_id),
            max_quantity=product.info.stock_count,
            can_increase=reconciliation.can_increase(cart, product),
            can_decrease=reconciliation.can_decrease(cart, product),
            price=price,
            price_display=money(price) if price is not None and price > 0 else None,
        )


class CartResponse(BaseModel):
    id: int
    lines: list[CartLineResponse]
    quantity: int
    price: float
    price_display: str

    @staticmethod
    def from_cart(
        id: int,
        cart: CartStore,
        catalog: ProductCatalog,
        money: MoneyFormatter,
    ) -> CartResponse:
        lines = [
            CartLineResponse.from_line(cart, line.product_id, catalog.get_one(line.product_id), money)
            for line in cart.lines()
        ]
        total_price = sum(
            line.price * line.quantity
            for line in lines
            if line.price is not None and line.price > 0
        )
        return CartResponse(
            id=id,
            lines=lines,
            quantity=sum(line.quantity for line in lines),
            price=total_price,
            price_display=money(total_price),
        )


class ProductControlsResponse(BaseModel):
    product_id: str
    in_cart: bool
    quantity: int
    can_add: bool
    can_increase: bool
    can_decrease: bool

    @staticmethod
    def from_product(cart: CartStore, product: ProductEntity) -> ProductControlsResponse:
        return ProductControlsResponse(
            product_id=product.id,
            in_cart=cart.is_in_cart(product.id),
            quantity=cart.quantity_of(product.id),
            can_add=reconciliation.can_add(cart, product),
            can_increase=reconciliation.can_increase(cart, product),
            can_decrease=reconciliation.can_decrease(cart, product),
        )
