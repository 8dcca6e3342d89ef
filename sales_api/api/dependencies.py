from typing import Annotated

from fastapi import Depends, Request

from sales_api.money import MoneyFormatter
from sales_api.store.cart_sessions import CartSessions
from sales_api.store.product_queries import ProductCatalog


def get_catalog(request: Request) -> ProductCatalog:
    return request.app.state.catalog


def get_carts(request: Request) -> CartSessions:
    return request.app.state.carts


def get_money(request: Request) -> MoneyFormatter:
    return request.app.state.money


Catalog = Annotated[ProductCatalog, Depends(get_catalog)]
Carts = Annotated[CartSessions, Depends(get_carts)]
Money = Annotated[MoneyFormatter, Depends(get_money)]
