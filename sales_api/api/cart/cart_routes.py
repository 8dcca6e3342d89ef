from http import HTTPStatus
from typing import Callable

from fastapi import APIRouter, HTTPException, Response

from sales_api.api.dependencies import Carts, Catalog, Money
from sales_api.money import MoneyFormatter
from sales_api.store import reconciliation
from sales_api.store.cart_sessions import CartSessions
from sales_api.store.cart_store import CartStore
from sales_api.store.product_models import ProductEntity
from sales_api.store.product_queries import ProductCatalog

from .cart_contracts import CartResponse, ProductControlsResponse

cart_router = APIRouter(prefix="/cart")


def _get_cart(carts: CartSessions, catalog: ProductCatalog, id: int) -> CartStore:
    cart = carts.get(id)
    if cart is None:
        raise HTTPException(
            HTTPStatus.NOT_FOUND,
            f"Request resource /cart/{id} was not found",
        )
    # pull-based pass, stock may have moved since the last read
    if reconciliation.reconcile(cart, catalog):
        carts.save(id)
    return cart


def _get_product(catalog: ProductCatalog, product_id: str) -> ProductEntity:
    product = catalog.get_one(product_id)
    if product is None:
        raise HTTPException(
            HTTPStatus.NOT_FOUND,
            f"Request resource /product/{product_id} was not found",
        )
    return product


def _apply(
    id: int,
    product_id: str,
    intent: Callable[[CartStore, ProductEntity], bool],
    carts: CartSessions,
    catalog: ProductCatalog,
    money: MoneyFormatter,
) -> CartResponse:
    cart = _get_cart(carts, catalog, id)
    product = _get_product(catalog, product_id)

    if intent(cart, product):
        carts.save(id)

    return CartResponse.from_cart(id, cart, catalog, money)


@cart_router.post(
    "/",
    status_code=HTTPStatus.CREATED,
)
async def post_cart(response: Response, carts: Carts) -> dict[str, int]:
    id, _ = carts.open()

    response.headers["location"] = f"/cart/{id}"
    return {"id": id}


@cart_router.get(
    "/{id}",
    responses={
        HTTPStatus.OK: {
            "description": "Successfully returned requested cart",
        },
        HTTPStatus.NOT_FOUND: {
            "description": "Failed to return requested cart as one was not found",
        },
    },
)
async def get_cart_by_id(id: int, carts: Carts, catalog: Catalog, money: Money) -> CartResponse:
    cart = _get_cart(carts, catalog, id)
    return CartResponse.from_cart(id, cart, catalog, money)


@cart_router.delete("/{id}")
async def delete_cart(id: int, carts: Carts) -> Response:
    carts.close(id)
    return Response("")


@cart_router.post("/{id}/add/{product_id}")
async def add_product(
    id: int, product_id: str, carts: Carts, catalog: Catalog, money: Money
) -> CartResponse:
    return _apply(id, product_id, reconciliation.add, carts, catalog, money)


@cart_router.post("/{id}/increase/{product_id}")
async def increase_product(
    id: int, product_id: str, carts: Carts, catalog: Catalog, money: Money
) -> CartResponse:
    return _apply(id, product_id, reconciliation.increase, carts, catalog, money)


@cart_router.post("/{id}/decrease/{product_id}")
async def decrease_product(
    id: int, product_id: str, carts: Carts, catalog: Catalog, money: Money
) -> CartResponse:
    return _apply(id, product_id, reconciliation.decrease, carts, catalog, money)


@cart_router.delete("/{id}/item/{product_id}")
async def remove_product(
    id: int, product_id: str, carts: Carts, catalog: Catalog, money: Money
) -> CartResponse:
    cart = _get_cart(carts, catalog, id)

    if reconciliation.remove(cart, product_id):
        carts.save(id)

    return CartResponse.from_cart(id, cart, catalog, money)


@cart_router.get(
    "/{id}/product/{product_id}",
    responses={
        HTTPStatus.OK: {
            "description": "Successfully returned cart controls for the product",
        },
        HTTPStatus.NOT_FOUND: {
            "description": "Failed as the cart or the product was not found",
        },
    },
)
async def get_product_controls(
    id: int, product_id: str, carts: Carts, catalog: Catalog
) -> ProductControlsResponse:
    cart = _get_cart(carts, catalog, id)
    product = _get_product(catalog, product_id)
    return ProductControlsResponse.from_product(cart, product)
