from http import HTTPStatus
from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, Response
from pydantic import NonNegativeFloat, NonNegativeInt, PositiveInt

from sales_api.api.dependencies import Carts, Catalog, Money
from sales_api.store import reconciliation
from sales_api.store.cart_sessions import CartSessions
from sales_api.store.product_queries import ProductCatalog

from .product_contracts import (
    PatchProductRequest,
    ProductRequest,
    ProductResponse,
)

product_router = APIRouter(prefix="/product")


def _refresh_carts(catalog: ProductCatalog, carts: CartSessions) -> None:
    # stock or price moved, every open cart has to be brought back within stock
    for cart_id in reconciliation.reconcile_all(carts.items(), catalog):
        carts.save(cart_id)


@product_router.get("/")
async def get_product_list(
    catalog: Catalog,
    money: Money,
    offset: Annotated[NonNegativeInt, Query()] = 0,
    limit: Annotated[PositiveInt, Query()] = 10,
    min_price: Annotated[NonNegativeFloat | None, Query()] = None,
    max_price: Annotated[NonNegativeFloat | None, Query()] = None,
    category: Annotated[str | None, Query()] = None,
    orderable_only: Annotated[bool, Query()] = False,
) -> list[ProductResponse]:
    return [
        ProductResponse.from_entity(e, money)
        for e in catalog.get_many(
            offset=offset,
            limit=limit,
            min_price=min_price,
            max_price=max_price,
            category=category,
            orderable_only=orderable_only,
        )
    ]


@product_router.get(
    "/{id}",
    responses={
        HTTPStatus.OK: {
            "description": "Successfully returned requested product",
        },
        HTTPStatus.NOT_FOUND: {
            "description": "Failed to return requested product as one was not found",
        },
    },
)
async def get_product_by_id(id: str, catalog: Catalog, money: Money) -> ProductResponse:
    entity = catalog.get_one(id)

    if not entity:
        raise HTTPException(
            HTTPStatus.NOT_FOUND,
            f"Request resource /product/{id} was not found",
        )

    return ProductResponse.from_entity(entity, money)


@product_router.post(
    "/",
    status_code=HTTPStatus.CREATED,
)
async def post_product(
    info: ProductRequest,
    response: Response,
    catalog: Catalog,
    money: Money,
) -> ProductResponse:
    entity = catalog.add(info.as_product_info())

    response.headers["location"] = f"/product/{entity.id}"

    return ProductResponse.from_entity(entity, money)


@product_router.patch(
    "/{id}",
    responses={
        HTTPStatus.OK: {
            "description": "Successfully patched product",
        },
        HTTPStatus.NOT_MODIFIED: {
            "description": "Failed to modify product as one was not found",
        },
    },
)
async def patch_product(
    id: str,
    info: PatchProductRequest,
    catalog: Catalog,
    carts: Carts,
    money: Money,
) -> ProductResponse:
    entity = catalog.patch(id, info.as_patch_product_info())

    if entity is None:
        raise HTTPException(
            HTTPStatus.NOT_MODIFIED,
            f"Requested resource /product/{id} was not found",
        )

    _refresh_carts(catalog, carts)
    return ProductResponse.from_entity(entity, money)


@product_router.put(
    "/{id}",
    responses={
        HTTPStatus.OK: {
            "description": "Successfully updated or upserted product",
        },
        HTTPStatus.NOT_MODIFIED: {
            "description": "Failed to modify product as one was not found",
        },
    },
)
async def put_product(
    id: str,
    info: ProductRequest,
    catalog: Catalog,
    carts: Carts,
    money: Money,
    upsert: Annotated[bool, Query()] = False,
) -> ProductResponse:
    entity = (
        catalog.upsert(id, info.as_product_info())
        if upsert
        else catalog.update(id, info.as_product_info())
    )

    if entity is None:
        raise HTTPException(
            HTTPStatus.NOT_MODIFIED,
            f"Requested resource /product/{id} was not found",
        )

    _refresh_carts(catalog, carts)
    return ProductResponse.from_entity(entity, money)


@product_router.delete("/{id}")
async def delete_product(id: str, catalog: Catalog, carts: Carts) -> Response:
    catalog.delete(id)
    _refresh_carts(catalog, carts)
    return Response("")
