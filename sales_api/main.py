import logging

from fastapi import FastAPI

from sales_api.api.cart.cart_routes import cart_router
from sales_api.api.product.product_routes import product_router
from sales_api.config import Settings
from sales_api.money import MoneyFormatter
from sales_api.store.cart_repository import SqlCartRepository
from sales_api.store.cart_sessions import CartSessions
from sales_api.store.product_queries import ProductCatalog


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()
    configure_logging(settings.log_level)

    repository = SqlCartRepository(settings.database_url) if settings.database_url else None

    app = FastAPI(title=settings.app_title)
    app.state.settings = settings
    app.state.catalog = ProductCatalog()
    app.state.carts = CartSessions(repository)
    app.state.money = MoneyFormatter.from_settings(settings)

    app.include_router(cart_router)
    app.include_router(product_router)
    return app


app = create_app()
