# storefront/api/__init__.py
from contextlib import asynccontextmanager

from fastapi import FastAPI

from storefront.api.routers import cart, checkout, health, orders, products, uploads
from storefront.data.database import init_db
from storefront.data.seed import seed
from storefront.utils.logging import get_logger
from storefront.utils.settings import SEED_MENU

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Initializing database")
    init_db()
    if SEED_MENU:
        seed()
    yield


def create_app(init_database: bool = True) -> FastAPI:
    app = FastAPI(
        title="Storefront",
        version="1.0.0",
        lifespan=lifespan if init_database else None,
    )

    app.include_router(health.router)
    app.include_router(cart.router)
    app.include_router(checkout.router)
    app.include_router(products.router)
    app.include_router(orders.router)
    app.include_router(uploads.router)

    return app
