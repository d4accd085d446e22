# storefront/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from storefront.api.errors import register_exception_handlers
from storefront.api.routers import (
    auth,
    banners,
    cart,
    categories,
    health,
    orders,
    products,
    settings,
    users,
    watchlist,
)
from storefront.data.database import Base, engine
from storefront.utils.logging import get_logger
from storefront.utils.settings import FRONTEND_URL

# import modeli przed create_all - rejestracja w Base.metadata
from storefront.data import models  # noqa: F401

logger = get_logger(__name__)


def init_db() -> None:
    logger.info(f"Models registered in Base.metadata: {list(Base.metadata.tables.keys())}")
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created")
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        raise


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="Storefront Service",
        version="1.0.0",
        lifespan=lifespan,
    )

    # cookie sesji idzie cross-origin z frontu
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[FRONTEND_URL],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(categories.router)
    app.include_router(products.router)
    app.include_router(cart.router)
    app.include_router(watchlist.router)
    app.include_router(orders.router)
    app.include_router(banners.router)
    app.include_router(settings.router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
