# main.py

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront.core.config import Settings
from storefront.core.context import ServiceContext
from storefront.core.error_handlers import setup_error_handlers, add_request_id_middleware
from storefront.logging import logger

# Routers define their own prefixes ('/auth', '/cart', '/wishlist')
from storefront.auth.controller import router as auth_router
from storefront.cart.controller import router as cart_router
from storefront.wishlist.controller import router as wishlist_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    context: ServiceContext = app.state.context
    context.init_db()
    logger.info("Storefront application startup completed")

    yield

    context.dispose()
    logger.info("Storefront application shut down")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application. All shared state (config, database engine,
    token service) lives on `app.state.context`; nothing is global.
    """
    settings = settings or Settings()

    app = FastAPI(
        title=settings.API_TITLE,
        description=settings.API_DESCRIPTION,
        version=settings.API_VERSION,
        lifespan=lifespan
    )
    app.state.context = ServiceContext(settings)

    # Set up error handlers
    setup_error_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials="*" not in settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add request ID middleware for better error tracking
    app.middleware("http")(add_request_id_middleware)

    app.include_router(auth_router, prefix=settings.API_PREFIX)
    app.include_router(cart_router, prefix=settings.API_PREFIX)
    app.include_router(wishlist_router, prefix=settings.API_PREFIX)

    @app.get("/")
    async def root():
        return {"message": "Server running..."}

    @app.get("/health")
    async def health_check():
        """Simple health check endpoint"""
        return {"status": "ok"}

    return app


if __name__ == "__main__":
    import uvicorn

    settings = Settings()
    uvicorn.run(create_app(settings), host=settings.HOST, port=settings.PORT)
