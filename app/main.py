# app/main.py
from contextlib import asynccontextmanager
import logging

from fastapi.middleware.cors import CORSMiddleware
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from app.core.config import get_settings
from app.core.exceptions import (
    CartItemNotFoundError,
    CartNotFoundError,
    CouponInvalidError,
    CouponNotFoundError,
    EmptyCartError,
    InsufficientStockError,
    InvalidArgumentError,
    ItemNotFoundError,
    ItemUnavailableError,
    StoreError,
)
from app.database import get_store, seed_catalog

# Routers
from app.routers.items import router as items_router
from app.routers.cart import router as cart_router
from app.routers.orders import router as orders_router
from app.routers.coupons import router as coupons_router
from app.routers.admin import router as admin_router

settings = get_settings()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Seed the in-memory catalog (unless SEED_CATALOG=false).

    Shutdown:
      - Nothing to clean up; all state lives in memory.
    """
    if settings.SEED_CATALOG:
        items = seed_catalog(get_store())
        logger.info("Startup: seeded catalog with %d items", len(items))
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    version="1.0.0",
    lifespan=lifespan,
)


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Error mapping ---

ERROR_STATUS_CODES: dict[type[StoreError], int] = {
    InvalidArgumentError: status.HTTP_400_BAD_REQUEST,
    ItemNotFoundError: status.HTTP_404_NOT_FOUND,
    CartNotFoundError: status.HTTP_404_NOT_FOUND,
    CartItemNotFoundError: status.HTTP_404_NOT_FOUND,
    CouponNotFoundError: status.HTTP_404_NOT_FOUND,
    EmptyCartError: status.HTTP_400_BAD_REQUEST,
    ItemUnavailableError: status.HTTP_400_BAD_REQUEST,
    InsufficientStockError: status.HTTP_409_CONFLICT,
    CouponInvalidError: status.HTTP_400_BAD_REQUEST,
}


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    """Map StoreError subclasses to HTTP responses."""
    status_code = ERROR_STATUS_CODES.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
    content = {"detail": str(exc), "error_type": type(exc).__name__}
    if isinstance(exc, CouponInvalidError):
        content["reason"] = exc.reason.value
    if isinstance(exc, InsufficientStockError):
        content["requested"] = exc.requested
        content["available"] = exc.available
    return JSONResponse(status_code=status_code, content=content)


# API prefix, e.g. /api
app.include_router(items_router, prefix=settings.API_PREFIX)
app.include_router(cart_router, prefix=settings.API_PREFIX)
app.include_router(orders_router, prefix=settings.API_PREFIX)
app.include_router(coupons_router, prefix=settings.API_PREFIX)
app.include_router(admin_router, prefix=settings.API_PREFIX)


@app.get("/")
def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "storefront-backend"}
