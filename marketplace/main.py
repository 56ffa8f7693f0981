# marketplace/main.py
import logging
import os
from contextlib import asynccontextmanager
from typing import Any, List, Optional

import uvicorn
from fastapi import APIRouter, Body, Depends, FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import get_settings
from .core import split_errors
from .database import ProductStore, build_store
from .errors import ProductValidationError, StoreError
from .logic import (
    create_product_logic,
    delete_product_logic,
    get_product_logic,
    list_products_logic,
    update_product_logic,
)
from .models import DeletedMessage, Product
from .observability import setup_logging

logger = logging.getLogger(__name__)

STATIC_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "static")


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings.log_level)

    store = build_store(settings)
    try:
        await store.ping()
        logger.info("Store connected (%s)", settings.store_backend)
    except StoreError:
        # keep serving; requests fail with 500 until the store is reachable
        logger.exception("Store connection error")
    app.state.store = store
    logger.info("Ready to handle requests on port %s", settings.port)

    yield

    await store.close()
    logger.info("Store connection closed")


app = FastAPI(title="marketplace catalog", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_store(request: Request) -> ProductStore:
    return request.app.state.store


# ---------------------------
# Product endpoints
# ---------------------------
async def list_products(title: Optional[str] = None, store: ProductStore = Depends(get_store)):
    return await list_products_logic(store, title)


async def get_product(product_id: str, store: ProductStore = Depends(get_store)):
    return await get_product_logic(store, product_id)


async def create_product(payload: Any = Body(...), store: ProductStore = Depends(get_store)):
    return await create_product_logic(store, payload)


async def update_product(product_id: str, payload: Any = Body(...), store: ProductStore = Depends(get_store)):
    return await update_product_logic(store, product_id, payload)


async def delete_product(product_id: str, store: ProductStore = Depends(get_store)):
    return await delete_product_logic(store, product_id)


# (method, path, handler, success status, response model)
ROUTES = [
    ("GET", "/api/products", list_products, 200, List[Product]),
    ("GET", "/api/products/{product_id}", get_product, 200, Product),
    ("POST", "/api/products", create_product, 201, Product),
    ("PUT", "/api/products/{product_id}", update_product, 200, Product),
    ("DELETE", "/api/products/{product_id}", delete_product, 200, DeletedMessage),
]

router = APIRouter()
for method, path, handler, status_code, response_model in ROUTES:
    router.add_api_route(
        path,
        handler,
        methods=[method],
        status_code=status_code,
        response_model=response_model,
    )
app.include_router(router)


@app.get("/", include_in_schema=False)
async def home():
    return FileResponse(os.path.join(STATIC_DIR, "index.html"))


# ---------------------------
# Error handlers
# ---------------------------
@app.exception_handler(ProductValidationError)
async def product_validation_error_handler(request: Request, exc: ProductValidationError):
    logger.warning("Rejected product on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=400, content=exc.to_response())


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    missing, invalid = split_errors(exc.errors())
    return await product_validation_error_handler(request, ProductValidationError(missing, invalid))


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    logger.error("Store error on %s %s", request.method, request.url.path, exc_info=exc)
    return PlainTextResponse("Internal Server Error", status_code=500)


@app.exception_handler(StarletteHTTPException)
async def not_found_handler(request: Request, exc: StarletteHTTPException):
    # unknown paths and unsupported methods both read as a missing resource
    if exc.status_code in (404, 405):
        return PlainTextResponse("Resource not found", status_code=404)
    return await http_exception_handler(request, exc)


def run() -> None:
    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
