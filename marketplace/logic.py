import logging
from typing import Any, Dict, List, Optional

from fastapi import HTTPException

from .core import pick_fields, validate_product
from .database import ProductStore
from .errors import ProductValidationError

# This file contains the core logic for all product endpoints.

logger = logging.getLogger(__name__)


def _not_found() -> HTTPException:
    return HTTPException(status_code=404, detail="Resource not found")


async def list_products_logic(store: ProductStore, title: Optional[str] = None) -> List[Dict[str, Any]]:
    return await store.list(name_contains=title or None)


async def get_product_logic(store: ProductStore, product_id: str) -> Dict[str, Any]:
    p = await store.get(product_id)
    if p is None:
        raise _not_found()
    return p


async def create_product_logic(store: ProductStore, payload: Any) -> Dict[str, Any]:
    product = validate_product(payload)
    created = await store.create(product)
    logger.info("Created product %s (%s)", created["id"], created["name"])
    return created


async def update_product_logic(store: ProductStore, product_id: str, payload: Any) -> Dict[str, Any]:
    existing = await get_product_logic(store, product_id)
    if not isinstance(payload, dict):
        raise ProductValidationError(invalid=["body"])
    changes = pick_fields(payload)
    # the merged record must still be a valid product
    merged = validate_product({**existing, **changes})
    if not changes:
        return existing

    coerced = {k: getattr(merged, k) for k in changes}
    updated = await store.update(product_id, coerced)
    if updated is None:
        # removed between the read and the write
        raise _not_found()
    return updated


async def delete_product_logic(store: ProductStore, product_id: str) -> Dict[str, str]:
    deleted = await store.delete(product_id)
    if deleted is None:
        raise _not_found()
    logger.info("Deleted product %s (%s)", product_id, deleted.get("name"))
    return {"message": f"Deleted product: {deleted['name']}"}
