# marketplace/database.py
import abc
import asyncio
import logging
import uuid
from typing import Any, Dict, List, Optional

from .config import MONGO_DATABASE, MONGO_URI, PRODUCTS_COLLECTION, Settings
from .core import ProductIn, _make_product_dict

# This file holds the store interface and the in-memory backend.

logger = logging.getLogger(__name__)

ProductDict = Dict[str, Any]


class ProductStore(abc.ABC):
    """Persistence handle for products, acquired at boot and closed at shutdown."""

    @abc.abstractmethod
    async def ping(self) -> None: ...

    @abc.abstractmethod
    async def list(self, name_contains: Optional[str] = None) -> List[ProductDict]: ...

    @abc.abstractmethod
    async def get(self, product_id: str) -> Optional[ProductDict]: ...

    @abc.abstractmethod
    async def create(self, product: ProductIn) -> ProductDict: ...

    @abc.abstractmethod
    async def update(self, product_id: str, changes: Dict[str, Any]) -> Optional[ProductDict]: ...

    @abc.abstractmethod
    async def delete(self, product_id: str) -> Optional[ProductDict]: ...

    async def close(self) -> None:
        return None


class MemoryProductStore(ProductStore):
    def __init__(self) -> None:
        self._products: Dict[str, ProductDict] = {}
        self._lock = asyncio.Lock()

    async def ping(self) -> None:
        return None

    async def list(self, name_contains: Optional[str] = None) -> List[ProductDict]:
        if not name_contains:
            return [dict(p) for p in self._products.values()]
        term = name_contains.lower()
        return [dict(p) for p in self._products.values() if term in p["name"].lower()]

    async def get(self, product_id: str) -> Optional[ProductDict]:
        p = self._products.get(product_id)
        return dict(p) if p else None

    async def create(self, product: ProductIn) -> ProductDict:
        pid = uuid.uuid4().hex
        async with self._lock:
            self._products[pid] = _make_product_dict(pid, product)
        return dict(self._products[pid])

    async def update(self, product_id: str, changes: Dict[str, Any]) -> Optional[ProductDict]:
        async with self._lock:
            p = self._products.get(product_id)
            if p is None:
                return None
            p.update(changes)
            return dict(p)

    async def delete(self, product_id: str) -> Optional[ProductDict]:
        async with self._lock:
            return self._products.pop(product_id, None)

    async def close(self) -> None:
        self._products.clear()


def build_store(settings: Settings) -> ProductStore:
    if settings.store_backend == "memory":
        logger.info("Using in-memory product store")
        return MemoryProductStore()

    from .mongo import MongoProductStore

    return MongoProductStore.from_uri(MONGO_URI, MONGO_DATABASE, PRODUCTS_COLLECTION)
