# marketplace/mongo.py
import logging
import re
from typing import Any, Dict, List, Optional

from bson import ObjectId
from pymongo import AsyncMongoClient, ReturnDocument
from pymongo.errors import PyMongoError

from .core import PRODUCT_FIELDS, ProductIn
from .database import ProductDict, ProductStore
from .errors import StoreError

logger = logging.getLogger(__name__)


def _object_id(product_id: str) -> Optional[ObjectId]:
    # malformed ids can never match a document
    if not ObjectId.is_valid(product_id):
        return None
    return ObjectId(product_id)


def _from_document(doc: Dict[str, Any]) -> ProductDict:
    out: ProductDict = {"id": str(doc["_id"])}
    for key in PRODUCT_FIELDS:
        if key in doc:
            out[key] = doc[key]
    return out


class MongoProductStore(ProductStore):
    """Products collection backed by pymongo's asyncio client."""

    def __init__(self, collection, client: Optional[AsyncMongoClient] = None):
        self._collection = collection
        self._client = client

    @classmethod
    def from_uri(cls, uri: str, database: str, collection: str) -> "MongoProductStore":
        client: AsyncMongoClient = AsyncMongoClient(uri)
        return cls(client[database][collection], client=client)

    async def ping(self) -> None:
        if self._client is None:
            return
        try:
            await self._client.admin.command("ping")
        except PyMongoError as e:
            raise StoreError("ping", e) from e

    async def list(self, name_contains: Optional[str] = None) -> List[ProductDict]:
        query: Dict[str, Any] = {}
        if name_contains:
            query["name"] = {"$regex": re.escape(name_contains), "$options": "i"}
        try:
            docs = await self._collection.find(query).to_list(length=None)
        except PyMongoError as e:
            raise StoreError("list", e) from e
        return [_from_document(d) for d in docs]

    async def get(self, product_id: str) -> Optional[ProductDict]:
        oid = _object_id(product_id)
        if oid is None:
            return None
        try:
            doc = await self._collection.find_one({"_id": oid})
        except PyMongoError as e:
            raise StoreError("get", e) from e
        return _from_document(doc) if doc else None

    async def create(self, product: ProductIn) -> ProductDict:
        doc = product.model_dump()
        try:
            result = await self._collection.insert_one(doc)
        except PyMongoError as e:
            raise StoreError("create", e) from e
        return {"id": str(result.inserted_id), **product.model_dump()}

    async def update(self, product_id: str, changes: Dict[str, Any]) -> Optional[ProductDict]:
        oid = _object_id(product_id)
        if oid is None:
            return None
        try:
            doc = await self._collection.find_one_and_update(
                {"_id": oid},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            raise StoreError("update", e) from e
        return _from_document(doc) if doc else None

    async def delete(self, product_id: str) -> Optional[ProductDict]:
        oid = _object_id(product_id)
        if oid is None:
            return None
        try:
            doc = await self._collection.find_one_and_delete({"_id": oid})
        except PyMongoError as e:
            raise StoreError("delete", e) from e
        return _from_document(doc) if doc else None

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
