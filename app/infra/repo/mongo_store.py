# app/infra/repo/mongo_store.py
from __future__ import annotations

import os
from typing import Any, AsyncIterator, Dict, List, Mapping, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import TEXT
from pymongo.errors import PyMongoError

from app.domain.errors import StoreExecutionError
from app.domain.ports import DocumentStorePort

MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017")
DB_NAME   = os.getenv("MONGO_DB", "productsearch")


class MongoDocumentStore(DocumentStorePort):
    """
    Async adapter di atas Motor untuk koleksi produk.

    Semua PyMongoError diterjemahkan ke StoreExecutionError supaya layer
    atas tidak bergantung ke pymongo. Tidak ada retry di sini.
    """

    def __init__(self, client: Optional[AsyncIOMotorClient] = None, db_name: str = DB_NAME) -> None:
        self.client = client if client is not None else AsyncIOMotorClient(MONGO_URI)
        self.db: AsyncIOMotorDatabase = self.client[db_name]

    # ──────────────────────────────────────────────────────────────
    #  Schema / index
    # ──────────────────────────────────────────────────────────────
    async def collection_exists(self, name: str) -> bool:
        try:
            names = await self.db.list_collection_names(filter={"name": name})
        except PyMongoError as e:
            raise StoreExecutionError("collection_exists", str(e)) from e
        return name in names

    async def ensure_text_index(self, collection: str, field: str) -> None:
        """
        createIndexes dengan spec yang sama = no-op di server,
        jadi aman dipanggil setiap startup.
        """
        try:
            await self.db[collection].create_index([(field, TEXT)], name=f"{field}_text")
        except PyMongoError as e:
            raise StoreExecutionError("ensure_text_index", str(e)) from e

    # ──────────────────────────────────────────────────────────────
    #  Reads / writes
    # ──────────────────────────────────────────────────────────────
    async def exists(self, collection: str, criteria: Mapping[str, Any]) -> bool:
        try:
            doc = await self.db[collection].find_one(dict(criteria), projection={"_id": 1})
        except PyMongoError as e:
            raise StoreExecutionError("exists", str(e)) from e
        return doc is not None

    async def insert(self, collection: str, document: Mapping[str, Any]) -> str:
        try:
            res = await self.db[collection].insert_one(dict(document))
        except PyMongoError as e:
            raise StoreExecutionError("insert", str(e)) from e
        return str(res.inserted_id)

    async def aggregate(
        self,
        collection: str,
        stages: List[Dict[str, Any]],
        options: Mapping[str, Any],
    ) -> AsyncIterator[Dict[str, Any]]:
        # error bisa muncul saat iterasi (getMore), bukan hanya saat kirim command
        try:
            cursor = self.db[collection].aggregate(stages, **options)
            async for doc in cursor:
                yield doc
        except PyMongoError as e:
            raise StoreExecutionError("aggregate", str(e)) from e

    async def ping(self) -> bool:
        try:
            res = await self.client.admin.command("ping")
        except PyMongoError as e:
            raise StoreExecutionError("ping", str(e)) from e
        return bool(res.get("ok"))
