# app/application/bootstrap.py
"""
Startup seeding for the `product` collection.

Alur (sekali saat proses start, sebelum request diterima):
  1) collection harus sudah ada (dibuat di luar service ini) → kalau tidak: ABORTED
  2) text index di productName dipastikan ada (idempotent)
  3) sudah ada dokumen dengan field brandName? → skip seeding
  4) insert sample satu per satu; gagal satu insert tidak menghentikan yang lain

Catatan: cek (3) lalu insert (4) tidak atomik. Dua instance yang start
bersamaan bisa sama-sama melihat koleksi kosong dan men-seed dua kali.
Hasilnya duplikat sample, bukan data rusak; ini diterima.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from app.domain.errors import MissingCollectionError, StoreExecutionError
from app.domain.models import COLLECTION_NAME, TEXT_FIELD, Product
from app.domain.ports import DocumentStorePort
from app.domain.predicates import field_exists

logger = logging.getLogger("productsearch.bootstrap")

SAMPLE_SENTINEL_FIELD = "brandName"
SAMPLE_COUNT = 5


class BootstrapState(str, enum.Enum):
    READY = "ready"
    ABORTED = "aborted"


@dataclass
class BootstrapResult:
    state: BootstrapState
    reason: Optional[str] = None
    inserted: int = 0

    @property
    def ready(self) -> bool:
        return self.state is BootstrapState.READY


def sample_products(n: int = SAMPLE_COUNT) -> List[Product]:
    # productName berisi 3 kata: "product name term1", dst.
    return [
        Product(
            status="ACTIVE",
            productName=f"product name term{i}",
            brandName=f"BRAND{i}",
            categoryName=f"CATEGORY{i}",
            subCategoryName="SUB_CATEGORY1",
        )
        for i in range(1, n + 1)
    ]


class BootstrapSeeder:
    def __init__(
        self,
        store: DocumentStorePort,
        collection: str = COLLECTION_NAME,
        samples: Optional[List[Product]] = None,
    ):
        self.store = store
        self.collection = collection
        self.samples = samples if samples is not None else sample_products()

    async def check_collection(self) -> None:
        exists = await self.store.collection_exists(self.collection)
        logger.info("%s collection exists: %s", self.collection, exists)
        if not exists:
            raise MissingCollectionError(self.collection)

    async def ensure_index(self) -> None:
        # wajib untuk $text di productName
        await self.store.ensure_text_index(self.collection, TEXT_FIELD)

    async def already_seeded(self) -> bool:
        return await self.store.exists(
            self.collection, field_exists(SAMPLE_SENTINEL_FIELD).to_criteria()
        )

    async def seed(self) -> int:
        inserted = 0
        for product in self.samples:
            doc: Dict[str, Any] = product.to_document()
            try:
                new_id = await self.store.insert(self.collection, doc)
            except StoreExecutionError:
                logger.exception("Failed to insert sample product %s", product.productName)
                continue
            inserted += 1
            logger.info("Saving sample product to database: id=%s %s", new_id, doc)
        return inserted

    async def run(self) -> BootstrapResult:
        try:
            await self.check_collection()
        except MissingCollectionError as e:
            logger.error("Bootstrap aborted: %s", e)
            return BootstrapResult(BootstrapState.ABORTED, reason=str(e))

        await self.ensure_index()

        if await self.already_seeded():
            logger.info("Skipping sample insertion as they're already in DB")
            return BootstrapResult(BootstrapState.READY)

        inserted = await self.seed()
        return BootstrapResult(BootstrapState.READY, inserted=inserted)
