# app/domain/models.py
from __future__ import annotations

import os
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

COLLECTION_NAME = os.getenv("MONGO_COLL", "product")
TEXT_FIELD = "productName"


class Product(BaseModel):
    """
    Satu dokumen di koleksi `product`.

    `id` dipetakan dari `_id` Mongo dan baru terisi setelah dokumen disimpan.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(None, alias="_id")
    status: Optional[str] = None
    productName: Optional[str] = None
    brandName: Optional[str] = None
    categoryName: Optional[str] = None
    subCategoryName: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, v: Any) -> Optional[str]:
        # ObjectId -> str
        return None if v is None else str(v)

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Product":
        return cls.model_validate(doc)

    def to_document(self) -> Dict[str, Any]:
        """Dokumen siap insert; `_id` dibiarkan kosong supaya Mongo yang membuatnya."""
        return self.model_dump(exclude={"id"}, exclude_none=True)


class StatusCount(BaseModel):
    status: Optional[str] = None
    statusCount: int = 0
