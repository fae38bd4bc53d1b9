# app/presentation/schemas.py
from __future__ import annotations
from datetime import datetime
from pydantic import BaseModel, Field
from typing import Optional

# ── PRODUCTS ─────────────────────────────────────────────────────
class ProductOut(BaseModel):
    id: Optional[str] = None
    status: Optional[str] = None
    productName: Optional[str] = None
    brandName: Optional[str] = None
    categoryName: Optional[str] = None
    subCategoryName: Optional[str] = None

# ── GROUP BY STATUS ──────────────────────────────────────────────
class StatusCountOut(BaseModel):
    status: Optional[str] = None
    statusCount: int

# ── ERRORS ───────────────────────────────────────────────────────
class ErrorResponse(BaseModel):
    timestamp: datetime = Field(default_factory=datetime.now)
    message: str
    statusCode: int
