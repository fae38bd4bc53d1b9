# app/application/materializer.py
from __future__ import annotations

from typing import Any, AsyncIterator, Dict, List

from app.domain.models import Product, StatusCount


async def materialize(cursor: AsyncIterator[Dict[str, Any]]) -> List[Dict[str, Any]]:
    # urutan dari server dipertahankan; tidak ada sorting di sisi client
    return [doc async for doc in cursor]


async def materialize_products(cursor: AsyncIterator[Dict[str, Any]]) -> List[Product]:
    return [Product.from_document(doc) for doc in await materialize(cursor)]


async def materialize_status_counts(cursor: AsyncIterator[Dict[str, Any]]) -> List[StatusCount]:
    # $group puts the key in _id
    return [
        StatusCount(status=doc.get("_id"), statusCount=int(doc.get("statusCount", 0)))
        for doc in await materialize(cursor)
    ]
