# app/domain/ports.py
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, AsyncIterator, Dict, List, Mapping

# ===== Document store (driver contract) =====
# Adapter Mongo ada di app/infra/repo/mongo_store.py; test memakai fake in-memory.

class DocumentStorePort(ABC):
    """Kontrak minimal yang dipakai use-case & bootstrap seeder."""

    @abstractmethod
    async def collection_exists(self, name: str) -> bool: ...

    @abstractmethod
    async def ensure_text_index(self, collection: str, field: str) -> None:
        """Idempotent: memanggil dua kali untuk field yang sama bukan error."""

    @abstractmethod
    async def exists(self, collection: str, criteria: Mapping[str, Any]) -> bool: ...

    @abstractmethod
    async def insert(self, collection: str, document: Mapping[str, Any]) -> str: ...

    @abstractmethod
    def aggregate(
        self,
        collection: str,
        stages: List[Dict[str, Any]],
        options: Mapping[str, Any],
    ) -> AsyncIterator[Dict[str, Any]]:
        """Lazy, single-pass sequence of result documents."""

    async def ping(self) -> bool:
        return True
