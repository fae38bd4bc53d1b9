# tests/fakes.py
from __future__ import annotations

import asyncio
import re
from typing import Any, AsyncIterator, Dict, List, Mapping, Optional

from bson import ObjectId

from app.domain.errors import StoreExecutionError
from app.domain.ports import DocumentStorePort

_TOKEN = re.compile(r"\w+")


def _tokens(s: str, case_sensitive: bool) -> set:
    s = s or ""
    if not case_sensitive:
        s = s.lower()
    return set(_TOKEN.findall(s))


class InMemoryDocumentStore(DocumentStorePort):
    """
    Fake Mongo untuk test. Hanya mendukung bentuk stage yang dipakai service:
    $match (equality, $or, $exists, $text), $skip, $limit, $group+$sum.
    Aturan server yang ditiru: $text butuh text index dan harus di $match pertama.
    """

    def __init__(self, collections: Optional[Dict[str, List[Dict[str, Any]]]] = None):
        self.collections: Dict[str, List[Dict[str, Any]]] = collections or {}
        self.text_indexes: Dict[str, List[str]] = {}
        self.inserted: List[Dict[str, Any]] = []
        self.aggregations: List[Dict[str, Any]] = []

    # ── helpers for tests ──
    def create_collection(self, name: str, docs: Optional[List[Dict[str, Any]]] = None) -> None:
        self.collections[name] = []
        for d in docs or []:
            self.collections[name].append({"_id": ObjectId(), **d})

    # ── port ──
    async def collection_exists(self, name: str) -> bool:
        return name in self.collections

    async def ensure_text_index(self, collection: str, field: str) -> None:
        fields = self.text_indexes.setdefault(collection, [])
        if field in fields:
            return
        if fields:
            raise StoreExecutionError("ensure_text_index", "only one text index per collection")
        fields.append(field)

    async def exists(self, collection: str, criteria: Mapping[str, Any]) -> bool:
        return any(self._matches(collection, d, criteria) for d in self.collections.get(collection, []))

    async def insert(self, collection: str, document: Mapping[str, Any]) -> str:
        doc = {"_id": ObjectId(), **document}
        self.collections.setdefault(collection, []).append(doc)
        self.inserted.append(doc)
        return str(doc["_id"])

    async def aggregate(
        self,
        collection: str,
        stages: List[Dict[str, Any]],
        options: Mapping[str, Any],
    ) -> AsyncIterator[Dict[str, Any]]:
        self.aggregations.append({"collection": collection, "stages": stages, "options": dict(options)})
        docs = list(self.collections.get(collection, []))
        for i, stage in enumerate(stages):
            (op, arg), = stage.items()
            if op == "$match":
                if "$text" in arg and i != 0:
                    raise StoreExecutionError("aggregate", "$match with $text is only allowed as the first pipeline stage")
                docs = [d for d in docs if self._matches(collection, d, arg)]
            elif op == "$skip":
                docs = docs[arg:]
            elif op == "$limit":
                docs = docs[:arg]
            elif op == "$group":
                docs = self._group(docs, arg)
            else:
                raise StoreExecutionError("aggregate", f"unsupported stage {op}")
        for d in docs:
            yield dict(d)

    # ── evaluation ──
    def _matches(self, collection: str, doc: Dict[str, Any], criteria: Mapping[str, Any]) -> bool:
        for key, cond in criteria.items():
            if key == "$or":
                if not any(self._matches(collection, doc, c) for c in cond):
                    return False
            elif key == "$text":
                if not self._text_match(collection, doc, cond):
                    return False
            elif isinstance(cond, dict) and "$exists" in cond:
                if (key in doc) != bool(cond["$exists"]):
                    return False
            elif doc.get(key) != cond:
                return False
        return True

    def _text_match(self, collection: str, doc: Dict[str, Any], cond: Dict[str, Any]) -> bool:
        fields = self.text_indexes.get(collection)
        if not fields:
            raise StoreExecutionError("aggregate", "text index required for $text query")
        cs = bool(cond.get("$caseSensitive", False))
        wanted = _tokens(cond["$search"], cs)
        have = set()
        for f in fields:
            have |= _tokens(doc.get(f, ""), cs)
        return bool(wanted & have)

    @staticmethod
    def _group(docs: List[Dict[str, Any]], spec: Dict[str, Any]) -> List[Dict[str, Any]]:
        key_field = spec["_id"].lstrip("$")
        out: Dict[Any, Dict[str, Any]] = {}
        for d in docs:
            k = d.get(key_field)
            row = out.setdefault(k, {"_id": k})
            for name, acc in spec.items():
                if name == "_id":
                    continue
                row[name] = row.get(name, 0) + acc["$sum"]
        return list(out.values())


def run(coro):
    return asyncio.run(coro)
