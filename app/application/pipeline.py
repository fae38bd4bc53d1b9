# app/application/pipeline.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from app.domain.pagination import compute_window
from app.domain.predicates import Predicate


@dataclass(frozen=True)
class AggregationOptions:
    # $match / $group can exceed the server's in-memory stage limit on large
    # collections; allowDiskUse lets Mongo spill to temp files instead of failing.
    allow_disk_use: bool = True

    def to_driver_kwargs(self) -> Dict[str, Any]:
        return {"allowDiskUse": self.allow_disk_use}


@dataclass(frozen=True)
class Aggregation:
    stages: List[Dict[str, Any]]
    options: AggregationOptions = field(default_factory=AggregationOptions)


def build_search_aggregation(
    filters: Sequence[Predicate],
    page_number: int,
    page_size: int,
    text: Optional[Predicate] = None,
) -> Aggregation:
    """
    Urutan stage tetap:
        [$match $text]  (hanya jika ada text predicate)
        [$match filter] (satu stage per filter)
        [$skip] [$limit]

    `$text` wajib berada di stage $match pertama, jadi text predicate
    tidak boleh ikut di `filters`.
    """
    # paging divalidasi dulu; tidak ada stage yang dibangun dari input invalid
    window = compute_window(page_number, page_size)

    stages: List[Dict[str, Any]] = []
    if text is not None:
        if not text.is_text:
            raise ValueError("text stage expects a text relevance predicate")
        stages.append(text.to_match_stage())

    for p in filters:
        if p.is_text:
            raise ValueError("text relevance predicate must be the first stage, pass it as `text`")
        stages.append(p.to_match_stage())

    stages.append({"$skip": window.skip})
    stages.append({"$limit": window.limit})
    return Aggregation(stages=stages)


def build_group_by_status_aggregation() -> Aggregation:
    return Aggregation(
        stages=[{"$group": {"_id": "$status", "statusCount": {"$sum": 1}}}],
    )
