# app/domain/predicates.py
"""
Predicate builder for product queries.

Only two shapes are supported: exact equality on a field and MongoDB
`$text` relevance on the text-indexed field. Predicates can be OR-composed
with `any_of`.

Every predicate exposes two views:

  - `to_criteria()`     -> a plain criteria document (find / exists / $or clause)
  - `to_match_stage()`  -> a `$match` aggregation stage

The text predicate is the odd one out. `$text` is not a field condition, the
server only accepts it in the first `$match` stage of a pipeline, and it can
not be nested in an `$or` unless every other clause is text-indexed too.
`TextRelevance` therefore wraps the raw `$text` query document and hands it
out through the same two methods, so the assembler can treat it like any
other criterion. This is a workaround for the driver's stage rules, not a
change in matching semantics.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Tuple

from app.domain.models import TEXT_FIELD


class Predicate(ABC):
    is_text: ClassVar[bool] = False

    @abstractmethod
    def to_criteria(self) -> Dict[str, Any]: ...

    def to_match_stage(self) -> Dict[str, Any]:
        return {"$match": self.to_criteria()}


@dataclass(frozen=True)
class ExactMatch(Predicate):
    field: str
    value: Any

    def to_criteria(self) -> Dict[str, Any]:
        return {self.field: self.value}


@dataclass(frozen=True)
class FieldExists(Predicate):
    field: str

    def to_criteria(self) -> Dict[str, Any]:
        return {self.field: {"$exists": True}}


@dataclass(frozen=True)
class TextRelevance(Predicate):
    """
    `$text` search, matching documents whose indexed field contains ANY token
    of `query`. Mongo only allows one text index per collection, so `field`
    is kept for logging only; the operator targets the index implicitly.
    """
    query: str
    case_sensitive: bool = False
    field: str = TEXT_FIELD
    is_text: ClassVar[bool] = True

    def _text_query(self) -> Dict[str, Any]:
        return {"$text": {"$search": self.query, "$caseSensitive": self.case_sensitive}}

    def to_criteria(self) -> Dict[str, Any]:
        # shim: query document disguised as an ordinary criterion
        return self._text_query()


@dataclass(frozen=True)
class AnyOf(Predicate):
    predicates: Tuple[Predicate, ...]

    def to_criteria(self) -> Dict[str, Any]:
        return {"$or": [p.to_criteria() for p in self.predicates]}


# ──────────────────────────────────────────────────────────────
#  Builder functions
# ──────────────────────────────────────────────────────────────
def exact_match(field: str, value: Any) -> ExactMatch:
    if not field:
        raise ValueError("field name must not be empty")
    return ExactMatch(field, value)


def field_exists(field: str) -> FieldExists:
    if not field:
        raise ValueError("field name must not be empty")
    return FieldExists(field)


def text_relevance(query: str, case_sensitive: bool = False, field: str = TEXT_FIELD) -> TextRelevance:
    return TextRelevance(query=query, case_sensitive=case_sensitive, field=field)


def any_of(*predicates: Predicate) -> AnyOf:
    if len(predicates) < 2:
        raise ValueError("any_of needs at least two predicates")
    if any(p.is_text for p in predicates):
        raise ValueError("text predicates can not be OR-composed with field predicates")
    return AnyOf(tuple(predicates))
