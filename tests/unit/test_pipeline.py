import pytest

from app.application.pipeline import (
    AggregationOptions, build_group_by_status_aggregation, build_search_aggregation,
)
from app.domain.errors import InvalidPageParameters
from app.domain.predicates import any_of, exact_match, text_relevance


def _or():
    return any_of(
        exact_match("brandName", "BRAND1"),
        exact_match("categoryName", "CATEGORY2"),
        exact_match("subCategoryName", "SUB_CATEGORY3"),
    )


def test_stage_order_with_text():
    agg = build_search_aggregation([_or()], page_number=2, page_size=10, text=text_relevance("product"))
    assert [next(iter(s)) for s in agg.stages] == ["$match", "$match", "$skip", "$limit"]
    assert "$text" in agg.stages[0]["$match"]
    assert "$or" in agg.stages[1]["$match"]
    assert agg.stages[2] == {"$skip": 20}
    assert agg.stages[3] == {"$limit": 10}


def test_text_stage_omitted_without_text():
    agg = build_search_aggregation([_or()], page_number=0, page_size=5)
    assert agg.stages == [
        {"$match": _or().to_criteria()},
        {"$skip": 0},
        {"$limit": 5},
    ]


def test_disk_use_enabled():
    agg = build_search_aggregation([_or()], 0, 10)
    assert agg.options.to_driver_kwargs() == {"allowDiskUse": True}
    assert AggregationOptions(allow_disk_use=False).to_driver_kwargs() == {"allowDiskUse": False}


def test_text_predicate_not_allowed_as_filter():
    with pytest.raises(ValueError):
        build_search_aggregation([text_relevance("x")], 0, 10)


def test_text_slot_requires_text_predicate():
    with pytest.raises(ValueError):
        build_search_aggregation([], 0, 10, text=exact_match("a", 1))


@pytest.mark.parametrize("page_number,page_size", [(-1, 10), (0, 0), (0, 101)])
def test_invalid_paging_builds_nothing(page_number, page_size):
    with pytest.raises(InvalidPageParameters):
        build_search_aggregation([_or()], page_number, page_size, text=text_relevance("x"))


def test_group_by_status_stage():
    agg = build_group_by_status_aggregation()
    assert agg.stages == [{"$group": {"_id": "$status", "statusCount": {"$sum": 1}}}]
    assert agg.options.allow_disk_use
