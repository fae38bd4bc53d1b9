# app/application/search_use_case.py
from __future__ import annotations

import logging
from typing import List

from app.domain.models import COLLECTION_NAME, Product, StatusCount
from app.domain.ports import DocumentStorePort
from app.domain.predicates import any_of, exact_match, text_relevance

from .commands import SearchProductsCommand
from .materializer import materialize_products, materialize_status_counts
from .pipeline import build_group_by_status_aggregation, build_search_aggregation

logger = logging.getLogger("productsearch.search")


class SearchProductsUseCase:
    """
    Text relevance on productName AND (brand OR category OR subCategory),
    then skip/limit. Stateless: tiap request membangun pipeline sendiri.
    """
    def __init__(self, store: DocumentStorePort, collection: str = COLLECTION_NAME):
        self.store = store
        self.collection = collection

    async def run(self, cmd: SearchProductsCommand) -> List[Product]:
        logger.info(
            "Request parameters: productName=%s brandName=%s categoryName=%s "
            "subCategoryName=%s pageNumber=%s pageSize=%s",
            cmd.productName, cmd.brandName, cmd.categoryName,
            cmd.subCategoryName, cmd.pageNumber, cmd.pageSize,
        )

        q = (cmd.productName or "").strip()
        text = text_relevance(q, case_sensitive=False) if q else None

        or_match = any_of(
            exact_match("brandName", cmd.brandName),
            exact_match("categoryName", cmd.categoryName),
            exact_match("subCategoryName", cmd.subCategoryName),
        )

        agg = build_search_aggregation(
            [or_match], cmd.pageNumber, cmd.pageSize, text=text,
        )
        cursor = self.store.aggregate(
            self.collection, agg.stages, agg.options.to_driver_kwargs()
        )
        products = await materialize_products(cursor)

        logger.info("Found %d products", len(products))
        return products


class GroupByStatusUseCase:
    def __init__(self, store: DocumentStorePort, collection: str = COLLECTION_NAME):
        self.store = store
        self.collection = collection

    async def run(self) -> List[StatusCount]:
        agg = build_group_by_status_aggregation()
        cursor = self.store.aggregate(
            self.collection, agg.stages, agg.options.to_driver_kwargs()
        )
        groups = await materialize_status_counts(cursor)
        logger.info("Found %d status groups: %s", len(groups),
                    {g.status: g.statusCount for g in groups})
        return groups
