# app/presentation/routers.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query

from app.infra.api.security import require_api_key
from app.domain.pagination import MAX_PAGE_SIZE
from app.domain.ports import DocumentStorePort
from app.application.commands import SearchProductsCommand
from app.container import (
    get_store, build_search_use_case, build_group_by_status_use_case,
)
from app.presentation.schemas import ProductOut, StatusCountOut


router = APIRouter(dependencies=[Depends(require_api_key)])


# ── PRODUCTS: text + OR filter + paging ──────────────────────────
@router.get("/products", response_model=List[ProductOut])
async def get_products(
    productName: str = Query(...),
    brandName: str = Query(...),
    categoryName: str = Query(...),
    subCategoryName: str = Query(...),
    pageNumber: int = Query(..., ge=0),
    pageSize: int = Query(..., ge=1, le=MAX_PAGE_SIZE),
    store: DocumentStorePort = Depends(get_store),
):
    """
    Contoh:
    /products?productName=product&brandName=BRAND1&categoryName=CATEGORY2&subCategoryName=SUB_CATEGORY3&pageNumber=0&pageSize=10
    """
    cmd = SearchProductsCommand(
        productName=productName,
        brandName=brandName,
        categoryName=categoryName,
        subCategoryName=subCategoryName,
        pageNumber=pageNumber,
        pageSize=pageSize,
    )
    # StoreExecutionError / InvalidPageParameters ditangani exception handler di main.py
    products = await build_search_use_case(store).run(cmd)
    return [ProductOut(**p.model_dump()) for p in products]


# ── GROUP BY STATUS ───────────────────────────────────────────────
@router.get("/group-by-status", response_model=List[StatusCountOut])
async def group_by_status(store: DocumentStorePort = Depends(get_store)):
    groups = await build_group_by_status_use_case(store).run()
    return [StatusCountOut(**g.model_dump()) for g in groups]
