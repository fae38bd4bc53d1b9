# app/application/commands.py
from pydantic import BaseModel


class SearchProductsCommand(BaseModel):
    # range pageNumber/pageSize dicek di compute_window (InvalidPageParameters)
    productName: str
    brandName: str
    categoryName: str
    subCategoryName: str
    pageNumber: int
    pageSize: int
