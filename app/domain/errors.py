# app/domain/errors.py
from __future__ import annotations


class ProductSearchError(Exception):
    """Base class for every error raised by the product search service."""


class MissingCollectionError(ProductSearchError):
    """The collection the service reads from was not provisioned."""

    def __init__(self, collection: str):
        self.collection = collection
        super().__init__(f"Required collection {{{collection}}} does not exist")


class InvalidPageParameters(ProductSearchError):
    """pageNumber / pageSize outside the accepted range."""


class StoreExecutionError(ProductSearchError):
    """Raised by the store adapter when the database driver fails."""

    def __init__(self, operation: str, detail: str):
        self.operation = operation
        self.detail = detail
        super().__init__(f"{operation} failed: {detail}")
