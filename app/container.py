# app/container.py
from functools import lru_cache

from app.domain.ports import DocumentStorePort
from app.infra.repo.mongo_store import MongoDocumentStore

from app.application.bootstrap import BootstrapSeeder
from app.application.search_use_case import GroupByStatusUseCase, SearchProductsUseCase


@lru_cache
def _store() -> MongoDocumentStore: return MongoDocumentStore()

def get_store() -> DocumentStorePort:
    return _store()

# use-case murah dibuat; satu instance per request, store di-share
def build_search_use_case(store: DocumentStorePort) -> SearchProductsUseCase:
    return SearchProductsUseCase(store)

def build_group_by_status_use_case(store: DocumentStorePort) -> GroupByStatusUseCase:
    return GroupByStatusUseCase(store)

def build_bootstrap_seeder(store: DocumentStorePort) -> BootstrapSeeder:
    return BootstrapSeeder(store)
