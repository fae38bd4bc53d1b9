# app/presentation/health.py
from fastapi import APIRouter, Depends

from app.container import get_store
from app.domain.models import COLLECTION_NAME
from app.domain.ports import DocumentStorePort

router = APIRouter()

@router.get("/healthz")
async def healthz():
    # Liveness: proses hidup
    return {"ok": True}

@router.get("/readyz")
async def readyz(store: DocumentStorePort = Depends(get_store)):
    checks = {}; ok = True
    # Mongo
    try:
        checks["mongo"] = bool(await store.ping()); ok = ok and checks["mongo"]
    except Exception as e:
        checks["mongo"] = False; checks["mongo_error"] = str(e); ok = False
    # Collection
    try:
        checks["collection"] = bool(await store.collection_exists(COLLECTION_NAME))
        ok = ok and checks["collection"]
    except Exception as e:
        checks["collection"] = False; checks["collection_error"] = str(e); ok = False
    return {"ok": ok, **checks}
