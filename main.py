# main.py
from dotenv import load_dotenv
load_dotenv()

import os
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.container import build_bootstrap_seeder, get_store
from app.domain.errors import InvalidPageParameters, StoreExecutionError
from app.presentation.health import router as health_router
from app.presentation.routers import router as products_router
from app.presentation.schemas import ErrorResponse

# --- logging config HARUS di atas ---
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

# gunakan logger aplikasi sendiri, bukan 'uvicorn.access'
app_logger = logging.getLogger("productsearch.request")


# ─────────────────────────────────────────────────────────────
# Startup: cek koleksi, text index, sample data
# ─────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    result = await build_bootstrap_seeder(app.state.store_factory()).run()
    if not result.ready:
        # biarkan server gagal start; schema harus disiapkan di luar service
        raise RuntimeError(result.reason)
    app_logger.info("Bootstrap ready (inserted %d sample products)", result.inserted)
    yield


app = FastAPI(
    title="Product Search API",
    version=os.getenv("APP_VERSION", "0.1.0"),
    lifespan=lifespan,
)
# factory store yang dipakai saat startup (bootstrap); bisa diganti sebelum app start
app.state.store_factory = get_store


@app.middleware("http")
async def log_requests(request: Request, call_next):
    app_logger.info(f"➡️ Incoming {request.method} {request.url.path}")
    try:
        response = await call_next(request)
        app_logger.info(f"⬅️ Completed {request.method} {request.url.path} -> {response.status_code}")
        return response
    except Exception:
        app_logger.exception(f"❌ Unhandled error on {request.method} {request.url.path}")
        raise

# ─────────────────────────────────────────────────────────────
# CORS (atur via env: CORS_ALLOW_ORIGINS="https://foo.com,https://bar.com")
# ─────────────────────────────────────────────────────────────
raw_origins = os.getenv("CORS_ALLOW_ORIGINS", "*")
allow_origins = [o.strip().rstrip("/") for o in raw_origins.split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["*"],
)


# ─────────────────────────────────────────────────────────────
# Error envelope: {timestamp, message, statusCode}
# Validasi query param default-nya 422 di FastAPI; API ini pakai 400.
# ─────────────────────────────────────────────────────────────
def _error(status_code: int, message: str) -> JSONResponse:
    body = ErrorResponse(message=message, statusCode=status_code)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(x) for x in err.get("loc", ()) if x != "query")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or "Invalid request"


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    return _error(status.HTTP_400_BAD_REQUEST, _validation_message(exc))


@app.exception_handler(InvalidPageParameters)
async def handle_invalid_page(request: Request, exc: InvalidPageParameters):
    return _error(status.HTTP_400_BAD_REQUEST, str(exc))


@app.exception_handler(StoreExecutionError)
async def handle_store_error(request: Request, exc: StoreExecutionError):
    app_logger.error("Store error on %s %s: %s", request.method, request.url.path, exc)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))


# ─────────────────────────────────────────────────────────────
# Routes
# ─────────────────────────────────────────────────────────────
app.include_router(products_router, tags=["products"])
app.include_router(health_router, tags=["health"])

@app.get("/")
async def root():
    return {
        "name": "Product Search API",
        "version": os.getenv("APP_VERSION", "0.1.0"),
        "ok": True,
    }
