from __future__ import annotations
import sys
import asyncio
import logging

from dotenv import load_dotenv
load_dotenv()

from app.application.bootstrap import BootstrapResult, BootstrapSeeder
from app.domain.ports import DocumentStorePort
from app.infra.repo.mongo_store import MongoDocumentStore


# ── Job utama (async) ──────────────────────────────────────────────
async def _run_bootstrap(store: DocumentStorePort) -> BootstrapResult:
    result = await BootstrapSeeder(store).run()
    print(f"[bootstrap_job] state={result.state.value} inserted={result.inserted}"
          + (f" reason={result.reason}" if result.reason else ""))
    return result

# Entry point sync-friendly; exit code 1 kalau koleksi belum ada
def run_bootstrap(store: DocumentStorePort | None = None) -> int:
    result = asyncio.run(_run_bootstrap(store or MongoDocumentStore()))
    return 0 if result.ready else 1


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    sys.exit(run_bootstrap())
