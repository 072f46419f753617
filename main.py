from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.core.errors import register_error_handlers
from app.core.logs import configure_logging
from app.core.middleware import RequestContextMiddleware
from app.db.session import SessionLocal, init_db

from services.users.api import router as users_router
from services.inventory.api import router as skus_router
from services.storage.api import router as racks_router, stock_router
from services.orders.api import router as orders_router
from services.picking.api import router as picklists_router, items_router as picklist_items_router
from services.connectors.api import router as connectors_router
from services.dashboard.api import router as dashboard_router
from services.admin.events_api import router as events_router
from services.seed import seed_demo_data

logger = logging.getLogger(__name__)

SEED_DEMO_DATA = os.getenv("WMS_SEED_DEMO_DATA", "1") not in ("0", "false", "False")


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    # Dev-friendly schema creation (migrations are available for real upgrades)
    init_db()
    if SEED_DEMO_DATA:
        with SessionLocal() as db:
            seed_demo_data(db)
    logger.info("warehouse API ready")
    yield


app = FastAPI(title="Warehouse Management API", lifespan=lifespan)
app.add_middleware(RequestContextMiddleware)
register_error_handlers(app)

app.include_router(users_router)
app.include_router(skus_router)
app.include_router(racks_router)
app.include_router(stock_router)
app.include_router(orders_router)
app.include_router(picklists_router)
app.include_router(picklist_items_router)
app.include_router(connectors_router)
app.include_router(dashboard_router)
app.include_router(events_router)


@app.get("/health")
def health():
    return {"ok": True}
