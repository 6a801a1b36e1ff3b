"""Order Ledger API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map LedgerError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database and ledger host initialized on startup via lifespan context manager
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from orderledger.api.error_handlers import register_error_handlers
from orderledger.api.routes import health, orders, profiles
from orderledger.config import get_settings
from orderledger.infrastructure.database import init_db
from orderledger.infrastructure.observability import setup_logging
from orderledger.infrastructure.snapshot_repository import SqlLedgerSnapshotRepository
from orderledger.services.ledger_host import init_ledger_host

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    await init_ledger_host(
        SqlLedgerSnapshotRepository(manager),
        settings.ledger_name,
        settings.ledger_owner,
    )
    logger.info("Order Ledger API started", extra={"ledger": settings.ledger_name})
    yield
    await manager.dispose()
    logger.info("Order Ledger API shutting down")


app = FastAPI(
    title="Order Ledger API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(profiles.router)
app.include_router(orders.router)

register_error_handlers(app)
