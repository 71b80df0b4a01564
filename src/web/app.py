"""FastAPI application entry point."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from observability import log_run_summary, metrics
from web.deps import get_config, get_db_path
from web.envelope import register_error_handlers
from web.routes import analytics, external, journals, moods, notifications
from web.user_store import init_db

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db(get_db_path())
    logger.info("web.startup")
    yield
    log_run_summary()
    logger.info("web.shutdown")


app = FastAPI(
    title="Moodlog",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[get_config().web.frontend_origin],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(moods.router)
app.include_router(journals.router)
app.include_router(analytics.router)
app.include_router(external.router)
app.include_router(notifications.router)


@app.get("/api/health")
async def health():
    return {"status": "ok", "metrics": metrics.summary()}
