# bugsync/main.py
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

import bugsync.models  # noqa: F401  registers tables on Base.metadata
from bugsync import __version__
from bugsync.api.auth_github import router as github_auth_router
from bugsync.api.cliq import router as cliq_router
from bugsync.api.github_routes import router as github_routes_router
from bugsync.api.issues import router as issues_router
from bugsync.core.config import settings
from bugsync.core.db import Base, engine
from bugsync.core.errors import (
    BugSyncError,
    bugsync_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from bugsync.services.snippets import get_matcher

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings.configure_logging()
    settings.warn_missing(logger)

    # Create DB tables (simple auto-create, no migrations)
    Base.metadata.create_all(bind=engine)

    # Snippet corpus is read once and shared for the process lifetime
    get_matcher()

    logger.info("BugSync+ %s started", __version__)
    yield


app = FastAPI(title="BugSync+", version=__version__, lifespan=lifespan)

app.add_exception_handler(BugSyncError, bugsync_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# Include routers
app.include_router(github_auth_router)
app.include_router(github_routes_router)
app.include_router(issues_router)
app.include_router(cliq_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # browser UI is served from a different origin
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    response = await call_next(request)
    logger.info("%s %s - %s", request.method, request.url.path, response.status_code)
    return response


@app.get("/health")
async def health():
    return {
        "status": "ok",
        "message": "BugSync+ backend is running",
        "time": datetime.now(timezone.utc).isoformat(),
    }
