# bugsync/core/errors.py
import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class BugSyncError(Exception):
    """Base exception for BugSync+ API errors."""

    status_code: int = 500

    def __init__(self, message: Any, status_code: int | None = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(str(message))


class MissingInput(BugSyncError):
    status_code = 400


class MissingUserId(MissingInput):
    def __init__(self, message: str = "Missing userId"):
        super().__init__(message)


class MissingTitle(MissingInput):
    def __init__(self):
        super().__init__("Missing issue title")


class InvalidIssueNumber(MissingInput):
    def __init__(self):
        super().__init__("Invalid issue number")


class InvalidRepo(MissingInput):
    def __init__(self, repo: str | None):
        super().__init__(f"repo must be 'owner/name', got {repo!r}")


class NoRepoSelected(MissingInput):
    def __init__(self):
        super().__init__("No repository selected. Pick one with /save-repo first.")


class NotAuthenticated(BugSyncError):
    status_code = 401

    def __init__(self, message: str = "Not connected"):
        super().__init__(message)


class ConfigurationError(BugSyncError):
    status_code = 500


class UpstreamFailure(BugSyncError):
    """GitHub answered with a non-2xx status; body and status are kept verbatim."""

    def __init__(self, status_code: int, body: Any):
        self.body = body
        super().__init__(body, status_code=status_code)


async def bugsync_exception_handler(request: Request, exc: BugSyncError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def describe_validation_error(exc: RequestValidationError) -> str:
    """One line per bad field, e.g. "body.labels: Input should be a valid list"."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or "Invalid request"


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed input is a MissingInput-class error: 400 with the usual error body
    message = describe_validation_error(exc)
    logger.info("Rejected %s %s: %s", request.method, request.url.path, message)
    return JSONResponse(status_code=MissingInput.status_code, content={"error": message})
