# bugsync/api/auth_github.py
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse
from sqlalchemy.orm import Session

from bugsync.core.db import get_db
from bugsync.services.oauth import DEFAULT_USER_ID, OAuthError, build_authorize_url, complete_auth

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

CONNECTED_HTML = """
<h1>GitHub Connected Successfully 🎉</h1>
<p>Your account is now authorized. You can close this window.</p>
"""


@router.get("/connect/github")
def connect_github(userId: str | None = None):
    url = build_authorize_url(userId or DEFAULT_USER_ID)
    logger.info("Redirecting %s to GitHub OAuth", userId or DEFAULT_USER_ID)
    return RedirectResponse(url, status_code=302)


@router.get("/auth/github/callback")
async def github_callback(code: str | None = None, state: str | None = None, db: Session = Depends(get_db)):
    try:
        await complete_auth(db, code, state)
    except OAuthError as e:
        return PlainTextResponse(e.message, status_code=e.status_code)
    return HTMLResponse(CONNECTED_HTML)
