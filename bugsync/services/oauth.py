# bugsync/services/oauth.py
import logging
import urllib.parse

import httpx
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from bugsync.core.config import settings
from bugsync.services.token_store import save_token

logger = logging.getLogger(__name__)

AUTHORIZE_URL = "https://github.com/login/oauth/authorize"
TOKEN_URL = "https://github.com/login/oauth/access_token"
DEFAULT_USER_ID = "default_user"


class OAuthError(Exception):
    """The code exchange or token save failed; `message` is shown to the user."""

    def __init__(self, message: str, status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


def build_authorize_url(user_id: str) -> str:
    # state carries the user id back to the callback
    params = {
        "client_id": settings.GITHUB_CLIENT_ID,
        "redirect_uri": settings.oauth_callback_url,
        "scope": settings.GITHUB_OAUTH_SCOPES,
        "state": user_id,
    }
    return AUTHORIZE_URL + "?" + urllib.parse.urlencode(params)


async def exchange_code(code: str, state: str, client: httpx.AsyncClient | None = None) -> dict:
    """POST the authorization code to GitHub and return the parsed token response."""
    data = {
        "client_id": settings.GITHUB_CLIENT_ID,
        "client_secret": settings.GITHUB_CLIENT_SECRET,
        "code": code,
        "redirect_uri": settings.oauth_callback_url,
        "state": state,
    }
    headers = {"Accept": "application/json"}

    if client is not None:
        resp = await client.post(TOKEN_URL, data=data, headers=headers)
    else:
        async with httpx.AsyncClient(timeout=None) as ad_hoc:
            resp = await ad_hoc.post(TOKEN_URL, data=data, headers=headers)

    try:
        return resp.json()
    except ValueError:
        return {"error": f"unexpected response from GitHub (HTTP {resp.status_code})"}


async def complete_auth(db: Session, code: str | None, state: str | None, client: httpx.AsyncClient | None = None) -> str:
    """Exchange `code` and store the token for the user named by `state`.

    Returns the user id the token was saved under. Nothing is written unless
    GitHub hands back an access token.
    """
    user_id = state or DEFAULT_USER_ID
    if not code:
        raise OAuthError('Missing "code" from GitHub.', status_code=400)

    try:
        token_data = await exchange_code(code, user_id, client=client)
    except httpx.HTTPError as e:
        logger.error("OAuth code exchange failed for %s: %s", user_id, e)
        raise OAuthError("Error completing OAuth.") from e

    access_token = token_data.get("access_token")
    if token_data.get("error") or not access_token:
        logger.error("GitHub OAuth error for %s: %s", user_id, token_data.get("error"))
        msg = token_data.get("error_description") or token_data.get("error") or "GitHub did not return an access token."
        raise OAuthError(f"GitHub OAuth failed: {msg}")

    try:
        save_token(db, user_id, access_token, token_data.get("token_type"), token_data.get("scope"))
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Error saving token for %s", user_id)
        raise OAuthError("Error saving OAuth token.") from e

    logger.info("Stored GitHub token for %s (scope=%s)", user_id, token_data.get("scope"))
    return user_id
