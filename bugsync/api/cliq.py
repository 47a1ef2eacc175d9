# bugsync/api/cliq.py
import json
import logging
import urllib.parse

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from bugsync.core.config import settings
from bugsync.core.db import get_db
from bugsync.core.errors import BugSyncError, NotAuthenticated, UpstreamFailure
from bugsync.services.cliq import (
    BUG_USAGE,
    BUGSTATUS_USAGE,
    build_issue_card,
    build_status_text,
    parse_bug_text,
    parse_status_command,
)
from bugsync.services.issue_gateway import create_issue, get_issue_status
from bugsync.services.oauth import DEFAULT_USER_ID
from bugsync.services.snippets import SnippetMatcher, get_matcher

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cliq/commands", tags=["cliq"])

# Cliq always gets a 200 with a chat message; failures are reported in the text.


def command_text(payload: dict) -> str:
    text = payload.get("text") or payload.get("message") or payload.get("command") or ""
    return text if isinstance(text, str) else str(text)


def sender_id(payload: dict) -> str | None:
    user = payload.get("user")
    if payload.get("userId"):
        return str(payload["userId"])
    if isinstance(user, dict) and user.get("id"):
        return str(user["id"])
    return None


def connect_link(user_id: str) -> str:
    return f"{settings.BACKEND_BASE_URL}/connect/github?" + urllib.parse.urlencode({"userId": user_id})


def describe_error(exc: BugSyncError) -> str:
    if isinstance(exc, UpstreamFailure):
        return json.dumps(exc.body)
    return str(exc.message)


@router.post("/bug")
async def bug_command(
    payload: dict | None = Body(default=None),
    db: Session = Depends(get_db),
    matcher: SnippetMatcher = Depends(get_matcher),
):
    payload = payload or {}
    parsed = parse_bug_text(command_text(payload))
    if not parsed.title:
        return {"text": BUG_USAGE}

    user_id = sender_id(payload) or DEFAULT_USER_ID
    try:
        # chat-created issues carry the default tag when no hashtags were given
        result = await create_issue(db, matcher, user_id, parsed.title, parsed.body, parsed.labels or None)
    except NotAuthenticated:
        return {"text": f"🔑 GitHub is not connected yet. Connect here: {connect_link(user_id)}"}
    except BugSyncError as e:
        return {"text": f"⚠️ GitHub Issue Creation Failed: {describe_error(e)}"}
    except Exception:
        logger.exception("/bug command failed for %s", user_id)
        return {"text": "⚠️ Internal server error while creating issue."}

    return build_issue_card(result["issueUrl"], result["issueNumber"], result["matchedSnippets"])


@router.post("/bugstatus")
async def bugstatus_command(payload: dict | None = Body(default=None), db: Session = Depends(get_db)):
    payload = payload or {}
    number = None
    try:
        number = parse_status_command(command_text(payload))
        if number is None:
            return {"text": BUGSTATUS_USAGE}
        status = await get_issue_status(db, number, user_id=sender_id(payload))
    except BugSyncError as e:
        return {"text": f"⚠️ Error fetching status: {describe_error(e)}"}
    except Exception:
        logger.exception("/bugstatus command failed for #%s", number)
        return {"text": "⚠️ Internal error fetching issue status."}

    return {"text": build_status_text(status)}
