# bugsync/services/issue_gateway.py
import logging

from sqlalchemy.orm import Session

from bugsync.core.config import settings
from bugsync.core.errors import (
    ConfigurationError,
    InvalidIssueNumber,
    MissingTitle,
    NoRepoSelected,
    NotAuthenticated,
)
from bugsync.github_client import GitHubClient
from bugsync.services.repo_settings import get_repo
from bugsync.services.snippets import SnippetMatcher
from bugsync.services.token_store import get_token_for_user

logger = logging.getLogger(__name__)

ATTRIBUTION_FOOTER = "\n\nReported via BugSync+"
DEFAULT_LABELS = ["from-cliq"]


async def create_issue(
    db: Session,
    matcher: SnippetMatcher,
    user_id: str,
    title: str | None,
    body: str | None = "",
    labels: list[str] | None = None,
) -> dict:
    if not title or not title.strip():
        raise MissingTitle()

    # Repo first: a user without a selection never reaches GitHub.
    repo = get_repo(db, user_id)
    if not repo:
        raise NoRepoSelected()

    token = get_token_for_user(db, user_id)
    if not token:
        raise NotAuthenticated()

    owner, name = repo["repo_owner"], repo["repo_name"]
    client = GitHubClient(token)
    data = await client.create_issue(
        owner,
        name,
        title=title,
        body=f"{body or ''}{ATTRIBUTION_FOOTER}",
        labels=DEFAULT_LABELS if labels is None else labels,
    )
    logger.info("Created issue %s/%s#%s for %s", owner, name, data.get("number"), user_id)

    return {
        "issueNumber": data.get("number"),
        "issueUrl": data.get("html_url"),
        "title": data.get("title"),
        "matchedSnippets": matcher.match(f"{title} {body or ''}"),
    }


def parse_issue_number(raw) -> int:
    """Positive integer or InvalidIssueNumber."""
    try:
        number = int(str(raw).strip())
    except (TypeError, ValueError):
        raise InvalidIssueNumber()
    if number <= 0:
        raise InvalidIssueNumber()
    return number


def _status_target(db: Session, user_id: str | None) -> tuple[str, str, str]:
    """(token, owner, name) for a status lookup.

    A user with both a token and a repo selection is served from their own
    pair; everyone else falls back to the globally configured repository.
    """
    if user_id:
        repo = get_repo(db, user_id)
        token = get_token_for_user(db, user_id)
        if repo and token:
            return token, repo["repo_owner"], repo["repo_name"]

    if not settings.REPO_OWNER or not settings.REPO_NAME or not settings.GITHUB_TOKEN:
        raise ConfigurationError(
            "GitHub environment variables are missing (REPO_OWNER, REPO_NAME, GITHUB_TOKEN)"
        )
    return settings.GITHUB_TOKEN, settings.REPO_OWNER, settings.REPO_NAME


async def get_issue_status(db: Session, number, user_id: str | None = None) -> dict:
    number = parse_issue_number(number)
    token, owner, name = _status_target(db, user_id)

    data = await GitHubClient(token).get_issue(owner, name, number)
    assignee = data.get("assignee") or None
    return {
        "number": data.get("number"),
        "title": data.get("title"),
        "state": data.get("state"),
        "labels": [label.get("name") if isinstance(label, dict) else label for label in data.get("labels") or []],
        "assignee": assignee.get("login") if assignee else None,
        "url": data.get("html_url"),
    }
