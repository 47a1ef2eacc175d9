# bugsync/api/issues.py
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from bugsync.core.db import get_db
from bugsync.core.errors import MissingUserId
from bugsync.services.issue_gateway import create_issue, get_issue_status
from bugsync.services.snippets import SnippetMatcher, get_matcher

router = APIRouter(tags=["issues"])


class IssueCreate(BaseModel):
    userId: str | None = None
    title: str | None = None
    body: str | None = ""
    labels: list[str] | None = None


class MatchedSnippet(BaseModel):
    id: str
    title: str
    snippet: str
    description: str


class IssueCreated(BaseModel):
    issueNumber: int
    issueUrl: str
    title: str | None = None
    matchedSnippets: list[MatchedSnippet]


class IssueStatus(BaseModel):
    number: int
    title: str | None = None
    state: str | None = None
    labels: list[str]
    assignee: str | None = None
    url: str | None = None


@router.post("/create-issue", response_model=IssueCreated)
async def create_issue_route(
    payload: IssueCreate,
    db: Session = Depends(get_db),
    matcher: SnippetMatcher = Depends(get_matcher),
):
    if not payload.userId:
        raise MissingUserId()
    return await create_issue(db, matcher, payload.userId, payload.title, payload.body, payload.labels)


@router.get("/issue-status/{number}", response_model=IssueStatus)
async def issue_status_route(number: str, userId: str | None = None, db: Session = Depends(get_db)):
    return await get_issue_status(db, number, user_id=userId)
