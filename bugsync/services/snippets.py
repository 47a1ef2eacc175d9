# bugsync/services/snippets.py
"""
Keyword matcher over the static troubleshooting snippet corpus.

The corpus is read once from a JSON file and never changes afterwards, so a
single `SnippetMatcher` is shared by every request.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from bugsync.core.config import settings

logger = logging.getLogger(__name__)

DEFAULT_SNIPPETS_PATH = Path(__file__).resolve().parent.parent / "data" / "snippets.json"
MAX_MATCHES = 3


@dataclass(frozen=True)
class Snippet:
    id: str
    title: str
    snippet: str = ""
    description: str = ""
    keywords: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: dict) -> "Snippet":
        return cls(
            id=str(data["id"]),
            title=data.get("title", ""),
            snippet=data.get("snippet", ""),
            description=data.get("description", ""),
            keywords=tuple(data.get("keywords") or ()),
        )

    def project(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "snippet": self.snippet,
            "description": self.description,
        }


@dataclass(frozen=True)
class ScoredSnippet:
    snippet: Snippet
    score: int


class SnippetMatcher:
    def __init__(self, snippets: list[Snippet]):
        self.snippets = tuple(snippets)

    def rank(self, text: str | None) -> list[ScoredSnippet]:
        """Score every snippet by how many of its keywords appear in `text`.

        Matching is a plain case-insensitive substring test ("cat" hits
        "category"). Snippets scoring zero are dropped; ties keep corpus order.
        """
        if not text:
            return []
        lowered = text.lower()
        scored = [
            ScoredSnippet(s, sum(1 for kw in s.keywords if kw.lower() in lowered))
            for s in self.snippets
        ]
        hits = [item for item in scored if item.score > 0]
        return sorted(hits, key=lambda item: item.score, reverse=True)

    def match(self, text: str | None) -> list[dict]:
        return [item.snippet.project() for item in self.rank(text)[:MAX_MATCHES]]


def load_snippets(path: str | Path) -> list[Snippet]:
    """Read the snippet corpus; an unreadable file gives an empty corpus."""
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        snippets = [Snippet.from_dict(item) for item in raw]
    except (OSError, ValueError, KeyError, TypeError) as e:
        logger.warning("Could not load snippets from %s: %s", path, e)
        return []
    logger.info("Loaded %d snippets from %s", len(snippets), path)
    return snippets


_matcher: SnippetMatcher | None = None


def get_matcher() -> SnippetMatcher:
    """Shared matcher, loaded on first use."""
    global _matcher
    if _matcher is None:
        _matcher = SnippetMatcher(load_snippets(settings.SNIPPETS_PATH or DEFAULT_SNIPPETS_PATH))
    return _matcher
