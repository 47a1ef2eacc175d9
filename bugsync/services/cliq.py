# bugsync/services/cliq.py
"""
Slash-command parsing and reply formatting for Cliq.

/bug takes "Title | Body | #label1 #label2"; /bugstatus takes an issue number.
"""

import re
from dataclasses import dataclass, field

BUG_USAGE = "❗ Usage: /bug <title> | <description> | #labels"
BUGSTATUS_USAGE = "❗ Usage: /bugstatus <issueNumber>"

HASHTAG_RE = re.compile(r"#(\w+)")
LABEL_SPLIT_RE = re.compile(r"[ ,]+")


@dataclass
class ParsedBug:
    title: str = ""
    body: str = ""
    labels: list[str] = field(default_factory=list)


def parse_bug_text(text: str | None) -> ParsedBug:
    """Split a /bug command into title, body and labels.

    Text without any "|" yields an empty title, which callers answer with
    the usage help.
    """
    if not text or not isinstance(text, str) or "|" not in text:
        return ParsedBug()

    parts = [p.strip() for p in text.split("|")]
    parts = [p for p in parts if p]

    title = parts[0] if parts else ""
    body = parts[1] if len(parts) > 1 else ""

    if len(parts) > 2:
        labels = [label.lstrip("#").strip() for label in LABEL_SPLIT_RE.split(parts[2])]
        labels = [label for label in labels if label]
    else:
        # no label segment, pick up hashtags anywhere
        labels = HASHTAG_RE.findall(text)

    return ParsedBug(title=title, body=body, labels=labels)


def parse_status_command(text) -> int | None:
    """Issue number from a /bugstatus command, or None when it is not usable."""
    tokens = str(text or "").split()
    if not tokens or not tokens[0].isdecimal():
        return None
    number = int(tokens[0])
    return number if number > 0 else None


def format_snippets(matched: list[dict]) -> str:
    blocks = []
    for s in matched or []:
        code = f"```\n{s['snippet']}\n```" if s.get("snippet") else ""
        blocks.append(f"**{s.get('title', '')}**\n{s.get('description') or ''}\n{code}")
    return "\n\n---\n\n".join(blocks)


def build_issue_card(issue_url: str, issue_number: int, matched: list[dict]) -> dict:
    return {
        "text": f"✅ Issue created: [#{issue_number}]({issue_url})",
        "attachments": [
            {
                "title": f"Issue #{issue_number}",
                "text": issue_url,
                "type": "rich",
                "fields": [
                    {
                        "title": "Suggestions",
                        "value": format_snippets(matched) or "No relevant suggestions found",
                        "short": False,
                    }
                ],
            }
        ],
    }


def build_status_text(status: dict) -> str:
    return f"Issue #{status['number']}: {status['title']}\nStatus: {status['state']}\nURL: {status['url']}"
