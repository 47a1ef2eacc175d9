"""Snippet matcher — substring scoring, ordering, top-3 cut, corpus loading."""
import json

from bugsync.services.snippets import Snippet, SnippetMatcher, load_snippets


def test_single_keyword_scores_one():
    matcher = SnippetMatcher([Snippet(id="1", title="Crash", keywords=("crash",))])
    ranked = matcher.rank("App crash on login")
    assert len(ranked) == 1
    assert ranked[0].snippet.id == "1"
    assert ranked[0].score == 1


def test_match_is_case_insensitive_and_ignores_word_boundaries(matcher):
    ids = [s["id"] for s in matcher.match("CATEGORY page broken")]
    assert ids == ["cat"]


def test_match_projects_public_fields(matcher):
    result = matcher.match("crash")
    assert result == [{"id": "crash", "title": "Crash handling", "snippet": "try: ...", "description": "App crashes"}]


def test_higher_score_first_and_ties_keep_corpus_order():
    matcher = SnippetMatcher([
        Snippet(id="a", title="A", keywords=("timeout",)),
        Snippet(id="b", title="B", keywords=("timeout", "slow")),
        Snippet(id="c", title="C", keywords=("slow",)),
    ])
    ids = [s["id"] for s in matcher.match("slow timeout on save")]
    assert ids == ["b", "a", "c"]


def test_returns_at_most_three():
    matcher = SnippetMatcher([Snippet(id=str(i), title=str(i), keywords=("bug",)) for i in range(5)])
    assert [s["id"] for s in matcher.match("bug")] == ["0", "1", "2"]


def test_no_hits_and_empty_text():
    matcher = SnippetMatcher([Snippet(id="1", title="x", keywords=("crash",))])
    assert matcher.match("everything is fine") == []
    assert matcher.match("") == []
    assert matcher.match(None) == []


def test_match_is_idempotent(matcher):
    text = "login crash in category view"
    assert matcher.match(text) == matcher.match(text)


def test_load_snippets_from_file(tmp_path):
    path = tmp_path / "snippets.json"
    path.write_text(json.dumps([
        {"id": 1, "title": "Null", "description": "d", "snippet": "s", "keywords": ["null"]},
    ]), encoding="utf-8")
    snippets = load_snippets(path)
    assert snippets == [Snippet(id="1", title="Null", snippet="s", description="d", keywords=("null",))]


def test_load_snippets_missing_file_gives_empty_corpus(tmp_path):
    assert load_snippets(tmp_path / "nope.json") == []


def test_bundled_corpus_loads():
    from bugsync.services.snippets import DEFAULT_SNIPPETS_PATH

    snippets = load_snippets(DEFAULT_SNIPPETS_PATH)
    assert snippets
    assert all(s.keywords for s in snippets)
