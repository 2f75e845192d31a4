"""Tests for related-note matching (services/relevance.py)."""

from __future__ import annotations

from dataclasses import dataclass, field

from notewise.services.relevance import (
    MAX_RELATED,
    RelatedNote,
    find_related,
    is_related,
    lexical_overlap,
    match_reasons,
    related_payload,
    shared_tags,
    tokenize,
)


@dataclass
class FakeNote:
    id: int
    title: str = ""
    content: str = ""
    summary: str | None = None
    tags: list[str] = field(default_factory=list)
    ai_tags: list[str] = field(default_factory=list)
    category: str | None = None


def _target(**kwargs) -> FakeNote:
    return FakeNote(id=1, **kwargs)


# -----------------------------------------------------------------------
# tokenize / lexical_overlap
# -----------------------------------------------------------------------


class TestTokenize:
    def test_lowercases_and_splits_on_non_word(self):
        assert tokenize("Hello, World! foo-bar") == {"hello", "world", "foo", "bar"}

    def test_empty_and_none(self):
        assert tokenize("") == set()
        assert tokenize(None) == set()

    def test_unicode_words_kept(self):
        assert "größe" in tokenize("Größe der Datei")


class TestLexicalOverlap:
    def test_case_insensitive_match(self):
        a = _target(title="Notes", content="Programming is fun")
        b = FakeNote(id=2, content="I like programming")
        assert lexical_overlap(a, b) == 1

    def test_short_words_ignored(self):
        # "plan" and "four" are exactly four characters long
        a = _target(title="plan", content="four words here")
        b = FakeNote(id=2, title="plan", content="four words here")
        assert lexical_overlap(a, b) == 1  # only "words"

    def test_repeated_words_counted_once(self):
        a = _target(content="budget budget budget")
        b = FakeNote(id=2, content="budget budget")
        assert lexical_overlap(a, b) == 1

    def test_title_and_content_combined(self):
        a = _target(title="Release", content="schedule")
        b = FakeNote(id=2, title="schedule", content="release")
        assert lexical_overlap(a, b) == 2


# -----------------------------------------------------------------------
# Signals
# -----------------------------------------------------------------------


class TestSignals:
    def test_unrelated_notes_excluded(self):
        a = _target(title="Garden", content="tomatoes and basil", tags=["home"], category="Life")
        b = FakeNote(id=2, title="Sprint", content="deploy the service", tags=["work"], category="Work")
        assert not is_related(a, b)
        assert match_reasons(a, b) == []

    def test_shared_user_tag(self):
        a = _target(tags=["python"])
        b = FakeNote(id=2, tags=["python", "web"])
        assert is_related(a, b)
        assert match_reasons(a, b) == ["tags"]

    def test_target_ai_tag_matches_candidate_user_tag(self):
        a = _target(ai_tags=["travel"])
        b = FakeNote(id=2, tags=["travel"])
        assert shared_tags(a, b) == {"travel"}

    def test_target_user_tag_matches_candidate_ai_tag(self):
        a = _target(tags=["travel"])
        b = FakeNote(id=2, ai_tags=["travel"])
        assert is_related(a, b)

    def test_tags_compared_exactly(self):
        a = _target(tags=["Python"])
        b = FakeNote(id=2, tags=["python"])
        assert not shared_tags(a, b)

    def test_same_category(self):
        a = _target(category="Work")
        b = FakeNote(id=2, category="Work")
        assert match_reasons(a, b) == ["category"]

    def test_missing_category_never_matches(self):
        a = _target(category=None)
        b = FakeNote(id=2, category=None)
        assert not is_related(a, b)

        a = _target(category="")
        b = FakeNote(id=2, category="")
        assert not is_related(a, b)

    def test_category_is_case_sensitive(self):
        a = _target(category="Work")
        b = FakeNote(id=2, category="work")
        assert not is_related(a, b)

    def test_four_shared_long_words_relate(self):
        a = _target(content="python asyncio database migration")
        b = FakeNote(id=2, content="Database migration with Python and asyncio")
        assert lexical_overlap(a, b) == 4
        assert match_reasons(a, b) == ["words"]

    def test_three_shared_long_words_not_enough(self):
        a = _target(content="python asyncio database")
        b = FakeNote(id=2, content="python asyncio database")
        assert lexical_overlap(a, b) == 3
        assert not is_related(a, b)

    def test_category_scenario_with_low_word_overlap(self):
        a = _target(title="Q3 Plan", content="budget forecast release plan", category="Work")
        b = FakeNote(id=2, title="Q4 Plan", content="budget forecast timeline", category="Work")
        assert lexical_overlap(a, b) == 2
        assert is_related(a, b)
        assert match_reasons(a, b) == ["category"]

    def test_all_reasons(self):
        a = _target(tags=["x"], category="C", content="alpha bravo charlie delta echoes")
        b = FakeNote(id=2, tags=["x"], category="C", content="alpha bravo charlie delta echoes")
        assert match_reasons(a, b) == ["tags", "category", "words"]


# -----------------------------------------------------------------------
# find_related
# -----------------------------------------------------------------------


class TestFindRelated:
    def test_empty_candidates(self):
        assert find_related(_target(tags=["a"]), []) == []

    def test_excludes_target_itself(self):
        target = _target(tags=["a"])
        same_id = FakeNote(id=1, tags=["a"])
        other = FakeNote(id=2, tags=["a"])
        result = find_related(target, [target, same_id, other])
        assert [r.id for r in result] == [2]

    def test_capped_at_five(self):
        target = _target(tags=["shared"])
        candidates = [FakeNote(id=i, tags=["shared"]) for i in range(2, 12)]
        result = find_related(target, candidates)
        assert len(result) == MAX_RELATED
        assert [r.id for r in result] == [2, 3, 4, 5, 6]

    def test_keeps_input_order(self):
        target = _target(tags=["t"], category="Work")
        candidates = [
            FakeNote(id=9, category="Work"),
            FakeNote(id=3, tags=["other"]),
            FakeNote(id=5, tags=["t"], category="Work"),
        ]
        assert [r.id for r in find_related(target, candidates)] == [9, 5]

    def test_custom_limit(self):
        target = _target(tags=["t"])
        candidates = [FakeNote(id=i, tags=["t"]) for i in range(2, 6)]
        assert len(find_related(target, candidates, limit=2)) == 2
        assert find_related(target, candidates, limit=0) == []

    def test_projection_pools_tags(self):
        target = _target(tags=["t"])
        candidate = FakeNote(
            id=2,
            title="Other",
            summary="short",
            tags=["t"],
            ai_tags=["ai"],
            category="Misc",
        )
        (result,) = find_related(target, [candidate])
        assert result == RelatedNote(id=2, title="Other", summary="short", category="Misc", tags=["t", "ai"])

    def test_payload_shape(self):
        target = _target(tags=["t"])
        payload = related_payload(find_related(target, [FakeNote(id=2, title="B", tags=["t"])]))
        assert payload == [
            {"id": 2, "title": "B", "summary": None, "category": None, "tags": ["t"]},
        ]

    def test_none_tag_lists_tolerated(self):
        target = FakeNote(id=1, tags=None, ai_tags=None, category="A")
        candidate = FakeNote(id=2, tags=None, ai_tags=None, category="A")
        (result,) = find_related(target, [candidate])
        assert result.tags == []
