"""Tests for keyword splitting and keyword filter composition."""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest
from sqlalchemy import select

from notewise.services.query_composer import KeywordFilter, compose, split_keywords
from tests.conftest import create_test_user


@dataclass
class FakeNote:
    title: str = ""
    content: str = ""
    tags: list[str] = field(default_factory=list)
    ai_tags: list[str] = field(default_factory=list)
    category: str | None = None


# -----------------------------------------------------------------------
# split_keywords
# -----------------------------------------------------------------------


class TestSplitKeywords:
    def test_commas(self):
        assert split_keywords("budget, forecast, Q3") == ["budget", "forecast", "Q3"]

    def test_newlines_and_commas(self):
        assert split_keywords("budget\nforecast,\n  Q3 ") == ["budget", "forecast", "Q3"]

    def test_empty_pieces_dropped(self):
        assert split_keywords(",, ,\n\n") == []

    def test_none_and_blank(self):
        assert split_keywords(None) == []
        assert split_keywords("") == []

    def test_case_insensitive_duplicates(self):
        assert split_keywords("Python, python, PYTHON, web") == ["Python", "web"]

    def test_multiword_keyword_kept(self):
        assert split_keywords("machine learning, data") == ["machine learning", "data"]


# -----------------------------------------------------------------------
# compose / in-memory matching
# -----------------------------------------------------------------------


class TestCompose:
    def test_cat_dog(self):
        keyword_filter = compose(["cat", "dog"])

        assert keyword_filter.matches(FakeNote(content="I have a cat"))
        assert keyword_filter.matches(FakeNote(tags=["dog"]))
        assert not keyword_filter.matches(FakeNote(title="Birds", content="parrots only"))

    def test_empty_keywords_match_nothing(self):
        keyword_filter = compose([])
        assert keyword_filter.is_empty
        assert not keyword_filter.matches(FakeNote(title="anything", content="anything"))

    def test_whitespace_keywords_match_nothing(self):
        keyword_filter = compose(["  ", "\t", ""])
        assert keyword_filter.keywords == ()
        assert not keyword_filter.matches(FakeNote(content="   "))

    def test_keywords_trimmed_and_deduplicated(self):
        assert compose([" cat ", "cat", "dog"]).keywords == ("cat", "dog")

    def test_case_insensitive(self):
        assert compose(["CAT"]).matches(FakeNote(title="my cat"))

    def test_substring_match(self):
        assert compose(["plan"]).matches(FakeNote(content="the planning meeting"))

    @pytest.mark.parametrize(
        "note",
        [
            FakeNote(title="Budget review"),
            FakeNote(content="next year's budget"),
            FakeNote(tags=["budget"]),
            FakeNote(ai_tags=["budgeting"]),
            FakeNote(category="Budget"),
        ],
    )
    def test_each_field_searched(self, note):
        assert compose(["budget"]).matches(note)


# -----------------------------------------------------------------------
# Database-backed filtering
# -----------------------------------------------------------------------


async def _add_notes(db, owner_id, *notes):
    from notewise.services.note_service import create_note

    created = []
    for title, content, tags in notes:
        created.append(await create_note(db, owner_id=owner_id, title=title, content=content, tags=tags))
    return created


class TestFindByKeywords:
    async def test_matches_content_and_tags(self, test_db):
        from notewise.services.note_service import find_by_keywords

        user = await create_test_user(test_db)
        cat, dog, _ = await _add_notes(
            test_db,
            user.id,
            ("Pets", "I have a cat", []),
            ("Walks", "Morning routine", ["dog"]),
            ("Birds", "parrots only", ["birds"]),
        )

        notes = await find_by_keywords(test_db, user.id, compose(["cat", "dog"]))

        assert {n.id for n in notes} == {cat.id, dog.id}

    async def test_ai_tags_and_category(self, test_db):
        from notewise.services.note_service import find_by_keywords

        user = await create_test_user(test_db)
        tagged, categorized = await _add_notes(
            test_db,
            user.id,
            ("One", "first", []),
            ("Two", "second", []),
        )
        tagged.ai_tags = ["finance"]
        categorized.category = "Finance"
        await test_db.flush()

        notes = await find_by_keywords(test_db, user.id, compose(["FINANCE"]))

        assert {n.id for n in notes} == {tagged.id, categorized.id}

    async def test_owner_scoped(self, test_db):
        from notewise.services.note_service import find_by_keywords

        alice = await create_test_user(test_db, email="alice@example.com")
        bob = await create_test_user(test_db, email="bob@example.com")
        (mine,) = await _add_notes(test_db, alice.id, ("Cat", "mine", []))
        await _add_notes(test_db, bob.id, ("Cat", "theirs", []))

        notes = await find_by_keywords(test_db, alice.id, compose(["cat"]))

        assert [n.id for n in notes] == [mine.id]

    async def test_empty_filter_returns_nothing(self, test_db):
        from notewise.services.note_service import find_by_keywords

        user = await create_test_user(test_db)
        await _add_notes(test_db, user.id, ("Anything", "at all", ["x"]))

        assert await find_by_keywords(test_db, user.id, compose([" "])) == []

    async def test_where_clause_false_selects_nothing(self, test_db):
        from notewise.models import Note

        user = await create_test_user(test_db)
        await _add_notes(test_db, user.id, ("Anything", "at all", []))

        result = await test_db.execute(select(Note).where(KeywordFilter().where_clause()))
        assert result.scalars().all() == []

    async def test_wildcards_are_literal(self, test_db):
        from notewise.services.note_service import find_by_keywords

        user = await create_test_user(test_db)
        discount, _ = await _add_notes(
            test_db,
            user.id,
            ("Sale", "50% off", []),
            ("Plain", "500 items", []),
        )

        notes = await find_by_keywords(test_db, user.id, compose(["50%"]))

        assert [n.id for n in notes] == [discount.id]

    @pytest.mark.parametrize("keyword", ["[", "]", '"', ",", 'a", "b'])
    async def test_tag_list_punctuation_does_not_match(self, test_db, keyword):
        from notewise.services.note_service import find_by_keywords

        user = await create_test_user(test_db)
        await _add_notes(
            test_db,
            user.id,
            ("Groceries", "milk and eggs", []),
            ("Trip", "packing list", ["travel"]),
            ("Pair", "two tags", ["a", "b"]),
        )

        assert await find_by_keywords(test_db, user.id, compose([keyword])) == []

    async def test_tag_with_quote_is_found(self, test_db):
        from notewise.services.note_service import find_by_keywords

        user = await create_test_user(test_db)
        quoted, _ = await _add_notes(
            test_db,
            user.id,
            ("Greeting", "body", ['say "hi"']),
            ("Other", "hi there", []),
        )

        notes = await find_by_keywords(test_db, user.id, compose(['"hi"']))

        assert [n.id for n in notes] == [quoted.id]

    async def test_database_agrees_with_in_memory_match(self, test_db):
        from notewise.models import Note
        from notewise.services.note_service import find_by_keywords

        user = await create_test_user(test_db)
        await _add_notes(
            test_db,
            user.id,
            ("Groceries", "milk", []),
            ("Trip", "packing", ["travel", "a\\b"]),
            ("Pets", "cat food", ["pets"]),
        )
        rows = (await test_db.execute(select(Note).where(Note.owner_id == user.id))).scalars().all()

        for keyword in ["[", '"', "a\\b", "travel", "cat", "el"]:
            keyword_filter = compose([keyword])
            expected = {n.id for n in rows if keyword_filter.matches(n)}
            found = {n.id for n in await find_by_keywords(test_db, user.id, keyword_filter)}
            assert found == expected, keyword
