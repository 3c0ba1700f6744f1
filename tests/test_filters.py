"""Tests for EntryFilter and matches()."""

import pytest
from pydantic import ValidationError

from conftest import FakeEntry, fake_directory, fake_file
from fsentry.filters import EntryFilter, matches
from fsentry.models import EntryKind


class TestEntryFilterModel:
    """Tests for filter construction."""

    def test_extensions_get_leading_dot(self):
        entry_filter = EntryFilter(extensions=["txt", ".html"])
        assert entry_filter.extensions == [".txt", ".html"]

    def test_kind_accepts_value(self):
        assert EntryFilter(kind="directory").kind == EntryKind.DIRECTORY

    def test_invalid_kind_rejected(self):
        with pytest.raises(ValidationError):
            EntryFilter(kind="socket")

    def test_predicate_must_be_callable(self):
        with pytest.raises(ValidationError):
            EntryFilter(predicate="hello")

    def test_is_empty(self):
        assert EntryFilter().is_empty()
        assert not EntryFilter(extensions=[]).is_empty()
        assert not EntryFilter(predicate=lambda entry: True).is_empty()


class TestMatches:
    """Tests for matches()."""

    @pytest.mark.asyncio
    async def test_no_filter_matches_without_kind_query(self):
        entry = FakeEntry("src/index.html", EntryKind.FILE)
        assert await matches(entry) is True
        assert await matches(entry, EntryFilter()) is True
        assert entry.kind_queries == 0

    @pytest.mark.asyncio
    async def test_kind(self):
        entry_filter = EntryFilter(kind=EntryKind.DIRECTORY)
        assert await matches(FakeEntry("", EntryKind.DIRECTORY), entry_filter) is True
        assert await matches(FakeEntry("", EntryKind.FILE), entry_filter) is False

    @pytest.mark.asyncio
    async def test_extensions(self):
        entry_filter = EntryFilter(extensions=[".html", ".txt"])
        assert await matches(fake_file("src/index.html"), entry_filter) is True
        assert await matches(fake_file("src/index.txt"), entry_filter) is True
        assert await matches(fake_file("src/index.css"), entry_filter) is False

    @pytest.mark.asyncio
    async def test_extensions_without_dot(self):
        entry_filter = EntryFilter(extensions=["txt"])
        assert await matches(fake_file("notes.txt"), entry_filter) is True
        # "txt" must not match a name merely ending in those letters
        assert await matches(fake_file("notestxt"), entry_filter) is False

    @pytest.mark.asyncio
    async def test_extensions_are_case_sensitive(self):
        assert await matches(fake_file("README.TXT"), EntryFilter(extensions=[".txt"])) is False

    @pytest.mark.asyncio
    async def test_multi_part_extension(self):
        assert await matches(fake_file("archive.tar.gz"), EntryFilter(extensions=[".tar.gz"])) is True

    @pytest.mark.asyncio
    async def test_extensions_only_match_files(self):
        entry_filter = EntryFilter(extensions=[".d"])
        assert await matches(fake_directory("conf.d"), entry_filter) is False
        assert await matches(FakeEntry("socket.d", EntryKind.UNKNOWN), entry_filter) is False

    @pytest.mark.asyncio
    async def test_empty_extension_list_matches_nothing(self):
        assert await matches(fake_file("a.txt"), EntryFilter(extensions=[])) is False

    @pytest.mark.asyncio
    async def test_directory_kind_with_extensions_never_matches(self):
        entry_filter = EntryFilter(kind=EntryKind.DIRECTORY, extensions=[".txt"])
        for entry in (fake_file("a.txt"), fake_directory("b.txt"), FakeEntry("c.txt")):
            assert await matches(entry, entry_filter) is False

    @pytest.mark.asyncio
    async def test_custom_predicate(self):
        entry_filter = EntryFilter(predicate=lambda entry: entry.name == "hello")
        assert await matches(FakeEntry("src/hello"), entry_filter) is True
        assert await matches(FakeEntry("src/world"), entry_filter) is False

    @pytest.mark.asyncio
    async def test_async_predicate(self):
        async def is_hello(entry):
            return entry.name == "hello"

        entry_filter = EntryFilter(predicate=is_hello)
        assert await matches(FakeEntry("src/hello"), entry_filter) is True
        assert await matches(FakeEntry("src/world"), entry_filter) is False

    @pytest.mark.asyncio
    async def test_predicate_only_skips_kind_query(self):
        entry = FakeEntry("src/hello", EntryKind.FILE)
        await matches(entry, EntryFilter(predicate=lambda e: True))
        assert entry.kind_queries == 0

    @pytest.mark.asyncio
    async def test_kind_resolved_once(self):
        entry = fake_file("a.txt")
        await matches(entry, EntryFilter(kind=EntryKind.FILE, extensions=[".txt"]))
        assert entry.kind_queries == 1

    @pytest.mark.asyncio
    async def test_kind_mismatch_skips_predicate(self):
        calls = []

        def accept(entry):
            calls.append(entry)
            return True

        entry_filter = EntryFilter(kind=EntryKind.FILE, predicate=accept)
        assert await matches(fake_directory("src"), entry_filter) is False
        assert calls == []
        assert await matches(fake_file("a.txt"), entry_filter) is True
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_all_clauses_must_pass(self):
        entry_filter = EntryFilter(
            kind=EntryKind.FILE,
            extensions=[".py"],
            predicate=lambda entry: entry.name.startswith("test_"),
        )
        assert await matches(fake_file("tests/test_entry.py"), entry_filter) is True
        assert await matches(fake_file("src/entry.py"), entry_filter) is False

    @pytest.mark.asyncio
    async def test_predicate_error_propagates(self):
        def explode(entry):
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            await matches(FakeEntry("a"), EntryFilter(predicate=explode))

    @pytest.mark.asyncio
    async def test_async_predicate_error_propagates(self):
        async def explode(entry):
            raise LookupError("missing")

        with pytest.raises(LookupError):
            await matches(FakeEntry("a"), EntryFilter(predicate=explode))

    @pytest.mark.asyncio
    async def test_filter_method_agrees(self):
        entry_filter = EntryFilter(extensions=["txt"])
        assert await entry_filter.matches(fake_file("a.txt")) is True
        assert await entry_filter.matches(fake_file("a.json")) is False
