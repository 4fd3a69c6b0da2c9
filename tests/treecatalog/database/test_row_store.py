"""Tests for the SQLModel-backed row store."""

import pytest

from treecatalog.database.core import CoreDatabaseService
from treecatalog.database.row_store import SQLModelRowStore
from treecatalog.species.exceptions import DataAccessError
from treecatalog.species.models import ScientificTree


@pytest.fixture
async def seeded_store(row_store):
    for scientific_name, common_name in [
        ("Quercus alba", "White Oak"),
        ("Quercus rubra", "Northern Red Oak"),
        ("Acer rubrum", "Red Maple"),
        ("Pinus strobus", None),
    ]:
        await row_store.insert(
            ScientificTree, {"scientific_name": scientific_name, "common_name": common_name}
        )
    return row_store


class TestInsert:
    """Test SQLModelRowStore.insert."""

    async def test_returns_stored_row(self, row_store):
        """Should return the row with its generated id."""
        row = await row_store.insert(ScientificTree, {"scientific_name": "Quercus alba"})

        assert row.id is not None
        assert row.common_name is None

    async def test_duplicate_scientific_name(self, row_store):
        """Should raise DataAccessError on a unique constraint violation."""
        await row_store.insert(ScientificTree, {"scientific_name": "Quercus alba"})

        with pytest.raises(DataAccessError, match="UNIQUE constraint failed"):
            await row_store.insert(ScientificTree, {"scientific_name": "Quercus alba"})


class TestSelect:
    """Test SQLModelRowStore.select and select_one."""

    async def test_equality_filters(self, seeded_store):
        """Should AND together equality filters."""
        rows = await seeded_store.select(
            ScientificTree, {"scientific_name": "Acer rubrum", "common_name": "Red Maple"}
        )
        none = await seeded_store.select(
            ScientificTree, {"scientific_name": "Acer rubrum", "common_name": "White Oak"}
        )

        assert [row.scientific_name for row in rows] == ["Acer rubrum"]
        assert none == []

    async def test_contains_matches_any_column(self, seeded_store):
        """Should OR together case-insensitive substring patterns."""
        rows = await seeded_store.select(
            ScientificTree,
            contains={"scientific_name": "RUBR", "common_name": "rubr"},
            order_by="scientific_name",
        )

        assert [row.scientific_name for row in rows] == ["Acer rubrum", "Quercus rubra"]

    async def test_contains_escapes_wildcards(self, seeded_store):
        """Should treat LIKE wildcards in the pattern literally."""
        rows = await seeded_store.select(ScientificTree, contains={"scientific_name": "Q%a"})

        assert rows == []

    async def test_order_and_limit(self, seeded_store):
        """Should order ascending and cap the row count."""
        rows = await seeded_store.select(ScientificTree, order_by="scientific_name", limit=2)

        assert [row.scientific_name for row in rows] == ["Acer rubrum", "Pinus strobus"]

    async def test_select_one(self, seeded_store):
        """Should return the matching row, or None."""
        row = await seeded_store.select_one(ScientificTree, {"scientific_name": "Quercus alba"})
        missing = await seeded_store.select_one(ScientificTree, {"scientific_name": "Ulmus"})

        assert row.common_name == "White Oak"
        assert missing is None

    async def test_missing_table(self, path_resolver):
        """Should raise DataAccessError when the schema was never created."""
        database = CoreDatabaseService(path_resolver.get_data_dir() / "empty.db")
        store = SQLModelRowStore(database)
        try:
            with pytest.raises(DataAccessError, match="no such table"):
                await store.select(ScientificTree)
            with pytest.raises(DataAccessError, match="no such table"):
                await store.select_one(ScientificTree, {"scientific_name": "Quercus alba"})
        finally:
            await database.dispose()


class TestUpdate:
    """Test SQLModelRowStore.update."""

    async def test_updates_matching_row(self, seeded_store):
        """Should write the new values and return the updated row."""
        row = await seeded_store.update(
            ScientificTree, {"scientific_name": "Pinus strobus"}, {"common_name": "White Pine"}
        )

        assert row.common_name == "White Pine"
        stored = await seeded_store.select_one(ScientificTree, {"scientific_name": "Pinus strobus"})
        assert stored.common_name == "White Pine"

    async def test_no_match(self, seeded_store):
        """Should return None when nothing matches."""
        row = await seeded_store.update(
            ScientificTree, {"scientific_name": "Ulmus americana"}, {"common_name": "Elm"}
        )

        assert row is None

    async def test_conflicting_update(self, seeded_store):
        """Should raise DataAccessError when the update violates a constraint."""
        with pytest.raises(DataAccessError):
            await seeded_store.update(
                ScientificTree,
                {"scientific_name": "Quercus rubra"},
                {"scientific_name": "Quercus alba"},
            )
