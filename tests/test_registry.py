# tests/test_registry.py
"""Tests for the identity registry."""

import pytest

from pnpconfig.errors import IdentifierConflict
from pnpconfig.model import Package, Part
from pnpconfig.registry import IdentityRegistry, normalize_id


@pytest.fixture
def registry():
    """Create a part registry."""
    return IdentityRegistry("part")


class TestIdentityRegistry:
    """Test IdentityRegistry class."""

    def test_put_and_get(self, registry):
        """Test putting and getting an entity."""
        part = Part(id="R0805-1K")
        registry.put(part)

        assert registry.get("R0805-1K") is part
        assert len(registry) == 1

    def test_get_is_case_insensitive(self, registry):
        """Lookups ignore case."""
        part = Part(id="r0805-1k")
        registry.put(part)

        assert registry.get("R0805-1K") is part
        assert registry.get("r0805-1K") is part
        assert "R0805-1k" in registry

    def test_keys_are_upper_cased(self, registry):
        """Keys are the upper-cased id."""
        registry.put(Part(id="c0603-100n"))
        assert registry.keys() == ["C0603-100N"]

    def test_case_variants_collide(self, registry):
        """Ids differing only in case store one entity, last write wins."""
        first = Part(id="led-red")
        second = Part(id="LED-RED")
        registry.put(first)
        registry.put(second)

        assert len(registry) == 1
        assert registry.get("led-red") is second

    def test_get_missing(self, registry):
        """Missing id returns None."""
        assert registry.get("nonexistent") is None
        assert "nonexistent" not in registry

    def test_iteration_order(self, registry):
        """Iteration follows insertion order."""
        ids = ["U1", "R1", "C1"]
        for part_id in ids:
            registry.put(Part(id=part_id))

        assert [p.id for p in registry] == ids
        assert [p.id for p in registry.values()] == ids

    def test_replace_keeps_position(self, registry):
        """Replacing an entity keeps its position."""
        registry.put(Package(id="SOT23"))
        registry.put(Package(id="R0805"))
        replacement = Package(id="sot23", description="replaced")
        registry.put(replacement)

        assert [p.id for p in registry] == ["sot23", "R0805"]


class TestRename:
    """Test re-keying on identifier change."""

    def test_rename_rekeys(self, registry):
        """Renamed entity is found under the new id only."""
        part = Part(id="OLD")
        registry.put(part)

        renamed = registry.rename("old", "New")

        assert renamed is part
        assert part.id == "New"
        assert registry.get("NEW") is part
        assert registry.get("OLD") is None
        assert len(registry) == 1

    def test_rename_keeps_position(self, registry):
        """Renaming does not move the entity to the end."""
        for part_id in ["A", "B", "C"]:
            registry.put(Part(id=part_id))

        registry.rename("A", "Z")

        assert [p.id for p in registry] == ["Z", "B", "C"]
        assert registry.keys() == ["Z", "B", "C"]

    def test_rename_case_only(self, registry):
        """Renaming to a case variant of the same id is allowed."""
        part = Part(id="abc")
        registry.put(part)

        registry.rename("abc", "ABC")

        assert part.id == "ABC"
        assert registry.get("abc") is part
        assert len(registry) == 1

    def test_rename_missing(self, registry):
        """Renaming an unknown id raises KeyError."""
        with pytest.raises(KeyError):
            registry.rename("missing", "other")

    def test_rename_conflict(self, registry):
        """Renaming onto another entity's id raises."""
        a = Part(id="A")
        b = Part(id="B")
        registry.put(a)
        registry.put(b)

        with pytest.raises(IdentifierConflict):
            registry.rename("A", "b")

        assert a.id == "A"
        assert registry.get("A") is a
        assert registry.get("B") is b


def test_normalize_id():
    """Test id normalization."""
    assert normalize_id("sot23-5") == "SOT23-5"
