"""Tests for classification enums."""

from notemap.domain.types import ResourceKind, SpriteVariant


class TestResourceKind:
    def test_closed_set(self) -> None:
        assert {kind.value for kind in ResourceKind} == {"style", "sprite", "glyphs", "source"}

    def test_string_values(self) -> None:
        assert ResourceKind("source") is ResourceKind.SOURCE
        assert ResourceKind.GLYPHS == "glyphs"


class TestSpriteVariant:
    def test_values(self) -> None:
        assert [v.value for v in SpriteVariant] == ["absent", "reference", "structured"]
