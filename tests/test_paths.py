"""Unit tests for dotted-path access to section data."""

from __future__ import annotations

import pytest

from pagecraft.document.paths import PathError, get_in, parse_path, update_in


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("headline", ("headline",)),
        ("data.headline", ("headline",)),
        ("cta.label", ("cta", "label")),
        ("items.0.title", ("items", "0", "title")),
        ("years.2024", ("years", "2024")),
        ("data", ("data",)),
    ],
)
def test_parse_path(raw: str, expected: tuple[object, ...]) -> None:
    assert parse_path(raw) == expected


@pytest.mark.parametrize("raw", ["", "cta..label", "items."])
def test_parse_path_rejects_empty_segments(raw: str) -> None:
    with pytest.raises(PathError):
        parse_path(raw)


def test_get_in_returns_default_for_missing_segments() -> None:
    data = {"items": [{"title": "a"}]}
    assert get_in(data, ("items", 0, "title")) == "a"
    assert get_in(data, ("items", 3, "title"), "none") == "none"
    assert get_in(data, ("cta", "label")) is None


def test_update_in_copies_only_the_result() -> None:
    """The input must be left untouched and share nothing with the result."""
    original = {"items": [{"title": "a"}, {"title": "b"}], "other": {"x": 1}}
    updated = update_in(original, ("items", 1, "title"), lambda old: old.upper())

    assert updated == {"items": [{"title": "a"}, {"title": "B"}], "other": {"x": 1}}
    assert original["items"][1]["title"] == "b"
    assert updated["items"] is not original["items"]
    assert updated["other"] is not original["other"]


def test_update_in_creates_missing_mappings() -> None:
    updated = update_in({"headline": "Hi", "cta": None}, ("cta", "label"), lambda _: "Go")
    assert updated == {"headline": "Hi", "cta": {"label": "Go"}}


def test_update_in_rejects_scalars_and_out_of_range_indexes() -> None:
    with pytest.raises(PathError, match="scalar"):
        update_in({"headline": "Hi"}, ("headline", "text"), lambda _: "x")
    with pytest.raises(PathError, match="out of range"):
        update_in({"items": []}, ("items", 0, "title"), lambda _: "x")


def test_numeric_segments_index_lists_only() -> None:
    data = {"items": [{"title": "a"}], "years": {"2024": "old"}}
    assert get_in(data, ("items", "0", "title")) == "a"
    assert get_in(data, ("years", "2024")) == "old"

    updated = update_in(data, parse_path("years.2024"), lambda _: "new")
    assert updated["years"] == {"2024": "new"}

    created = update_in({}, parse_path("stats.0.label"), lambda _: "x")
    assert created == {"stats": {"0": {"label": "x"}}}
