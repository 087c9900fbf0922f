"""Tests for the position-compatibility matcher."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from pipelines.transformers.positions import (
    is_position_compatible,
    match_rows_to_roster,
    roles_compatible,
    select_row,
    split_roles,
)


@dataclass(frozen=True)
class Row:
    name: str
    position: str


class TestRolesCompatible:
    """Tests for single-role compatibility."""

    @pytest.mark.parametrize(
        "canonical,reported",
        [("SS", "ss"), ("OF", "LF"), ("LF", "OF"), ("IF", "2B"), ("P", "SP"), ("RP", "P"), ("TWP", "DH")],
    )
    def test_compatible(self, canonical: str, reported: str) -> None:
        """Exact matches and group membership in either direction."""
        assert roles_compatible(canonical, reported)

    @pytest.mark.parametrize("canonical,reported", [("OF", "1B"), ("C", "P"), ("SS", "2B"), ("IF", "LF")])
    def test_incompatible(self, canonical: str, reported: str) -> None:
        assert not roles_compatible(canonical, reported)

    def test_utility_fits_anything(self) -> None:
        assert roles_compatible("UT", "C")
        assert roles_compatible("ut", "")


class TestIsPositionCompatible:
    """Tests for slash-separated position cells."""

    def test_split_roles(self) -> None:
        assert split_roles(" lf / RF ") == ["LF", "RF"]
        assert split_roles(None) == []

    def test_any_role_matches(self) -> None:
        assert is_position_compatible("RF", "LF/RF")
        assert not is_position_compatible("C", "LF/RF")

    def test_blank_cell_only_fits_utility(self) -> None:
        assert not is_position_compatible("SS", "")
        assert is_position_compatible("UT", "")


class TestSelectRow:
    """Tests for choosing one row per player."""

    def test_outfielder_takes_only_the_outfield_row(self) -> None:
        """Canonical OF with rows at LF and 1B selects the LF row."""
        rows = [Row("Player A", "1B"), Row("Player A", "LF")]
        assert select_row(rows, "OF") == rows[1]

    def test_utility_takes_first_row(self) -> None:
        rows = [Row("Player A", "C"), Row("Player A", "SS")]
        assert select_row(rows, "UT") == rows[0]

    def test_no_canonical_role_takes_first_row(self) -> None:
        rows = [Row("Player A", "C"), Row("Player A", "SS")]
        assert select_row(rows, None) == rows[0]

    def test_no_compatible_row(self) -> None:
        assert select_row([Row("Player A", "C")], "OF") is None
        assert select_row([], "OF") is None


class TestMatchRowsToRoster:
    """Tests for resolving scraped rows against a roster."""

    def test_groups_by_name_key_and_skips_unknown_players(self) -> None:
        rows = [
            Row("Springer, George", "1B"),
            Row("George Springer", "RF"),
            Row("Bo Bichette", "SS"),
            Row("Not Rostered", "C"),
        ]
        roster = {"george springer": "OF", "bo bichette": "SS"}

        selected = match_rows_to_roster(rows, roster)

        assert set(selected) == {"george springer", "bo bichette"}
        assert selected["george springer"].position == "RF"
        assert selected["bo bichette"].position == "SS"

    def test_player_without_compatible_row_is_left_out(self) -> None:
        selected = match_rows_to_roster([Row("Bo Bichette", "C")], {"bo bichette": "SS"})
        assert selected == {}
