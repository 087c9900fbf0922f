"""Tests for the table locator and positional row decoders."""

from __future__ import annotations

from pipelines.maps import FIELDING_HEADER_SYNONYMS
from pipelines.transformers.tables import (
    datatable_rows,
    locate_table,
    parse_split_cells,
    parse_win_trend_cells,
)


IDENTITY = ("Name", "Player")
WANTED = {
    "PO": ("PO", "Putouts"),
    "A": ("A", "Assists"),
    "E": ("E", "Errors"),
    "DP": ("DP",),
    "FLD%": ("FLD%", "Fld%"),
}


def _table(headers: list[str], rows: list[list[str]]) -> str:
    head = "".join(f"<th>{h}</th>" for h in headers)
    body = "".join("<tr>" + "".join(f"<td>{c}</td>" for c in row) + "</tr>" for row in rows)
    return f"<table><tr>{head}</tr>{body}</table>"


class TestLocateTable:
    """Tests for header discovery and scoring."""

    def test_prefers_table_with_more_wanted_columns(self) -> None:
        """A table exposing 5 of 5 metrics beats one exposing 3 of 5."""
        partial = _table(["Name", "PO", "A", "E"], [["Partial Guy", "1", "2", "3"]])
        full = _table(["Player", "PO", "A", "E", "DP", "FLD%"], [["Full Guy", "1", "2", "3", "4", ".990"]])

        located = locate_table(partial + full, IDENTITY, WANTED)

        assert located.found
        assert located.score == 5
        assert [row.identity for row in located.rows] == ["Full Guy"]
        assert located.rows[0].cells["FLD%"] == ".990"

    def test_ties_keep_the_earlier_table(self) -> None:
        first = _table(["Name", "PO", "A"], [["First Guy", "1", "2"]])
        second = _table(["Name", "PO", "E"], [["Second Guy", "1", "2"]])

        located = locate_table(first + second, IDENTITY, WANTED)

        assert [row.identity for row in located.rows] == ["First Guy"]

    def test_tables_without_identity_header_are_discarded(self) -> None:
        html = _table(["Team", "PO", "A", "E", "DP", "FLD%"], [["Toronto", "1", "2", "3", "4", "1"]])

        located = locate_table(html, IDENTITY, WANTED)

        assert not located.found
        assert located.rows == []

    def test_header_row_may_use_td_cells_below_a_caption_row(self) -> None:
        html = """
        <table>
          <tr><td colspan="3">2025 Fielding</td></tr>
          <tr><td>Player</td><td>Putouts</td><td>Errors</td></tr>
          <tr><td>Bo Bichette</td><td>180</td><td>12</td></tr>
        </table>
        """
        located = locate_table(html, IDENTITY, WANTED)

        assert located.columns == {"PO": 1, "E": 2}
        assert located.rows[0].identity == "Bo Bichette"
        assert located.rows[0].cells == {"PO": "180", "E": "12"}

    def test_rows_stop_at_sentinel_blank_or_repeated_header(self) -> None:
        html = _table(
            ["Name", "PO"],
            [["One", "1"], ["Two", "2"], ["Totals", "3"], ["Three", "4"]],
        )
        assert [r.identity for r in locate_table(html, IDENTITY, WANTED).rows] == ["One", "Two"]

        html = _table(["Name", "PO"], [["One", "1"], ["", "2"], ["Three", "3"]])
        assert [r.identity for r in locate_table(html, IDENTITY, WANTED).rows] == ["One"]

        html = _table(["Name", "PO"], [["One", "1"], ["Name", "PO"], ["Two", "2"]])
        assert [r.identity for r in locate_table(html, IDENTITY, WANTED).rows] == ["One"]

    def test_note_row_inside_table_is_skipped(self) -> None:
        """A row too short to reach the identity column does not end the table."""
        html = """
        <table>
          <tr><th>Pos</th><th>Name</th><th>PO</th></tr>
          <tr><td>SS</td><td>Bo Bichette</td><td>180</td></tr>
          <tr><td>note</td></tr>
          <tr><td>RF</td><td>George Springer</td><td>190</td></tr>
        </table>
        """
        rows = locate_table(html, IDENTITY, WANTED).rows

        assert [row.identity for row in rows] == ["Bo Bichette", "George Springer"]
        assert rows[1].cells == {"PO": "190"}

    def test_identity_prefers_link_text(self) -> None:
        html = _table(
            ["Name", "PO"],
            [['<a href="/p/1">Bo Bichette</a> <small>(inj)</small>', "1"]],
        )
        assert locate_table(html, IDENTITY, WANTED).rows[0].identity == "Bo Bichette"

    def test_missing_cells_are_absent(self) -> None:
        html = _table(["Name", "PO", "A"], [["Short Row", "1"]])
        assert locate_table(html, IDENTITY, WANTED).rows[0].cells == {"PO": "1", "A": None}

    def test_descriptive_columns_do_not_count_towards_score(self) -> None:
        """Only scored keys rank tables, so a position column cannot break a tie."""
        wanted = {"POS": ("POS",), **WANTED}
        first = _table(["Name", "PO", "A", "E"], [["First Guy", "1", "2", "3"]])
        second = _table(["Name", "POS", "PO", "A", "E"], [["Second Guy", "SS", "1", "2", "3"]])

        located = locate_table(first + second, IDENTITY, wanted, scored_keys=WANTED)

        assert located.score == 3
        assert [row.identity for row in located.rows] == ["First Guy"]

    def test_synonym_order_decides_between_columns(self) -> None:
        """An earlier synonym wins even when a later synonym's column comes first."""
        html = _table(["Name", "SB", "CASB"], [["Catcher", "5", "12"]])

        located = locate_table(html, IDENTITY, {"CASB": ("CASB", "SB")})

        assert located.columns == {"CASB": 2}
        assert located.rows[0].cells == {"CASB": "12"}

    def test_fielding_page(self, fielding_page_html: str) -> None:
        synonyms = {k: v for k, v in FIELDING_HEADER_SYNONYMS.items() if k != "Name"}
        located = locate_table(fielding_page_html, FIELDING_HEADER_SYNONYMS["Name"], synonyms)

        assert set(located.columns) == {"POS", "PO", "A", "E", "FLD%"}
        assert [row.identity for row in located.rows] == [
            "Bichette, Bo",
            "George Springer",
            "George Springer",
        ]


class TestPositionalRows:
    """Tests for TeamRankings row decoders."""

    def test_split_row(self) -> None:
        row = parse_split_cells(["1", "Toronto Blue Jays", "4.5", "4.2", "5.0", "4.8", "4.1", "4.3"])
        assert row.team == "Toronto Blue Jays"
        assert row.splits() == {
            "current_season": 4.5,
            "last3_games": 4.2,
            "last_game": 5.0,
            "home": 4.8,
            "away": 4.1,
            "prev_season": 4.3,
        }

    def test_split_row_without_previous_season(self) -> None:
        row = parse_split_cells(["1", "Toronto", "4.5", "4.2", "5.0", "4.8", "4.1"])
        assert row.prev_season is None

    def test_short_or_nameless_rows_are_rejected(self) -> None:
        assert parse_split_cells(["1", "Toronto", "4.5"]) is None
        assert parse_split_cells(["1", " ", "4.5", "4.2", "5.0", "4.8", "4.1"]) is None

    def test_win_trend_row(self) -> None:
        row = parse_win_trend_cells(["Toronto", "94-68", "58.0%", "+1.2"])
        assert (row.team, row.record, row.win_pct) == ("Toronto", "94-68", 58.0)
        assert parse_win_trend_cells(["Toronto", "94-68"]) is None

    def test_datatable_rows(self, stat_page_html: str) -> None:
        rows = datatable_rows(stat_page_html)
        assert len(rows) == 2
        assert rows[0][1] == "Toronto"
        assert rows[1][7] == "--"

    def test_page_without_datatable(self) -> None:
        assert datatable_rows("<html><p>Access denied</p></html>") == []
