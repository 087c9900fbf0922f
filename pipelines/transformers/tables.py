"""
Table Transformers

Turns HTML tables into typed rows so pipelines never touch the DOM.

Two shapes are handled:

- Positional tables (TeamRankings): one known layout per page type, read
  cell by cell into SplitRow / WinTrendRow.
- Header-discovered tables (Baseball Almanac): the page holds several
  candidate tables whose headers vary; locate_table() picks the one that
  exposes the identity column and the most wanted metric columns, and maps
  each wanted metric to its column index through synonym sets.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Collection, Iterable, Mapping, Optional, Sequence, Union

from bs4 import BeautifulSoup, Tag

from pipelines.maps import TABLE_SENTINELS
from pipelines.transformers.values import clean_text, parse_number


Document = Union[str, BeautifulSoup, Tag]


def to_soup(document: Document) -> Union[BeautifulSoup, Tag]:
    if isinstance(document, (BeautifulSoup, Tag)):
        return document
    return BeautifulSoup(document or "", "html.parser")


def cell_text(cell: Tag) -> str:
    return clean_text(cell.get_text(" "))


def row_cells(row: Tag) -> list[Tag]:
    return row.find_all(["td", "th"], recursive=False)


# ---------------------------------------------------------------------------
# Positional rows (TeamRankings)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SplitRow:
    """One team's per-game averages for a single metric page."""

    team: str
    current_season: Optional[float]
    last3_games: Optional[float]
    last_game: Optional[float]
    home: Optional[float]
    away: Optional[float]
    prev_season: Optional[float] = None

    def splits(self) -> dict[str, Optional[float]]:
        return {
            "current_season": self.current_season,
            "last3_games": self.last3_games,
            "last_game": self.last_game,
            "home": self.home,
            "away": self.away,
            "prev_season": self.prev_season,
        }


@dataclass(frozen=True)
class WinTrendRow:
    """One team's record within a win-trend context."""

    team: str
    record: str
    win_pct: Optional[float]


# Rank | Team | Current | Last 3 | Last 1 | Home | Away | Previous
SPLIT_ROW_MIN_CELLS = 7


def parse_split_cells(cells: Sequence[str]) -> Optional[SplitRow]:
    """
    Read a TeamRankings stat row.

    The previous-season column is optional; rows shorter than that, or
    without a team name, are not data rows.

    Examples:
        >>> parse_split_cells(["1", "Toronto", "4.5", "4.2", "5.0", "4.8", "4.1", "4.3"]).current_season
        4.5
    """
    if len(cells) < SPLIT_ROW_MIN_CELLS:
        return None
    team = clean_text(cells[1])
    if not team:
        return None
    return SplitRow(
        team=team,
        current_season=parse_number(cells[2]),
        last3_games=parse_number(cells[3]),
        last_game=parse_number(cells[4]),
        home=parse_number(cells[5]),
        away=parse_number(cells[6]),
        prev_season=parse_number(cells[7]) if len(cells) > 7 else None,
    )


def parse_win_trend_cells(cells: Sequence[str]) -> Optional[WinTrendRow]:
    """Read a TeamRankings win-trend row: Team | W-L | Win % | ..."""
    if len(cells) < 3:
        return None
    team = clean_text(cells[0])
    if not team:
        return None
    return WinTrendRow(
        team=team,
        record=clean_text(cells[1]),
        win_pct=parse_number(cells[2]),
    )


def datatable_rows(document: Document, css_class: str = "datatable") -> list[list[str]]:
    """
    Cell texts of every body row of the first table with the given class.

    Header rows (those made of th cells only) are dropped. A page without the
    table yields no rows.
    """
    soup = to_soup(document)
    table = soup.find("table", class_=css_class)
    if table is None:
        return []

    body = table.find("tbody") or table
    rows = []
    for tr in body.find_all("tr"):
        tds = tr.find_all("td")
        if not tds:
            continue
        rows.append([cell_text(td) for td in tds])
    return rows


# ---------------------------------------------------------------------------
# Header-discovered tables (Baseball Almanac)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LocatedRow:
    """A data row: identity text plus raw cell text per mapped column."""

    identity: str
    cells: Mapping[str, Optional[str]]


@dataclass
class LocatedTable:
    score: int = -1
    columns: dict[str, int] = field(default_factory=dict)
    rows: list[LocatedRow] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.score >= 0


def _matches(text: str, synonyms: Iterable[str]) -> bool:
    folded = text.casefold()
    return any(folded == synonym.casefold() for synonym in synonyms)


def find_header(rows: Sequence[Tag], identity_synonyms: Sequence[str]) -> Optional[tuple[int, int]]:
    """(row index, identity column index) of the first header row, if any."""
    for row_index, row in enumerate(rows):
        for column_index, cell in enumerate(row_cells(row)):
            if _matches(cell_text(cell), identity_synonyms):
                return row_index, column_index
    return None


def map_columns(header: Tag, column_synonyms: Mapping[str, Sequence[str]]) -> dict[str, int]:
    """
    Canonical key -> header column index.

    Synonyms are tried in order, so the first synonym present wins over a
    later one even when the later one's column comes first.
    """
    folded = [cell_text(cell).casefold() for cell in row_cells(header)]
    columns: dict[str, int] = {}
    for key, synonyms in column_synonyms.items():
        for synonym in synonyms:
            if synonym.casefold() in folded:
                columns[key] = folded.index(synonym.casefold())
                break
    return columns


def identity_text(cell: Tag) -> str:
    """Linked text of an identity cell, falling back to its full text."""
    anchors = [clean_text(a.get_text(" ")) for a in cell.find_all("a")]
    linked = " ".join(text for text in anchors if text)
    return linked or cell_text(cell)


def _is_header_row(row: Tag, identity_synonyms: Sequence[str]) -> bool:
    if row.find("th") is not None:
        return True
    return any(_matches(cell_text(cell), identity_synonyms) for cell in row_cells(row))


def extract_rows(
    rows: Sequence[Tag],
    header_index: int,
    identity_index: int,
    columns: Mapping[str, int],
    identity_synonyms: Sequence[str],
    sentinels: Iterable[str] = TABLE_SENTINELS,
) -> list[LocatedRow]:
    """
    Data rows following the header row.

    Extraction stops at a repeated header, a blank identity cell or a
    sentinel such as "Totals". Rows without an identity column are skipped.
    """
    stop_words = {word.casefold() for word in sentinels}
    extracted: list[LocatedRow] = []

    for row in rows[header_index + 1:]:
        if _is_header_row(row, identity_synonyms):
            break
        cells = row_cells(row)
        # Note and spacer rows too short to reach the identity column
        if identity_index >= len(cells):
            continue
        identity = identity_text(cells[identity_index])
        if not identity or identity.casefold() in stop_words:
            break
        values = {
            key: cell_text(cells[index]) if index < len(cells) else None
            for key, index in columns.items()
        }
        extracted.append(LocatedRow(identity=identity, cells=values))

    return extracted


def locate_table(
    document: Document,
    identity_synonyms: Sequence[str],
    column_synonyms: Mapping[str, Sequence[str]],
    scored_keys: Optional[Collection[str]] = None,
) -> LocatedTable:
    """
    Find the best data table in a document and extract its rows.

    Tables without a header row naming the identity column are discarded.
    The rest are scored by how many of the scored keys (all wanted columns
    by default) they map; the highest score wins and ties keep the earlier
    table. Descriptive columns such as a position are mapped but left out
    of the score. No qualifying table gives an empty, not-found result.

    Args:
        document: HTML text or parsed soup
        identity_synonyms: Accepted header texts for the identity column
        column_synonyms: Canonical key -> accepted header texts, in preference order
        scored_keys: Keys that count towards the score

    Returns:
        The selected table's score, column map and rows
    """
    soup = to_soup(document)
    scored = set(column_synonyms if scored_keys is None else scored_keys)
    best: Optional[LocatedTable] = None

    for table in soup.find_all("table"):
        rows = table.find_all("tr")
        # Nested tables are scored on their own
        rows = [row for row in rows if row.find_parent("table") is table]
        header = find_header(rows, identity_synonyms)
        if header is None:
            continue

        header_index, identity_index = header
        columns = map_columns(rows[header_index], column_synonyms)
        score = sum(1 for key in columns if key in scored)
        if best is not None and score <= best.score:
            continue

        best = LocatedTable(
            score=score,
            columns=columns,
            rows=extract_rows(rows, header_index, identity_index, columns, identity_synonyms),
        )

    return best or LocatedTable()
