"""
Schedule Transformers

Decodes a Baseball Almanac team schedule page into the season game log
and the "fast facts" record splits (by month, by opponent).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from bs4 import Tag

from pipelines.transformers.tables import Document, cell_text, row_cells, to_soup
from pipelines.transformers.values import parse_int, parse_number


SCHEDULE_HEADER_WORDS = ("Game", "Opponent", "Record")
SCHEDULE_DATE_FORMATS = ("%m-%d-%Y", "%m/%d/%Y", "%Y-%m-%d")

MONTH_NAMES = frozenset({
    "january", "february", "march", "april", "may", "june",
    "july", "august", "september", "october", "november", "december",
})

# Fast-facts rows that group games by score rather than by month or opponent
SCORE_SPLIT_LABELS = frozenset({"shutouts", "1-run games", "one-run games", "blowouts"})

SPLIT_LABEL_PATTERN = re.compile(r"^([^(]*)\(([^)]*)\)")


@dataclass(frozen=True)
class ScheduleEntry:
    """One line of the game log."""

    game_number: int
    date: date
    is_home: bool
    opponent: str
    score: str
    decision: str
    record: str


@dataclass(frozen=True)
class RecordSplit:
    """A W-L record over a labelled group of games (a month or an opponent)."""

    label: str
    games: int
    wins: int
    losses: int
    win_pct: float


@dataclass
class TeamSchedule:
    games: list[ScheduleEntry] = field(default_factory=list)
    monthly: list[RecordSplit] = field(default_factory=list)
    opponents: list[RecordSplit] = field(default_factory=list)


def split_opponent_label(text: str) -> tuple[bool, str]:
    """
    (is_home, opponent) for a game log opponent cell.

    Examples:
        >>> split_opponent_label("vs Boston Red Sox")
        (True, 'Boston Red Sox')
        >>> split_opponent_label("at New York Yankees")
        (False, 'New York Yankees')
    """
    lowered = text.casefold()
    if lowered.startswith("vs "):
        return True, text[3:].strip()
    if lowered.startswith("at "):
        return False, text[3:].strip()
    return False, text.strip()


def parse_schedule_date(text: str) -> Optional[date]:
    for fmt in SCHEDULE_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def _direct_rows(table: Tag) -> list[Tag]:
    return [row for row in table.find_all("tr") if row.find_parent("table") is table]


def find_schedule_table(document: Document) -> Optional[Tag]:
    """
    The innermost table whose text names every schedule header word.

    Layout tables wrap the schedule, so an outer table also contains the
    header words; the one with no matching table inside it is the data.
    """
    soup = to_soup(document)
    candidates = [
        table
        for table in soup.find_all("table")
        if all(word in table.get_text(" ") for word in SCHEDULE_HEADER_WORDS)
    ]
    for table in candidates:
        nested = any(
            any(parent is table for parent in other.parents)
            for other in candidates
            if other is not table
        )
        if not nested:
            return table
    return None


def parse_schedule_table(document: Document) -> list[ScheduleEntry]:
    """
    Game log rows in page order.

    A row needs six cells (game, date, opponent, score, decision, record), a
    whole game number and a readable date; anything else (headers, notes,
    month banners) is skipped.
    """
    table = find_schedule_table(document)
    if table is None:
        return []

    entries = []
    for row in _direct_rows(table):
        cells = [cell_text(cell) for cell in row_cells(row)]
        if len(cells) < 6:
            continue

        game_number = parse_int(cells[0])
        game_date = parse_schedule_date(cells[1])
        if game_number is None or game_date is None:
            continue
        if not cells[2] or cells[2].casefold() == "opponent":
            continue

        is_home, opponent = split_opponent_label(cells[2])
        entries.append(
            ScheduleEntry(
                game_number=game_number,
                date=game_date,
                is_home=is_home,
                opponent=opponent,
                score=cells[3],
                decision=cells[4],
                record=cells[5],
            )
        )
    return entries


def parse_split_row(cells: list[str]) -> Optional[RecordSplit]:
    """
    Decode a fast-facts row: "April (26)" | wins | losses | win pct.

    None for rows without a "(games)" count or with unreadable W-L. An
    unreadable win percentage counts as 0.
    """
    if len(cells) < 4:
        return None
    match = SPLIT_LABEL_PATTERN.match(cells[0])
    if match is None:
        return None

    label = match.group(1).strip()
    games = parse_int(match.group(2))
    wins = parse_int(cells[1])
    losses = parse_int(cells[2])
    if not label or games is None or wins is None or losses is None:
        return None

    win_pct = parse_number(cells[3])
    return RecordSplit(
        label=label,
        games=games,
        wins=wins,
        losses=losses,
        win_pct=win_pct if win_pct is not None else 0.0,
    )


def parse_fast_facts(document: Document) -> tuple[list[RecordSplit], list[RecordSplit]]:
    """
    (monthly, opponent) record splits from the fast-facts box.

    Score-grouped rows (shutouts, one-run games, blowouts, any "... games"
    label) are dropped. Month labels are title-cased.
    """
    soup = to_soup(document)
    monthly: list[RecordSplit] = []
    opponents: list[RecordSplit] = []

    box = soup.select_one("div[class*=fast-facts]")
    if box is None:
        return monthly, opponents

    for table in box.select("table[class*=fastfacttable]"):
        for row in _direct_rows(table)[1:]:
            split = parse_split_row([cell_text(cell) for cell in row.find_all("td", recursive=False)])
            if split is None:
                continue

            key = " ".join(split.label.casefold().split())
            if key in SCORE_SPLIT_LABELS or key.endswith(" games"):
                continue

            if key in MONTH_NAMES:
                monthly.append(
                    RecordSplit(
                        label=key.title(),
                        games=split.games,
                        wins=split.wins,
                        losses=split.losses,
                        win_pct=split.win_pct,
                    )
                )
            else:
                opponents.append(split)

    return monthly, opponents


def parse_team_schedule_page(document: Document) -> TeamSchedule:
    soup = to_soup(document)
    monthly, opponents = parse_fast_facts(soup)
    return TeamSchedule(
        games=parse_schedule_table(soup),
        monthly=monthly,
        opponents=opponents,
    )
