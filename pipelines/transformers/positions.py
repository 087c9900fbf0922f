"""
Position Transformers

Resolves per-position fielding rows to the single roster record of a
player. Fielding pages list a player once per position played; the roster
holds one canonical position per player.
"""

from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Protocol, TypeVar

from pipelines.transformers.names import normalize_player_name
from pipelines.transformers.values import clean_text


UTILITY = "UT"

# Broad role -> the specific roles it covers
POSITION_GROUPS = MappingProxyType({
    "OF": frozenset({"LF", "CF", "RF"}),
    "IF": frozenset({"1B", "2B", "3B", "SS"}),
    "P": frozenset({"SP", "RP"}),
    "TWP": frozenset({"P", "SP", "RP", "DH"}),
})


class RoleRow(Protocol):
    name: str
    position: str


RowT = TypeVar("RowT", bound=RoleRow)


def _role(text: Optional[str]) -> str:
    return clean_text(text).upper()


def split_roles(reported: Optional[str]) -> list[str]:
    """Split "LF/RF" style cells into individual roles."""
    return [role for role in (_role(part) for part in (reported or "").split("/")) if role]


def roles_compatible(canonical: Optional[str], reported: Optional[str]) -> bool:
    """
    Whether a single reported role fits a canonical roster role.

    Exact match (case-insensitive), or one role is a broad group that
    contains the other. A canonical "UT" (utility) fits anything.
    """
    canonical_role = _role(canonical)
    reported_role = _role(reported)

    if canonical_role == UTILITY:
        return True
    if not canonical_role or not reported_role:
        return False
    if canonical_role == reported_role:
        return True
    if reported_role in POSITION_GROUPS.get(canonical_role, ()):
        return True
    return canonical_role in POSITION_GROUPS.get(reported_role, ())


def is_position_compatible(canonical: Optional[str], reported: Optional[str]) -> bool:
    """
    Whether a scraped position cell fits a canonical role.

    A slash-separated cell is compatible if any one of its roles is.
    """
    if _role(canonical) == UTILITY:
        return True
    return any(roles_compatible(canonical, role) for role in split_roles(reported))


def group_by_player(rows: Iterable[RowT]) -> dict[str, list[RowT]]:
    """Group rows by player matching key, keeping source order."""
    grouped: dict[str, list[RowT]] = {}
    for row in rows:
        key = normalize_player_name(row.name)
        if key:
            grouped.setdefault(key, []).append(row)
    return grouped


def select_row(rows: list[RowT], canonical: Optional[str]) -> Optional[RowT]:
    """
    Pick the row for one player.

    No canonical role on file: the first row. Otherwise the first row whose
    position is compatible, or None when none is.
    """
    if not rows:
        return None
    if not _role(canonical):
        return rows[0]
    for row in rows:
        if is_position_compatible(canonical, row.position):
            return row
    return None


def match_rows_to_roster(
    rows: Iterable[RowT],
    roster_roles: Mapping[str, Optional[str]],
) -> dict[str, RowT]:
    """
    Resolve scraped rows against a roster.

    Args:
        rows: Scraped rows exposing `name` and `position`
        roster_roles: Player matching key -> canonical position (or None)

    Returns:
        Matching key -> selected row. Players missing from the roster and
        players without a compatible row are left out.
    """
    selected: dict[str, RowT] = {}
    for key, candidates in group_by_player(rows).items():
        if key not in roster_roles:
            continue
        row = select_row(candidates, roster_roles[key])
        if row is not None:
            selected[key] = row
    return selected
