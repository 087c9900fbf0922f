"""
Merge Transformers

Pure rules for combining the two shapes of metric data:

- authoritative totals (MLB JSON): one record per subject with exact
  season aggregates and the games played,
- per-game averages (TeamRankings HTML): one page per metric with the
  current, windowed, home/away and previous-season averages.
"""

from typing import Any, Collection, Mapping, Optional

from db.models.enums import StatPerspective
from pipelines.maps import OPPONENT_PREFIX
from pipelines.transformers.values import parse_number


def map_record_fields(record: Mapping[str, Any], field_map: Mapping[str, str]) -> dict[str, float]:
    """
    Metric key -> value for every mapped field present in a JSON record.

    Absent, blank and unparseable fields are skipped rather than defaulted
    to zero.

    Examples:
        >>> map_record_fields({"atBats": "5000", "runs": None}, {"atBats": "AB", "runs": "R"})
        {'AB': 5000.0}
    """
    values: dict[str, float] = {}
    for field_name, metric_key in field_map.items():
        value = parse_number(record.get(field_name))
        if value is not None:
            values[metric_key] = value
    return values


def derive_total(games: Optional[int], current: Optional[float], precision: int = 2) -> Optional[float]:
    """
    Season total from games played x current per-game average.

    None when either side is unknown or games is not positive.

    Examples:
        >>> derive_total(162, 1.23)
        199.26
        >>> derive_total(0, 1.23) is None
        True
    """
    if games is None or games < 1 or current is None:
        return None
    return round(games * current, precision)


def split_perspective(key: str, known_keys: Collection[str]) -> tuple[str, StatPerspective]:
    """
    Base metric name and perspective for a possibly "O"-prefixed key.

    A key is the opponent view only when stripping the prefix leaves another
    known key, so names like "OBP" or "OPS" keep their own meaning.

    Examples:
        >>> split_perspective("OYRFI", {"YRFI", "OYRFI"})
        ('YRFI', <StatPerspective.OPPONENT: 'opponent'>)
        >>> split_perspective("OBP", {"OBP", "AVG"})
        ('OBP', <StatPerspective.OWN: 'own'>)
    """
    if key.startswith(OPPONENT_PREFIX):
        base = key[len(OPPONENT_PREFIX):]
        if base and base in known_keys:
            return base, StatPerspective.OPPONENT
    return key, StatPerspective.OWN
