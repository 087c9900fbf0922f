"""
Data Transformers

Pure functions for transforming extracted data.
"""

from pipelines.transformers.values import clean_text, parse_int, parse_number
from pipelines.transformers.names import normalize_player_name, normalize_team_name
from pipelines.transformers.positions import (
    is_position_compatible,
    match_rows_to_roster,
    roles_compatible,
)
from pipelines.transformers.tables import (
    LocatedRow,
    LocatedTable,
    SplitRow,
    WinTrendRow,
    datatable_rows,
    locate_table,
    parse_split_cells,
    parse_win_trend_cells,
)
from pipelines.transformers.merge import derive_total, map_record_fields, split_perspective
from pipelines.transformers.schedule import (
    RecordSplit,
    ScheduleEntry,
    TeamSchedule,
    parse_team_schedule_page,
    split_opponent_label,
)

__all__ = [
    "clean_text",
    "parse_int",
    "parse_number",
    "normalize_player_name",
    "normalize_team_name",
    "is_position_compatible",
    "match_rows_to_roster",
    "roles_compatible",
    "LocatedRow",
    "LocatedTable",
    "SplitRow",
    "WinTrendRow",
    "datatable_rows",
    "locate_table",
    "parse_split_cells",
    "parse_win_trend_cells",
    "derive_total",
    "map_record_fields",
    "split_perspective",
    "RecordSplit",
    "ScheduleEntry",
    "TeamSchedule",
    "parse_team_schedule_page",
    "split_opponent_label",
]
