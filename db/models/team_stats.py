"""
Team Stats Table

One row per (team, stat type, perspective). A row is filled by up to three
sources that never overwrite each other's fields:

- the MLB totals feed writes `total` (season aggregate),
- TeamRankings stat pages write the per-game splits (current season,
  last 3 games, last game, home, away, previous season),
- TeamRankings win-trend pages write `win_loss_record` and `win_pct`.

An absent (None) incoming value never replaces a stored one.
"""

from datetime import datetime
from typing import Any, Optional

from peewee import (
    AutoField,
    CharField,
    DateTimeField,
    FloatField,
    ForeignKeyField,
)

from db.base import BaseModel
from db.models.enums import PerspectiveField, StatPerspective
from db.models.stat_types import StatType
from db.models.teams import Team


SPLIT_FIELDS = (
    "current_season",
    "last3_games",
    "last_game",
    "home",
    "away",
    "prev_season",
)


class TeamStat(BaseModel):
    """
    A team's value for one stat type from one perspective.

    Attributes:
        id: Auto-incrementing primary key
        team: Subject team
        stat_type: Metric definition
        perspective: own (team's behavior) or opponent (against the team)
        total: Season aggregate (authoritative or derived)
        current_season, last3_games, last_game, home, away, prev_season:
            Per-game averages and windows
        win_loss_record: W-L text for a win-trend context
        win_pct: Win percentage for a win-trend context
    """

    id = AutoField(primary_key=True)
    team = ForeignKeyField(
        Team,
        backref="stats",
        on_delete="RESTRICT",
        column_name="team_id",
    )
    stat_type = ForeignKeyField(
        StatType,
        backref="team_stats",
        on_delete="RESTRICT",
        column_name="stat_type_id",
    )
    perspective = PerspectiveField()

    total = FloatField(null=True)

    current_season = FloatField(null=True)
    last3_games = FloatField(null=True)
    last_game = FloatField(null=True)
    home = FloatField(null=True)
    away = FloatField(null=True)
    prev_season = FloatField(null=True)

    win_loss_record = CharField(max_length=20, null=True)
    win_pct = FloatField(null=True)

    updated_at = DateTimeField(default=datetime.utcnow)

    class Meta:
        table_name = "team_stats"
        indexes = (
            # Natural key
            (("team", "stat_type", "perspective"), True),
        )

    def __repr__(self) -> str:
        return (
            f"<TeamStat("
            f"team_id={self.team_id}, "
            f"stat_type_id={self.stat_type_id}, "
            f"perspective={self.perspective}, "
            f"total={self.total}, "
            f"current={self.current_season})>"
        )

    def save(self, *args, **kwargs):
        """Override save to auto-update updated_at timestamp."""
        self.updated_at = datetime.utcnow()
        return super().save(*args, **kwargs)

    @classmethod
    def _merge(
        cls,
        team_id: int,
        stat_type_id: int,
        perspective: StatPerspective,
        values: dict[str, Any],
    ) -> "TeamStat":
        """Get-or-create the row for the natural key and set every non-None value."""
        present = {key: value for key, value in values.items() if value is not None}

        record, created = cls.get_or_create(
            team=team_id,
            stat_type=stat_type_id,
            perspective=perspective,
            defaults=present,
        )

        if not created and present:
            changed = False
            for key, value in present.items():
                if getattr(record, key) != value:
                    setattr(record, key, value)
                    changed = True
            if changed:
                record.save()

        return record

    @classmethod
    def merge_totals(
        cls,
        team_id: int,
        stat_type_id: int,
        total: Optional[float],
        perspective: StatPerspective = StatPerspective.OWN,
    ) -> "TeamStat":
        """Write the season aggregate, leaving split fields untouched."""
        return cls._merge(team_id, stat_type_id, perspective, {"total": total})

    @classmethod
    def merge_splits(
        cls,
        team_id: int,
        stat_type_id: int,
        splits: dict[str, Optional[float]],
        perspective: StatPerspective = StatPerspective.OWN,
    ) -> "TeamStat":
        """
        Write per-game split values, leaving the aggregate untouched.

        Args:
            team_id: Subject team id
            stat_type_id: Metric definition id
            splits: Mapping of SPLIT_FIELDS names to parsed values
            perspective: own or opponent

        Returns:
            The created or updated TeamStat
        """
        unknown = set(splits) - set(SPLIT_FIELDS)
        if unknown:
            raise ValueError(f"Unknown split fields: {sorted(unknown)}")
        return cls._merge(team_id, stat_type_id, perspective, dict(splits))

    @classmethod
    def merge_record(
        cls,
        team_id: int,
        stat_type_id: int,
        win_loss_record: Optional[str],
        win_pct: Optional[float],
    ) -> "TeamStat":
        """Write a win-trend context's W-L record and win percentage."""
        return cls._merge(
            team_id,
            stat_type_id,
            StatPerspective.OWN,
            {"win_loss_record": win_loss_record or None, "win_pct": win_pct},
        )

    @classmethod
    def for_team(cls, team_id: int) -> list["TeamStat"]:
        """All stats for a team, joined with their stat type."""
        return list(
            cls.select(cls, StatType)
            .join(StatType)
            .where(cls.team == team_id)
            .order_by(StatType.name, cls.perspective)
        )
