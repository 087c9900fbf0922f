"""
Team Dimension Table

One row per MLB organization, keyed by the case-folded canonical name so
that every alias a source uses resolves to the same row.
"""

from datetime import datetime
from typing import Optional

from peewee import (
    AutoField,
    CharField,
    DateTimeField,
    FloatField,
    IntegerField,
)

from db.base import BaseModel


class Team(BaseModel):
    """
    MLB team master data.

    Attributes:
        id: Auto-incrementing primary key
        name: Canonical display name (e.g. "Toronto Blue Jays")
        name_key: Case-folded canonical name (natural key)
        games: Games played this season, the unit count for derived totals
        win_percentage: Overall win fraction (0-1)
        overall_record: Overall W-L record text (e.g. "81-81")
    """

    id = AutoField(primary_key=True)
    name = CharField(max_length=100)
    name_key = CharField(max_length=100, unique=True)
    games = IntegerField(null=True)
    win_percentage = FloatField(null=True)
    overall_record = CharField(max_length=20, null=True)
    created_at = DateTimeField(default=datetime.utcnow)
    updated_at = DateTimeField(default=datetime.utcnow)

    class Meta:
        table_name = "teams"

    def __repr__(self) -> str:
        return f"<Team(id={self.id}, name='{self.name}', games={self.games})>"

    def save(self, *args, **kwargs):
        """Override save to auto-update updated_at timestamp."""
        self.updated_at = datetime.utcnow()
        return super().save(*args, **kwargs)

    @staticmethod
    def key_for(canonical_name: str) -> str:
        """Natural key for an already-canonical team name."""
        return " ".join(canonical_name.split()).casefold()

    @classmethod
    def set_games(cls, team_id: int, games: Optional[int]) -> None:
        """Store the unit count for a team; None leaves the stored value alone."""
        if games is None:
            return
        cls.update(games=games, updated_at=datetime.utcnow()).where(cls.id == team_id).execute()

    @classmethod
    def set_overall_record(
        cls,
        team_id: int,
        record: Optional[str],
        win_percentage: Optional[float],
    ) -> None:
        """Store the overall W-L record and win fraction, skipping absent values."""
        values = {}
        if record:
            values["overall_record"] = record
        if win_percentage is not None:
            values["win_percentage"] = win_percentage
        if not values:
            return
        values["updated_at"] = datetime.utcnow()
        cls.update(**values).where(cls.id == team_id).execute()
