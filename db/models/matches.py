"""
Match Tables

Regular-season games from the MLB Stats API schedule feed, with each
side's league record at game time, the R/H/E line score and the per-inning
breakdown. Keyed by the feed's game id (gamePk), so reimporting a day
updates rows in place.
"""

from datetime import datetime
from typing import Any, Optional

from peewee import (
    AutoField,
    BigIntegerField,
    CharField,
    DateTimeField,
    FloatField,
    ForeignKeyField,
    IntegerField,
)

from db.base import BaseModel
from db.models.teams import Team


class Match(BaseModel):
    """
    One scheduled or played game.

    Attributes:
        id: Auto-incrementing primary key
        game_pk: MLB Stats API game id (natural key)
        date: Scheduled start, UTC
        home_team / away_team: Participating teams
        venue: Ballpark name
        home_wins, home_losses, home_pct: Home side's league record
        away_wins, away_losses, away_pct: Away side's league record
        home_runs, home_hits, home_errors: Home side's line score
        away_runs, away_hits, away_errors: Away side's line score
    """

    id = AutoField(primary_key=True)
    game_pk = BigIntegerField(unique=True)
    date = DateTimeField(index=True)

    home_team = ForeignKeyField(
        Team,
        backref="home_matches",
        on_delete="RESTRICT",
        column_name="home_team_id",
        null=True,
    )
    away_team = ForeignKeyField(
        Team,
        backref="away_matches",
        on_delete="RESTRICT",
        column_name="away_team_id",
        null=True,
    )
    venue = CharField(max_length=100, null=True)

    home_wins = IntegerField(null=True)
    home_losses = IntegerField(null=True)
    home_pct = FloatField(null=True)
    away_wins = IntegerField(null=True)
    away_losses = IntegerField(null=True)
    away_pct = FloatField(null=True)

    home_runs = IntegerField(null=True)
    home_hits = IntegerField(null=True)
    home_errors = IntegerField(null=True)
    away_runs = IntegerField(null=True)
    away_hits = IntegerField(null=True)
    away_errors = IntegerField(null=True)

    updated_at = DateTimeField(default=datetime.utcnow)

    class Meta:
        table_name = "matches"

    def __repr__(self) -> str:
        return (
            f"<Match(game_pk={self.game_pk}, "
            f"date={self.date}, "
            f"{self.away_team_id}@{self.home_team_id})>"
        )

    def save(self, *args, **kwargs):
        """Override save to auto-update updated_at timestamp."""
        self.updated_at = datetime.utcnow()
        return super().save(*args, **kwargs)

    @property
    def is_played(self) -> bool:
        return self.home_runs is not None and self.away_runs is not None

    @classmethod
    def upsert_from_schedule(cls, game_pk: int, date: datetime, **fields: Any) -> "Match":
        """
        Insert or update a match by game id.

        A None value never replaces a stored one, so a schedule entry fetched
        before first pitch cannot blank out a finished game's line score.

        Args:
            game_pk: MLB Stats API game id
            date: Scheduled start, UTC
            **fields: Any other Match column

        Returns:
            The created or updated Match
        """
        present = {key: value for key, value in fields.items() if value is not None}
        present["date"] = date

        match, created = cls.get_or_create(game_pk=game_pk, defaults=present)

        if not created:
            for key, value in present.items():
                setattr(match, key, value)
            match.save()

        return match

    @classmethod
    def for_team(cls, team_id: int) -> list["Match"]:
        """A team's matches, home or away, in date order."""
        return list(
            cls.select()
            .where((cls.home_team == team_id) | (cls.away_team == team_id))
            .order_by(cls.date, cls.game_pk)
        )


class MatchInning(BaseModel):
    """
    One inning of a match's line score.

    Attributes:
        match: Parent match
        inning_number: 1-based inning (extra innings continue the count)
        home_runs, home_hits, home_errors: Home side in this inning
        away_runs, away_hits, away_errors: Away side in this inning
    """

    id = AutoField(primary_key=True)
    match = ForeignKeyField(
        Match,
        backref="innings",
        on_delete="CASCADE",
        column_name="match_id",
    )
    inning_number = IntegerField()

    home_runs = IntegerField(null=True)
    home_hits = IntegerField(null=True)
    home_errors = IntegerField(null=True)
    away_runs = IntegerField(null=True)
    away_hits = IntegerField(null=True)
    away_errors = IntegerField(null=True)

    class Meta:
        table_name = "match_innings"
        indexes = (
            (("match", "inning_number"), True),
        )

    def __repr__(self) -> str:
        return f"<MatchInning(match_id={self.match_id}, inning={self.inning_number})>"

    @classmethod
    def upsert(
        cls,
        match_id: int,
        inning_number: int,
        home: tuple[Optional[int], Optional[int], Optional[int]],
        away: tuple[Optional[int], Optional[int], Optional[int]],
    ) -> None:
        """Write an inning's (runs, hits, errors) per side, replacing the stored line."""
        home_runs, home_hits, home_errors = home
        away_runs, away_hits, away_errors = away
        record = {
            "match": match_id,
            "inning_number": inning_number,
            "home_runs": home_runs,
            "home_hits": home_hits,
            "home_errors": home_errors,
            "away_runs": away_runs,
            "away_hits": away_hits,
            "away_errors": away_errors,
        }
        cls.insert(record).on_conflict(
            conflict_target=[cls.match, cls.inning_number],
            preserve=[
                cls.home_runs,
                cls.home_hits,
                cls.home_errors,
                cls.away_runs,
                cls.away_hits,
                cls.away_errors,
            ],
        ).execute()
