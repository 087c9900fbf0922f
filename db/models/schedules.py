"""
Team Schedule Tables

A team's season as Baseball Almanac lists it: the game-by-game log and
the "fast facts" record splits by month and by opponent. Every table is
keyed by (team, season, ...) and rewritten in full on reimport.
"""

from datetime import date as date_type, datetime
from typing import Optional

from peewee import (
    AutoField,
    BooleanField,
    CharField,
    DateField,
    DateTimeField,
    FloatField,
    ForeignKeyField,
    IntegerField,
)

from db.base import BaseModel
from db.models.teams import Team


class TeamGame(BaseModel):
    """
    One line of a team's season game log.

    Attributes:
        team: Subject team
        season: Season year
        game_number: 1-based game number within the season
        date: Game date
        is_home: True for "vs" games, False for "at" games
        opponent_name: Normalized opponent label (prefix removed)
        opponent_team: Opponent's team row, null while that team is unknown
        score, decision, record: Result text and the running W-L record
    """

    id = AutoField(primary_key=True)
    team = ForeignKeyField(
        Team,
        backref="schedule",
        on_delete="RESTRICT",
        column_name="team_id",
    )
    season = IntegerField()
    game_number = IntegerField()
    date = DateField(null=True)
    is_home = BooleanField(default=False)
    opponent_name = CharField(max_length=100)
    opponent_team = ForeignKeyField(
        Team,
        backref="schedule_against",
        on_delete="SET NULL",
        column_name="opponent_team_id",
        null=True,
    )
    score = CharField(max_length=20, null=True)
    decision = CharField(max_length=20, null=True)
    record = CharField(max_length=20, null=True)
    updated_at = DateTimeField(default=datetime.utcnow)

    class Meta:
        table_name = "team_games"
        indexes = (
            (("team", "season", "game_number"), True),
        )

    def __repr__(self) -> str:
        return (
            f"<TeamGame(team_id={self.team_id}, season={self.season}, "
            f"game={self.game_number}, opponent='{self.opponent_name}')>"
        )

    @classmethod
    def upsert(
        cls,
        team_id: int,
        season: int,
        game_number: int,
        game_date: Optional[date_type],
        is_home: bool,
        opponent_name: str,
        opponent_team_id: Optional[int],
        score: Optional[str],
        decision: Optional[str],
        record: Optional[str],
    ) -> None:
        row = {
            "team": team_id,
            "season": season,
            "game_number": game_number,
            "date": game_date,
            "is_home": is_home,
            "opponent_name": opponent_name,
            "opponent_team": opponent_team_id,
            "score": score,
            "decision": decision,
            "record": record,
            "updated_at": datetime.utcnow(),
        }
        cls.insert(row).on_conflict(
            conflict_target=[cls.team, cls.season, cls.game_number],
            preserve=[
                cls.date,
                cls.is_home,
                cls.opponent_name,
                cls.opponent_team,
                cls.score,
                cls.decision,
                cls.record,
                cls.updated_at,
            ],
        ).execute()

    @classmethod
    def for_season(cls, team_id: int, season: int) -> list["TeamGame"]:
        return list(
            cls.select()
            .where((cls.team == team_id) & (cls.season == season))
            .order_by(cls.game_number)
        )


class TeamMonthlySplit(BaseModel):
    """A team's W-L record within one calendar month."""

    id = AutoField(primary_key=True)
    team = ForeignKeyField(
        Team,
        backref="monthly_splits",
        on_delete="RESTRICT",
        column_name="team_id",
    )
    season = IntegerField()
    month = CharField(max_length=20)
    games = IntegerField(null=True)
    wins = IntegerField(null=True)
    losses = IntegerField(null=True)
    win_pct = FloatField(default=0.0)
    updated_at = DateTimeField(default=datetime.utcnow)

    class Meta:
        table_name = "team_monthly_splits"
        indexes = (
            (("team", "season", "month"), True),
        )

    def __repr__(self) -> str:
        return f"<TeamMonthlySplit(team_id={self.team_id}, {self.month} {self.wins}-{self.losses})>"

    @classmethod
    def upsert(
        cls,
        team_id: int,
        season: int,
        month: str,
        games: Optional[int],
        wins: Optional[int],
        losses: Optional[int],
        win_pct: float,
    ) -> None:
        row = {
            "team": team_id,
            "season": season,
            "month": month,
            "games": games,
            "wins": wins,
            "losses": losses,
            "win_pct": win_pct,
            "updated_at": datetime.utcnow(),
        }
        cls.insert(row).on_conflict(
            conflict_target=[cls.team, cls.season, cls.month],
            preserve=[cls.games, cls.wins, cls.losses, cls.win_pct, cls.updated_at],
        ).execute()


class TeamOpponentSplit(BaseModel):
    """
    A team's W-L record against one opponent.

    opponent_name is the normalized label from the page; opponent_team links
    to the team row when that team is already known and stays null otherwise.
    """

    id = AutoField(primary_key=True)
    team = ForeignKeyField(
        Team,
        backref="opponent_splits",
        on_delete="RESTRICT",
        column_name="team_id",
    )
    season = IntegerField()
    opponent_name = CharField(max_length=100)
    opponent_team = ForeignKeyField(
        Team,
        backref="opponent_splits_against",
        on_delete="SET NULL",
        column_name="opponent_team_id",
        null=True,
    )
    games = IntegerField(null=True)
    wins = IntegerField(null=True)
    losses = IntegerField(null=True)
    win_pct = FloatField(default=0.0)
    updated_at = DateTimeField(default=datetime.utcnow)

    class Meta:
        table_name = "team_opponent_splits"
        indexes = (
            (("team", "season", "opponent_name"), True),
        )

    def __repr__(self) -> str:
        return (
            f"<TeamOpponentSplit(team_id={self.team_id}, "
            f"opponent='{self.opponent_name}' {self.wins}-{self.losses})>"
        )

    @classmethod
    def upsert(
        cls,
        team_id: int,
        season: int,
        opponent_name: str,
        opponent_team_id: Optional[int],
        games: Optional[int],
        wins: Optional[int],
        losses: Optional[int],
        win_pct: float,
    ) -> None:
        row = {
            "team": team_id,
            "season": season,
            "opponent_name": opponent_name,
            "opponent_team": opponent_team_id,
            "games": games,
            "wins": wins,
            "losses": losses,
            "win_pct": win_pct,
            "updated_at": datetime.utcnow(),
        }
        cls.insert(row).on_conflict(
            conflict_target=[cls.team, cls.season, cls.opponent_name],
            preserve=[
                cls.opponent_team,
                cls.games,
                cls.wins,
                cls.losses,
                cls.win_pct,
                cls.updated_at,
            ],
        ).execute()
