"""
Player Dimension Table

Master data for MLB players. The MLB person id is the authoritative
cross-source key; name_key (the normalized matching key) is the fallback
used by scraped sources that carry no id.
"""

from datetime import datetime
from typing import Optional

from peewee import (
    AutoField,
    CharField,
    DateTimeField,
    ForeignKeyField,
    IntegerField,
)

from db.base import BaseModel
from db.models.teams import Team


class Player(BaseModel):
    """
    MLB player master data.

    Attributes:
        id: Auto-incrementing primary key
        team: Current organization
        mlb_player_id: MLB Stats API person id (unique when present)
        name: Display name
        name_key: Normalized matching key (see normalize_player_name)
        number: Jersey number
        position: Roster position abbreviation (P, C, 1B, OF, ...)
        status: Roster status code (A, D60, ...)
    """

    id = AutoField(primary_key=True)
    team = ForeignKeyField(
        Team,
        backref="players",
        on_delete="RESTRICT",
        column_name="team_id",
    )
    mlb_player_id = IntegerField(null=True, unique=True)
    name = CharField(max_length=100)
    name_key = CharField(max_length=100, index=True)
    number = CharField(max_length=5, null=True)
    position = CharField(max_length=10, null=True)
    status = CharField(max_length=10, null=True)
    created_at = DateTimeField(default=datetime.utcnow)
    updated_at = DateTimeField(default=datetime.utcnow)

    class Meta:
        table_name = "players"

    def __repr__(self) -> str:
        return f"<Player(id={self.id}, name='{self.name}', position={self.position})>"

    def save(self, *args, **kwargs):
        """Override save to auto-update updated_at timestamp."""
        self.updated_at = datetime.utcnow()
        return super().save(*args, **kwargs)

    @classmethod
    def upsert_from_roster(
        cls,
        mlb_player_id: int,
        team_id: int,
        name: str,
        name_key: str,
        number: Optional[str] = None,
        position: Optional[str] = None,
        status: Optional[str] = None,
    ) -> "Player":
        """
        Insert or update a player by MLB id.

        Absent (None) roster fields never overwrite stored values; a trade
        moves the player to the new team.
        """
        player, created = cls.get_or_create(
            mlb_player_id=mlb_player_id,
            defaults={
                "team": team_id,
                "name": name,
                "name_key": name_key,
                "number": number,
                "position": position,
                "status": status,
            },
        )

        if not created:
            updates = {
                "team": team_id,
                "name": name,
                "name_key": name_key,
                "number": number,
                "position": position,
                "status": status,
            }
            for key, value in updates.items():
                if value is not None:
                    setattr(player, key, value)
            player.save()

        return player

    @classmethod
    def find_by_mlb_id(cls, mlb_player_id: int) -> "Player | None":
        return cls.get_or_none(cls.mlb_player_id == mlb_player_id)
