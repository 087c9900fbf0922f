"""
Player Stats Table

Season aggregates per (player, stat type, perspective), written by the
MLB player stats feed and the Baseball Almanac fielding import.
"""

from datetime import datetime
from typing import Optional

from peewee import AutoField, DateTimeField, FloatField, ForeignKeyField

from db.base import BaseModel
from db.models.enums import PerspectiveField, StatPerspective
from db.models.players import Player
from db.models.stat_types import StatType


class PlayerStat(BaseModel):
    """
    A player's season value for one stat type.

    Attributes:
        id: Auto-incrementing primary key
        player: Subject player
        stat_type: Metric definition (in a Player* category)
        perspective: own or opponent
        total: Season value
    """

    id = AutoField(primary_key=True)
    player = ForeignKeyField(
        Player,
        backref="stats",
        on_delete="CASCADE",
        column_name="player_id",
    )
    stat_type = ForeignKeyField(
        StatType,
        backref="player_stats",
        on_delete="RESTRICT",
        column_name="stat_type_id",
    )
    perspective = PerspectiveField()
    total = FloatField(null=True)
    updated_at = DateTimeField(default=datetime.utcnow)

    class Meta:
        table_name = "player_stats"
        indexes = (
            (("player", "stat_type", "perspective"), True),
        )

    def __repr__(self) -> str:
        return (
            f"<PlayerStat(player_id={self.player_id}, "
            f"stat_type_id={self.stat_type_id}, total={self.total})>"
        )

    @classmethod
    def upsert_total(
        cls,
        player_id: int,
        stat_type_id: int,
        total: Optional[float],
        perspective: StatPerspective = StatPerspective.OWN,
    ) -> "PlayerStat | None":
        """
        Insert or update a player's season value.

        A None total is ignored entirely: no row is created for it and an
        existing value is kept.
        """
        if total is None:
            return None

        record, created = cls.get_or_create(
            player=player_id,
            stat_type=stat_type_id,
            perspective=perspective,
            defaults={"total": total},
        )

        if not created and record.total != total:
            record.total = total
            record.updated_at = datetime.utcnow()
            record.save()

        return record
