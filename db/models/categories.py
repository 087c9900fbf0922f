"""
Stat Category Table

Groups related stat types (e.g. "Hitting", "PlayerPitching"). Created lazily
by the reference registry the first time an importer needs one.
"""

from peewee import AutoField, CharField

from db.base import BaseModel


class StatCategory(BaseModel):
    """
    A named group of stat types.

    Attributes:
        id: Auto-incrementing primary key
        name: Natural key (unique)
    """

    id = AutoField(primary_key=True)
    name = CharField(max_length=50, unique=True)

    class Meta:
        table_name = "stat_categories"

    def __repr__(self) -> str:
        return f"<StatCategory(id={self.id}, name='{self.name}')>"
