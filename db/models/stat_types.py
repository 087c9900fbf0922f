"""
Stat Type Table

One named metric (an abbreviation such as "HR" or "ER/G") scoped to a
category. The same abbreviation may exist once per category.
"""

from peewee import AutoField, CharField, ForeignKeyField

from db.base import BaseModel
from db.models.categories import StatCategory


class StatType(BaseModel):
    """
    A metric definition.

    Attributes:
        id: Auto-incrementing primary key
        name: Metric abbreviation
        category: Owning StatCategory; (name, category) is the natural key
    """

    id = AutoField(primary_key=True)
    name = CharField(max_length=30)
    category = ForeignKeyField(
        StatCategory,
        backref="stat_types",
        on_delete="RESTRICT",
        column_name="category_id",
    )

    class Meta:
        table_name = "stat_types"
        indexes = (
            (("name", "category"), True),
        )

    def __repr__(self) -> str:
        return f"<StatType(id={self.id}, name='{self.name}', category_id={self.category_id})>"
