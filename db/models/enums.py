"""
Enumerations shared by the metric value tables.
"""

from enum import Enum

from peewee import CharField


class StatPerspective(str, Enum):
    """Whose behavior a metric value measures."""

    OWN = "own"  # the subject's own behavior
    OPPONENT = "opponent"  # others' behavior against the subject


class PerspectiveField(CharField):
    """Stores a StatPerspective as its string value."""

    def __init__(self, *args, **kwargs):
        kwargs.setdefault("max_length", 10)
        kwargs.setdefault("default", StatPerspective.OWN)
        super().__init__(*args, **kwargs)

    def db_value(self, value):
        if value is None:
            return None
        return StatPerspective(value).value

    def python_value(self, value):
        if value is None:
            return None
        return StatPerspective(value)
