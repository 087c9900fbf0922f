"""
Reference Registry

Idempotent get-or-create for reference rows (stat categories, stat types
and teams) that any importer may be the first to need.

Lookup order per natural key:

1. in-process cache,
2. the database,
3. insert (in its own transaction/savepoint),
4. on a uniqueness conflict, another writer won the race: re-query and use
   its row.

The unique indexes on the natural keys are the only coordination between
concurrent writers; no lock is taken.
"""

from typing import Callable, Hashable, Optional

from peewee import IntegrityError, Model

from core.logging import get_logger
from db.base import db
from db.models.categories import StatCategory
from db.models.stat_types import StatType
from db.models.teams import Team


# Postgres SQLSTATE for unique_violation
PG_UNIQUE_VIOLATION = "23505"
SQLITE_UNIQUE_MESSAGE = "UNIQUE constraint failed"

# Raw team label -> canonical team name ("" when the label is blank)
TeamNormalizer = Callable[[Optional[str]], str]


def is_unique_violation(exc: BaseException) -> bool:
    """
    Whether an IntegrityError is a uniqueness conflict.

    Foreign key and NOT NULL violations are integrity errors too, but they
    are real failures and must propagate.
    """
    if not isinstance(exc, IntegrityError):
        return False

    candidates = [exc, exc.__cause__, exc.__context__]
    candidates.extend(arg for arg in exc.args if isinstance(arg, BaseException))

    for candidate in candidates:
        if candidate is None:
            continue
        code = getattr(candidate, "pgcode", None) or getattr(candidate, "sqlstate", None)
        if code == PG_UNIQUE_VIOLATION:
            return True
        if SQLITE_UNIQUE_MESSAGE in str(candidate):
            return True
    return False


class ReferenceRegistry:
    """
    Natural key -> id resolution with a per-instance cache.

    One registry is created per pipeline run; the cache only ever holds ids
    of committed rows. Team labels are resolved by the normalizer it is
    given, which carries the alias table.

    Example:
        registry = ReferenceRegistry(normalize_team_name)
        stat_type_id = registry.ensure_stat_type_id("HR", "Hitting")
        team_id = registry.ensure_team_id("Toronto")
    """

    def __init__(self, normalize_team: TeamNormalizer):
        self.normalize_team = normalize_team
        self._categories: dict[str, int] = {}
        self._stat_types: dict[tuple[str, int], int] = {}
        self._teams: dict[str, int] = {}
        self.log = get_logger("registry")

    # -- generic protocol ---------------------------------------------------

    def _ensure(
        self,
        kind: str,
        cache: dict,
        key: Hashable,
        find: Callable[[], Optional[Model]],
        create: Callable[[], Model],
    ) -> int:
        cached = cache.get(key)
        if cached is not None:
            return cached

        row = find()
        if row is None:
            try:
                with db.atomic():
                    row = create()
                self.log.debug("reference_created", kind=kind, key=str(key), id=row.id)
            except IntegrityError as exc:
                if not is_unique_violation(exc):
                    raise
                row = find()
                if row is None:
                    raise
                self.log.info("reference_conflict_recovered", kind=kind, key=str(key), id=row.id)

        cache[key] = row.id
        return row.id

    # -- lookups (overridable in tests) ------------------------------------

    def _find_category(self, name: str) -> Optional[StatCategory]:
        return StatCategory.get_or_none(StatCategory.name == name)

    def _find_stat_type(self, name: str, category_id: int) -> Optional[StatType]:
        return StatType.get_or_none(
            (StatType.name == name) & (StatType.category == category_id)
        )

    def _find_team(self, name_key: str) -> Optional[Team]:
        return Team.get_or_none(Team.name_key == name_key)

    # -- public API -----------------------------------------------------------

    def ensure_category_id(self, name: str) -> int:
        """Id of the stat category with this name, creating it if missing."""
        name = " ".join(name.split())
        if not name:
            raise ValueError("Category name is required")
        return self._ensure(
            "category",
            self._categories,
            name,
            lambda: self._find_category(name),
            lambda: StatCategory.create(name=name),
        )

    def ensure_stat_type_id(self, name: str, category: str) -> int:
        """Id of the stat type (name, category), creating either if missing."""
        name = " ".join(name.split())
        if not name:
            raise ValueError("Stat type name is required")
        category_id = self.ensure_category_id(category)
        return self._ensure(
            "stat_type",
            self._stat_types,
            (name, category_id),
            lambda: self._find_stat_type(name, category_id),
            lambda: StatType.create(name=name, category=category_id),
        )

    def ensure_team_id(self, raw_name: Optional[str]) -> Optional[int]:
        """
        Id of the team a raw label refers to, creating the team if missing.

        The label is resolved through the alias table first, so every
        spelling of a team lands on one row. Returns None for a blank label.
        """
        canonical = self.normalize_team(raw_name)
        if not canonical:
            return None
        name_key = Team.key_for(canonical)
        return self._ensure(
            "team",
            self._teams,
            name_key,
            lambda: self._find_team(name_key),
            lambda: Team.create(name=canonical, name_key=name_key),
        )

    def find_team_id(self, raw_name: Optional[str]) -> Optional[int]:
        """Id of an existing team for a raw label; never creates one."""
        canonical = self.normalize_team(raw_name)
        if not canonical:
            return None
        name_key = Team.key_for(canonical)
        cached = self._teams.get(name_key)
        if cached is not None:
            return cached
        row = self._find_team(name_key)
        if row is None:
            return None
        self._teams[name_key] = row.id
        return row.id
