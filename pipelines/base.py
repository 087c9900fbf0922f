"""
Base Pipeline

Abstract base class for all data pipelines.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import ClassVar

from core.logging import pipeline_log_scope
from db.base import db
from db.registry import ReferenceRegistry
from pipelines.config import PipelineConfig
from pipelines.context import PipelineContext
from pipelines.transformers.names import normalize_team_name
from schemas.pipeline import PipelineResult


class BasePipeline(ABC):
    """
    Abstract base class for all data pipelines.

    Provides:
    - Automatic run tracking via PipelineContext
    - Structured logging bound to the run
    - A fresh ReferenceRegistry per run
    - Standardized error handling
    - Thread-based execution to avoid blocking the async event loop

    Subclasses must implement:
    - config: PipelineConfig class attribute
    - execute(): The actual pipeline logic (synchronous)

    Within execute(), each unit of work (one page, one team, one stat group)
    is fetched, then written inside `with self.unit_of_work():` so it commits
    on its own. Transport failures skip the unit via ctx.skip_unit(); any
    other exception fails the run, leaving earlier units committed.

    Example:
        class TeamFieldingPipeline(BasePipeline):
            config = PipelineConfig(
                name="team_fielding",
                display_name="Team Fielding",
                description="Per-game fielding averages from TeamRankings",
                target_table="team_stats",
            )

            def execute(self, ctx: PipelineContext) -> None:
                ...
    """

    # Class-level configuration - must be overridden by subclasses
    config: ClassVar[PipelineConfig]

    def __init__(self):
        """Initialize pipeline and validate configuration."""
        self._validate_config()
        self.registry = ReferenceRegistry(normalize_team_name)

    def _validate_config(self) -> None:
        """Validate that config is properly defined."""
        if not hasattr(self.__class__, "config") or self.__class__.config is None:
            raise ValueError(
                f"{self.__class__.__name__} must define a 'config' class attribute"
            )

    @abstractmethod
    def execute(self, ctx: PipelineContext) -> None:
        """
        Execute the pipeline logic.

        This is the main method subclasses implement. It runs in a separate
        thread to avoid blocking the async event loop. All synchronous I/O
        (HTTP requests, database calls) is safe to call directly here.

        Args:
            ctx: Pipeline context with logging, tracking, and timing

        Raises:
            Any exception will be caught and converted to a failed result
        """
        pass

    def unit_of_work(self):
        """Transaction for one unit; commits on exit, rolls back on error."""
        return db.atomic()

    def run_sync(self) -> PipelineResult:
        """
        Run the full pipeline lifecycle synchronously.

        Called via asyncio.to_thread() from run() so that all blocking I/O
        (Peewee DB calls, HTTP requests) executes in a thread pool worker
        instead of on the async event loop.

        Opens a DB connection for the worker thread when none is open (Peewee
        connections are thread-local) and closes only the one it opened.
        """
        opened = db.is_closed()
        if opened:
            db.connect()

        try:
            self.registry = ReferenceRegistry(normalize_team_name)
            ctx = PipelineContext(self.config.name)
            ctx.start_tracking()

            with pipeline_log_scope(self.config.name, ctx.run_id):
                try:
                    self.before_execute(ctx)
                    self.execute(ctx)
                    self.after_execute(ctx)
                    return ctx.mark_success()
                except Exception as e:
                    return ctx.mark_failed(e)
        finally:
            if opened and not db.is_closed():
                db.close()

    async def run(self) -> PipelineResult:
        """
        Run the pipeline with full lifecycle management.

        This is the public entry point. The entire pipeline execution
        (including DB and HTTP I/O) runs in a thread pool worker via
        asyncio.to_thread() to avoid blocking the event loop.

        Returns:
            PipelineResult with status, timing, and records processed
        """
        return await asyncio.to_thread(self.run_sync)

    def before_execute(self, ctx: PipelineContext) -> None:
        """
        Hook called before execute().

        Override for validation or setup tasks.
        """
        pass

    def after_execute(self, ctx: PipelineContext) -> None:
        """
        Hook called after successful execute().

        Override for cleanup tasks.
        """
        pass

    @classmethod
    def get_name(cls) -> str:
        """Get the pipeline name from config."""
        return cls.config.name

    @classmethod
    def get_info(cls) -> dict:
        """Get pipeline information for listing."""
        return {
            "name": cls.config.name,
            "display_name": cls.config.display_name,
            "description": cls.config.description,
            "target_table": cls.config.target_table,
            "source": cls.config.source,
            "depends_on": list(cls.config.depends_on),
        }

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(name={self.config.name})>"
