"""
Pipeline Run Model

Audit trail of ingestion runs: one row per pipeline execution.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Optional

import pytz
from peewee import CharField, DateTimeField, IntegerField, TextField, UUIDField

from db.base import BaseModel


class RunStatus(str, Enum):
    RUNNING = "running"
    SUCCESS = "success"
    FAILED = "failed"


class PipelineRun(BaseModel):
    """
    One execution of a pipeline.

    A run that skipped units (pages, teams, stat groups it could not fetch)
    is still a success; units_skipped says how partial it was.
    """

    id = UUIDField(primary_key=True, default=uuid.uuid4)
    pipeline_name = CharField(max_length=50, index=True)
    season = IntegerField(null=True)
    status = CharField(max_length=20, index=True, default=RunStatus.RUNNING.value)
    started_at = DateTimeField()
    completed_at = DateTimeField(null=True)
    records_processed = IntegerField(default=0)
    units_skipped = IntegerField(default=0)
    error_message = TextField(null=True)

    class Meta:
        table_name = "pipeline_runs"

    def __repr__(self) -> str:
        return f"<PipelineRun({self.pipeline_name} {self.status} id={self.id})>"

    @classmethod
    def start_run(cls, pipeline_name: str, season: Optional[int] = None) -> "PipelineRun":
        return cls.create(
            pipeline_name=pipeline_name,
            season=season,
            started_at=datetime.now(pytz.utc),
            status=RunStatus.RUNNING.value,
        )

    def _finish(self, status: RunStatus, records_processed: int, units_skipped: int) -> None:
        self.status = status.value
        self.completed_at = datetime.now(pytz.utc)
        self.records_processed = records_processed
        self.units_skipped = units_skipped
        self.save()

    def mark_success(self, records_processed: int = 0, units_skipped: int = 0) -> None:
        self._finish(RunStatus.SUCCESS, records_processed, units_skipped)

    def mark_failed(
        self, error_message: str, records_processed: int = 0, units_skipped: int = 0
    ) -> None:
        self.error_message = error_message
        self._finish(RunStatus.FAILED, records_processed, units_skipped)

    @classmethod
    def get_latest_successful(cls, pipeline_name: str) -> "Optional[PipelineRun]":
        """Most recently completed successful run of a pipeline, or None."""
        return (
            cls.select()
            .where(
                (cls.pipeline_name == pipeline_name)
                & (cls.status == RunStatus.SUCCESS.value)
            )
            .order_by(cls.completed_at.desc())
            .first()
        )
