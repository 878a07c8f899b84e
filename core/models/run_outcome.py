from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional

from core.models.config import BuildResult


class RunClassification(Enum):
    """Final classification of a launch-and-await run."""
    SUCCESS = "success"
    TOLERATED_FAILURE = "tolerated_failure"
    HARD_FAILURE = "hard_failure"


@dataclass
class RunOutcome:
    """Result of a launch-and-await run, returned to the caller."""

    classification: RunClassification
    build_result: BuildResult = BuildResult.SUCCESS
    instance_id: Optional[str] = None
    message: Optional[str] = None

    start_time: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    end_time: Optional[datetime] = None

    @classmethod
    def succeeded(cls, instance_id: str, **kwargs) -> "RunOutcome":
        return cls(RunClassification.SUCCESS, BuildResult.SUCCESS, instance_id, **kwargs)

    @classmethod
    def not_reached(
        cls,
        failure_reaction: BuildResult,
        instance_id: Optional[str] = None,
        message: Optional[str] = None,
        **kwargs,
    ) -> "RunOutcome":
        """Outcome for an instance that never reached the expected status.

        Tolerated unless the failure reaction is a hard FAILURE.
        """
        classification = (
            RunClassification.HARD_FAILURE
            if failure_reaction == BuildResult.FAILURE
            else RunClassification.TOLERATED_FAILURE
        )
        return cls(classification, failure_reaction, instance_id, message, **kwargs)

    @classmethod
    def hard_failure(
        cls, message: str, instance_id: Optional[str] = None, **kwargs
    ) -> "RunOutcome":
        return cls(
            RunClassification.HARD_FAILURE, BuildResult.FAILURE, instance_id, message, **kwargs
        )

    @property
    def should_continue(self) -> bool:
        """Whether later pipeline steps should still run."""
        return self.classification != RunClassification.HARD_FAILURE

    @property
    def is_successful(self) -> bool:
        return self.classification == RunClassification.SUCCESS

    @property
    def duration(self) -> Optional[timedelta]:
        if self.end_time:
            return self.end_time - self.start_time
        return None

    def mark_finished(self) -> "RunOutcome":
        self.end_time = datetime.now(timezone.utc)
        return self
