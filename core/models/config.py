from dataclasses import dataclass
from typing import List, Optional
from enum import Enum

from core.models.instance import InstanceStatusCode

AWS_RUN_MODES = ("local", "pipeline")


class LogLevel(Enum):
    """Logging levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class BuildResult(Enum):
    """Build status applied to the surrounding pipeline run."""
    SUCCESS = "SUCCESS"
    UNSTABLE = "UNSTABLE"
    FAILURE = "FAILURE"
    NOT_BUILT = "NOT_BUILT"
    ABORTED = "ABORTED"

    @classmethod
    def from_string(cls, value: Optional[str]) -> "BuildResult":
        """Parse a build result name; unknown or blank values become FAILURE."""
        if isinstance(value, cls):
            return value
        if not value:
            return cls.FAILURE
        try:
            return cls[value.strip().upper()]
        except KeyError:
            return cls.FAILURE

    def __str__(self) -> str:
        return self.value


@dataclass
class ServiceConfig:
    """Remote service connection settings."""

    url: str = ""
    login: str = ""
    password: str = ""

    # Process-wide, seconds
    status_polling_interval: float = 5.0
    return_values_grace_period: float = 2.0

    # Directory or s3://bucket/prefix visible to every execution node
    shared_root: str = ".launcher"

    # Only used for an s3:// shared root
    aws_region: Optional[str] = None
    aws_run_mode: str = "local"

    log_level: LogLevel = LogLevel.INFO

    def validate(self) -> List[str]:
        """Validate configuration and return list of errors."""
        errors = []

        if not self.url or not self.url.strip():
            errors.append("Service URL must be configured")
        if not self.login or not self.login.strip():
            errors.append("Service login must be configured")
        if not self.password or not self.password.strip():
            errors.append("Service password must be configured")

        if self.status_polling_interval <= 0:
            errors.append("Status polling interval must be positive")
        if self.return_values_grace_period < 0:
            errors.append("Return values grace period cannot be negative")
        if self.aws_run_mode not in AWS_RUN_MODES:
            errors.append(f"AWS run mode must be one of: {', '.join(AWS_RUN_MODES)}")

        return errors


@dataclass
class LaunchConfig:
    """Settings for a single launch-and-await run.

    String fields may contain $NAME or ${NAME} placeholders which are
    resolved against build variables at run time.
    """

    application_id: str
    environment_id: Optional[str] = None
    manifest_path: Optional[str] = None
    extra_parameters: Optional[str] = None

    # Seconds
    timeout: int = 600

    expected_status: InstanceStatusCode = InstanceStatusCode.RUNNING
    output_file_path: Optional[str] = None
    failure_reaction: BuildResult = BuildResult.FAILURE

    def __post_init__(self):
        if isinstance(self.timeout, str):
            self.timeout = int(self.timeout)
        if not isinstance(self.expected_status, InstanceStatusCode):
            self.expected_status = InstanceStatusCode.from_value(self.expected_status)
        if not isinstance(self.failure_reaction, BuildResult):
            self.failure_reaction = BuildResult.from_string(self.failure_reaction)

    def validate(self) -> List[str]:
        """Validate configuration and return list of errors."""
        errors = []

        if not self.application_id or not self.application_id.strip():
            errors.append("Application id must be specified")
        if self.timeout < 0:
            errors.append("Timeout cannot be negative")
        if self.expected_status == InstanceStatusCode.UNKNOWN:
            errors.append("Expected status must be a known instance status")

        return errors
