"""Instance data model."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Dict, Any, List


class InstanceStatusCode(Enum):
    """Instance status reported by the remote service."""

    REQUESTED = "requested"
    PENDING = "pending"
    LAUNCHING = "launching"
    EXECUTING = "executing"
    RUNNING = "running"
    FAILED = "failed"
    DESTROYING = "destroying"
    DESTROYED = "destroyed"
    UNKNOWN = "unknown"

    @classmethod
    def from_value(cls, value: Optional[str]) -> "InstanceStatusCode":
        """Parse a remote status string, case-insensitively."""
        if isinstance(value, cls):
            return value
        if not value:
            return cls.UNKNOWN
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.UNKNOWN

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Application:
    """Remote application reference."""

    application_id: str
    name: Optional[str] = None


@dataclass(frozen=True)
class Environment:
    """Remote environment reference."""

    environment_id: Optional[str] = None
    name: Optional[str] = None


@dataclass(frozen=True)
class Instance:
    """Launched application instance.

    The identifier is assigned by the remote service at launch and never
    changes afterwards.
    """

    instance_id: str
    application: Optional[Application] = None

    def __post_init__(self):
        if not self.instance_id:
            raise ValueError("instance_id cannot be empty")


@dataclass(frozen=True)
class WorkflowStep:
    """Single step of a remote workflow."""

    name: str
    status: str
    percent_complete: int = 0


@dataclass(frozen=True)
class Workflow:
    """Workflow currently running on an instance."""

    name: str
    status: str
    steps: List[WorkflowStep] = field(default_factory=list)


@dataclass(frozen=True)
class InstanceStatus:
    """Point-in-time status snapshot of an instance."""

    status: InstanceStatusCode
    instance: Instance
    application: Optional[Application] = None
    current_workflow: Optional[Workflow] = None
    return_values: Dict[str, Any] = field(default_factory=dict)
    error_message: Optional[str] = None

    @property
    def application_id(self) -> Optional[str]:
        application = self.application or self.instance.application
        return application.application_id if application else None


@dataclass(frozen=True)
class Manifest:
    """Application manifest document."""

    content: str


@dataclass(frozen=True)
class InstanceSpecification:
    """What to launch: an application at a manifest version.

    Version 0 means the version currently associated with the application.
    """

    application: Application
    version: int = 0


@dataclass(frozen=True)
class LaunchSettings:
    """Where and how to launch."""

    environment: Environment = field(default_factory=Environment)
    parameters: Dict[str, Any] = field(default_factory=dict)
