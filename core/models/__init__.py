"""Core data models for the instance launcher."""

from .instance import (
    Application,
    Environment,
    Instance,
    InstanceSpecification,
    InstanceStatus,
    InstanceStatusCode,
    LaunchSettings,
    Manifest,
    Workflow,
    WorkflowStep,
)
from .config import BuildResult, LaunchConfig, LogLevel, ServiceConfig
from .run_outcome import RunClassification, RunOutcome

__all__ = [
    'Application',
    'Environment',
    'Instance',
    'InstanceSpecification',
    'InstanceStatus',
    'InstanceStatusCode',
    'LaunchSettings',
    'Manifest',
    'Workflow',
    'WorkflowStep',
    'BuildResult',
    'LaunchConfig',
    'LogLevel',
    'ServiceConfig',
    'RunClassification',
    'RunOutcome'
]
