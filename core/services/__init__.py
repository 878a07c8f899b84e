"""Core services for the instance launcher."""

from .config_service import ConfigService
from .manifest_stager import ManifestStager
from .result_exporter import ResultExporter
from .status_poller import StatusPoller
from .variable_store import INSTANCE_ID_KEY, VariableStore

__all__ = [
    'ConfigService',
    'ManifestStager',
    'ResultExporter',
    'StatusPoller',
    'INSTANCE_ID_KEY',
    'VariableStore'
]
