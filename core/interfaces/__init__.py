"""Core interfaces for the instance launcher."""

from .service_facade_interface import IServiceFacade
from .storage_interface import IArtifactStorage

__all__ = [
    'IServiceFacade',
    'IArtifactStorage'
]
