"""Remote application service facade interface."""

from abc import ABC, abstractmethod
from typing import List
from core.models.instance import (
    Application,
    Environment,
    Instance,
    InstanceSpecification,
    InstanceStatus,
    LaunchSettings,
    Manifest,
)


class IServiceFacade(ABC):
    """Interface for the remote application management service.

    Every method may raise a ``core.exceptions.ServiceError`` subclass:
    InvalidCredentialsError, NotAuthorizedError, ResourceNotFoundError,
    or the generic ServiceError.
    """

    @abstractmethod
    def update_manifest(self, application: Application, manifest: Manifest) -> int:
        """Upload a new manifest for an application.

        Args:
            application: Application to update
            manifest: Manifest document

        Returns:
            New manifest version number
        """
        pass

    @abstractmethod
    def launch_instance(self, specification: InstanceSpecification,
                        settings: LaunchSettings) -> Instance:
        """Launch a new application instance.

        Args:
            specification: Application and manifest version to launch
            settings: Environment and extra launch parameters

        Returns:
            The launched instance
        """
        pass

    @abstractmethod
    def get_status(self, instance: Instance) -> InstanceStatus:
        """Get a fresh status snapshot of an instance.

        Args:
            instance: Instance to query

        Returns:
            InstanceStatus snapshot
        """
        pass

    @abstractmethod
    def get_all_applications(self) -> List[Application]:
        """List applications visible to the configured account."""
        pass

    @abstractmethod
    def get_all_environments(self) -> List[Environment]:
        """List environments visible to the configured account."""
        pass
