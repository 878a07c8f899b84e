"""Export of final instance status and return values."""

from typing import Any, Dict, List, Optional

from core.interfaces.service_facade_interface import IServiceFacade
from core.interfaces.storage_interface import IArtifactStorage
from core.models.instance import Instance, InstanceStatus
from core.utils.logger import get_run_logger
from infrastructure.storage.json_handler import JSONHandler


class ResultExporter:
    """Writes the final status of an instance to an output artifact."""

    def __init__(self, service_facade: IServiceFacade, artifact_storage: IArtifactStorage):
        self.service_facade = service_facade
        self.artifact_storage = artifact_storage
        self.json_handler = JSONHandler()
        self.logger = get_run_logger(__name__)

    def export(self, instance: Instance, output_path: Optional[str]) -> List[str]:
        """Fetch the final status and write it to ``output_path``.

        Returns:
            Locations written; empty when no output path is configured

        Raises:
            ServiceError: If the status call fails
            OSError: If the artifact could not be written
        """
        if not output_path:
            self.logger.info("Output file is not specified, ignoring variables save")
            return []

        self.logger.info(f"Saving output data to file {output_path}")

        status = self.service_facade.get_status(instance)
        contents = self.json_handler.serialize(self.build_result_map(status))

        try:
            return self.artifact_storage.write_text(output_path, contents)
        except OSError as e:
            self.logger.error(f"Unable to save file to workspace {e}")
            raise

    def build_result_map(self, status: InstanceStatus) -> Dict[str, Any]:
        result = {
            "instanceId": status.instance.instance_id,
            "applicationId": status.application_id,
            "status": status.status.name,
        }

        if status.return_values:
            self.logger.info(f"Saving {len(status.return_values)} return values")
            result["returnValues"] = dict(status.return_values)

        return result
