"""Launch-and-await orchestration for a single instance run."""

import os
from datetime import datetime, timezone
from dataclasses import replace
from typing import List, Mapping, Optional

from core.exceptions import (
    ManifestNotFoundError,
    ManifestReadError,
    RunInterruptedError,
    ServiceError,
)
from core.interfaces.service_facade_interface import IServiceFacade
from core.interfaces.storage_interface import IArtifactStorage
from core.models.config import LaunchConfig, ServiceConfig
from core.models.instance import (
    Application,
    Environment,
    Instance,
    InstanceSpecification,
    LaunchSettings,
)
from core.models.run_outcome import RunOutcome
from core.services.manifest_stager import ManifestStager
from core.services.result_exporter import ResultExporter
from core.services.status_poller import StatusPoller
from core.services.variable_store import INSTANCE_ID_KEY, VariableStore
from core.utils.cancellation import CancellationToken
from core.utils.logger import get_run_logger
from infrastructure.storage.json_handler import JSONHandler
from infrastructure.storage.mirrored_storage import create_artifact_storage, local_shared_root


class InstanceOrchestrator:
    """Launches an application instance and waits for it to come up.

    One orchestrator serves one run: the variable store and cancellation
    token belong to that run. Steps:

    1. validate configuration
    2. stage and submit the manifest, when one is given
    3. launch the instance and save its id under ``instance-id``
    4. poll until the expected status, FAILED, or timeout
    5. after a grace period, export the final status
    """

    def __init__(
        self,
        service_config: ServiceConfig,
        service_facade: IServiceFacade,
        variable_store: Optional[VariableStore] = None,
        workspace_root: str = ".",
        artifact_storage: Optional[IArtifactStorage] = None,
        manifest_stager: Optional[ManifestStager] = None,
        status_poller: Optional[StatusPoller] = None,
        cancellation: Optional[CancellationToken] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.service_config = service_config
        self.service_facade = service_facade
        self.variable_store = variable_store if variable_store is not None else VariableStore()
        self.cancellation = cancellation or CancellationToken()
        self.environ = os.environ if environ is None else environ
        self.json_handler = JSONHandler()
        self.logger = get_run_logger(__name__)

        shared_root = service_config.shared_root
        self.manifest_stager = manifest_stager or ManifestStager(
            workspace_root, str(local_shared_root(shared_root, workspace_root))
        )
        self.status_poller = status_poller or StatusPoller(
            service_facade,
            service_config.status_polling_interval,
            cancellation=self.cancellation,
        )
        self.result_exporter = ResultExporter(
            service_facade,
            artifact_storage or create_artifact_storage(
                workspace_root,
                shared_root,
                aws_region=service_config.aws_region,
                aws_run_mode=service_config.aws_run_mode,
            ),
        )

    def launch_and_await(self, launch_config: LaunchConfig) -> RunOutcome:
        """Run the whole launch lifecycle and classify the outcome.

        Never raises for remote, manifest, interruption or local I/O
        failures; those become a HARD_FAILURE outcome.
        """
        started = datetime.now(timezone.utc)
        config_errors = self.service_config.validate()
        if config_errors:
            self.logger.error(
                "Unable to proceed without configuration. Please check global settings. "
                f"{'; '.join(config_errors)}"
            )
            return self._finish(RunOutcome.hard_failure("Invalid service configuration"), started)

        launch_config = self._resolve_placeholders(launch_config)
        launch_errors = launch_config.validate()
        if launch_errors:
            self.logger.error(f"Invalid launch configuration: {'; '.join(launch_errors)}")
            return self._finish(RunOutcome.hard_failure("Invalid launch configuration"), started)

        try:
            parameters = self.json_handler.parse_map(launch_config.extra_parameters)
        except ValueError as e:
            self.logger.error(f"Unable to parse extra parameters: {e}")
            return self._finish(RunOutcome.hard_failure("Invalid extra parameters"), started)

        try:
            instance = self._launch(launch_config, parameters)
        except _RunAborted as aborted:
            return self._finish(aborted.outcome, started)

        return self._finish(self._await_and_export(instance, launch_config), started)

    def list_applications(self) -> List[Application]:
        return self.service_facade.get_all_applications()

    def list_environments(self) -> List[Environment]:
        return self.service_facade.get_all_environments()

    def _launch(self, launch_config: LaunchConfig, parameters: dict) -> Instance:
        application = Application(launch_config.application_id)
        version = 0

        try:
            self.cancellation.check()

            if launch_config.manifest_path and launch_config.manifest_path.strip():
                version = self._update_manifest(application, launch_config.manifest_path)

            self.cancellation.check()

            instance = self.service_facade.launch_instance(
                InstanceSpecification(application, version),
                LaunchSettings(Environment(launch_config.environment_id), parameters),
            )
        except ServiceError as e:
            self.logger.error(f"Error when launching instance: {e}")
            raise _RunAborted(RunOutcome.hard_failure(f"Launch failed: {e}"))
        except RunInterruptedError:
            self.logger.error("Build interrupted")
            raise _RunAborted(RunOutcome.hard_failure("Interrupted"))

        self.logger.info(f"Launched instance {instance.instance_id}")
        self.variable_store.set_variable(INSTANCE_ID_KEY, instance.instance_id)
        return instance

    def _update_manifest(self, application: Application, manifest_path: str) -> int:
        try:
            manifest = self.manifest_stager.read_manifest(manifest_path)
        except ManifestNotFoundError:
            self.logger.error("Unable to proceed without manifest")
            raise _RunAborted(RunOutcome.hard_failure(f"Manifest not found: {manifest_path}"))
        except (ManifestReadError, OSError) as e:
            self.logger.error(f"Unable to read manifest file: {e}")
            raise _RunAborted(RunOutcome.hard_failure(f"Manifest read failed: {manifest_path}"))

        self.logger.info("Updating app manifest")
        try:
            version = self.service_facade.update_manifest(application, manifest)
        except ServiceError as e:
            self.logger.error(f"Error when updating manifest: {e}")
            raise _RunAborted(RunOutcome.hard_failure(f"Manifest update failed: {e}"))

        self.logger.info(f"Manifest updated. New version is {version}")
        return version

    def _await_and_export(self, instance: Instance, launch_config: LaunchConfig) -> RunOutcome:
        instance_id = instance.instance_id
        try:
            reached = self.status_poller.wait_for_status(
                instance, launch_config.expected_status, launch_config.timeout
            )
            if not reached:
                self.logger.warning(
                    f"Instance {instance_id} did not reach {launch_config.expected_status}, "
                    f"setting build result to {launch_config.failure_reaction}"
                )
                return RunOutcome.not_reached(
                    launch_config.failure_reaction,
                    instance_id,
                    f"Expected status {launch_config.expected_status} not reached",
                )

            # Return values are not always populated as soon as the status flips
            self.cancellation.sleep(self.service_config.return_values_grace_period)
            self.result_exporter.export(instance, launch_config.output_file_path)

        except ServiceError as e:
            self.logger.error(f"Error when getting instance status: {e}")
            return RunOutcome.hard_failure(f"Status check failed: {e}", instance_id)
        except RunInterruptedError:
            self.logger.error("Build interrupted")
            return RunOutcome.hard_failure("Interrupted", instance_id)
        except OSError as e:
            self.logger.error(f"Unable to save output: {e}")
            return RunOutcome.hard_failure(f"Output write failed: {e}", instance_id)

        return RunOutcome.succeeded(instance_id)

    def _resolve_placeholders(self, launch_config: LaunchConfig) -> LaunchConfig:
        def resolve(value):
            return self.variable_store.resolve_placeholders(value, self.environ)

        return replace(
            launch_config,
            application_id=resolve(launch_config.application_id),
            environment_id=resolve(launch_config.environment_id),
            manifest_path=resolve(launch_config.manifest_path),
            extra_parameters=resolve(launch_config.extra_parameters),
            output_file_path=resolve(launch_config.output_file_path),
        )

    def _finish(self, outcome: RunOutcome, started: datetime) -> RunOutcome:
        outcome.start_time = started
        outcome.mark_finished()
        self.logger.info(
            f"Run finished: {outcome.classification.value} "
            f"(build result {outcome.build_result}, continue={outcome.should_continue})"
        )
        return outcome


class _RunAborted(Exception):
    """Carries a hard-failure outcome out of the launch phase."""

    def __init__(self, outcome: RunOutcome):
        super().__init__(outcome.message)
        self.outcome = outcome
