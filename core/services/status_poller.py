"""Bounded-time instance status polling."""

import time
from typing import Callable, Optional

from core.interfaces.service_facade_interface import IServiceFacade
from core.models.instance import Instance, InstanceStatus, InstanceStatusCode
from core.utils.cancellation import CancellationToken
from core.utils.logger import get_run_logger
from infrastructure.storage.json_handler import JSONHandler


class StatusPoller:
    """Polls an instance until it reaches an expected status.

    Polling stops when:
    - the instance reports the expected status (returns True)
    - the instance reports FAILED, whatever was expected (returns False)
    - the timeout has elapsed before a new attempt would start (returns False)
    - the service facade raises; the error propagates and is not retried

    The elapsed-time check runs before every attempt except the first, so
    a slow status call can finish after the nominal timeout. In-flight
    calls are never cut short.
    """

    def __init__(
        self,
        service_facade: IServiceFacade,
        polling_interval: float,
        cancellation: Optional[CancellationToken] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.service_facade = service_facade
        self.polling_interval = polling_interval
        self.cancellation = cancellation or CancellationToken()
        self.clock = clock
        self.json_handler = JSONHandler()
        self.logger = get_run_logger(__name__)

    def wait_for_status(
        self,
        instance: Instance,
        expected_status: InstanceStatusCode,
        timeout: float,
    ) -> bool:
        """Wait for ``instance`` to report ``expected_status``.

        Args:
            instance: Instance to poll
            expected_status: Status that ends the wait successfully
            timeout: Seconds after which no new attempt is started

        Returns:
            True if the expected status was reached, False on timeout or FAILED

        Raises:
            ServiceError: If a status call fails
            RunInterruptedError: If the run is cancelled while sleeping
        """
        self.logger.info(
            f"Waiting for instance status {expected_status} with timeout of {timeout} seconds"
        )

        started = self.clock()
        attempt = 0

        while True:
            attempt += 1
            self.logger.info(f"Attempt #{attempt}")

            if attempt > 1 and self.clock() - started >= timeout:
                self.logger.warning(
                    f"Instance did not return expected status ({expected_status}) "
                    f"within given timeout of {timeout} seconds"
                )
                return False

            status = self.get_instance_status(instance).status
            if status == expected_status:
                return True
            elif status == InstanceStatusCode.FAILED:
                # FAILED is terminal even when something else was expected
                self.logger.warning("Instance returned Failed status, aborting further status wait...")
                return False

            self.cancellation.sleep(self.polling_interval)

    def get_instance_status(self, instance: Instance) -> InstanceStatus:
        """Fetch a status snapshot and write it to the run log."""
        status = self.service_facade.get_status(instance)

        self.logger.info(f"Instance status {status.status}")

        workflow = status.current_workflow
        if workflow is not None:
            self.logger.info(f"Current workflow {workflow.name} is in status {workflow.status}")
            if workflow.steps:
                self.logger.info("Workflow steps")
                for step in workflow.steps:
                    self.logger.info(
                        f"Step: {step.name}, Status {step.status}, "
                        f"complete: {step.percent_complete} percent"
                    )

        if status.return_values:
            self.logger.info(f"Instance contains {len(status.return_values)} return values")
            self.logger.info(
                f"Return values dump: \n {self.json_handler.serialize(status.return_values)}"
            )

        if status.error_message and status.error_message.strip():
            self.logger.error(f"Instance status returned error {status.error_message}")

        return status
