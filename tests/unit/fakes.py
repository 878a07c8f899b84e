"""Test doubles shared by the unit tests."""

from typing import Any, Dict, Optional

from core.models.instance import Instance, InstanceStatus, InstanceStatusCode


class FakeClock:
    """Monotonic clock whose time only moves when something sleeps.

    Doubles as a cancellation token so the poller's sleeps advance it.
    """

    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds

    def check(self) -> None:
        pass


def make_status(
    code: InstanceStatusCode,
    instance: Instance,
    return_values: Optional[Dict[str, Any]] = None,
    **kwargs,
) -> InstanceStatus:
    return InstanceStatus(
        status=code,
        instance=instance,
        application=instance.application,
        return_values=return_values or {},
        **kwargs,
    )
