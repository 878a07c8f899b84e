import pytest

from core.models.config import BuildResult, LaunchConfig, ServiceConfig
from core.models.instance import Instance, InstanceStatusCode
from core.models.run_outcome import RunClassification, RunOutcome


class TestInstanceModels:
    """Test cases for instance data models."""

    def test_instance_requires_id(self):
        with pytest.raises(ValueError):
            Instance("")

    def test_status_code_parsing(self):
        """Test remote status strings map onto the enum."""
        assert InstanceStatusCode.from_value("Running") == InstanceStatusCode.RUNNING
        assert InstanceStatusCode.from_value("FAILED") == InstanceStatusCode.FAILED
        assert InstanceStatusCode.from_value("Reconfiguring") == InstanceStatusCode.UNKNOWN
        assert InstanceStatusCode.from_value(None) == InstanceStatusCode.UNKNOWN


class TestConfigModels:
    """Test cases for configuration models."""

    def test_build_result_parsing(self):
        assert BuildResult.from_string("unstable") == BuildResult.UNSTABLE
        assert BuildResult.from_string(None) == BuildResult.FAILURE
        assert BuildResult.from_string("bogus") == BuildResult.FAILURE

    def test_launch_config_coerces_strings(self):
        """Test values coming from forms or YAML are converted."""
        config = LaunchConfig(
            application_id="app-1",
            timeout="90",
            expected_status="destroyed",
            failure_reaction="NOT_BUILT",
        )

        assert config.timeout == 90
        assert config.expected_status == InstanceStatusCode.DESTROYED
        assert config.failure_reaction == BuildResult.NOT_BUILT

    def test_launch_config_validation(self):
        assert LaunchConfig(application_id=" ", timeout=-1).validate() == [
            "Application id must be specified",
            "Timeout cannot be negative",
        ]

    def test_launch_config_rejects_unrecognised_expected_status(self):
        """Test a mistyped status name is reported instead of waiting for UNKNOWN."""
        config = LaunchConfig(application_id="app-1", expected_status="runing")

        assert config.expected_status == InstanceStatusCode.UNKNOWN
        assert config.validate() == ["Expected status must be a known instance status"]

    def test_service_config_rejects_unknown_aws_run_mode(self):
        config = ServiceConfig(url="https://svc", login="ci", password="pw", aws_run_mode="cloud")

        assert config.validate() == ["AWS run mode must be one of: local, pipeline"]


class TestRunOutcome:
    """Test cases for RunOutcome classification."""

    def test_not_reached_with_default_reaction_is_hard_failure(self):
        outcome = RunOutcome.not_reached(BuildResult.FAILURE, "inst-1")

        assert outcome.classification == RunClassification.HARD_FAILURE
        assert not outcome.should_continue

    def test_not_reached_with_other_reaction_is_tolerated(self):
        outcome = RunOutcome.not_reached(BuildResult.UNSTABLE, "inst-1")

        assert outcome.classification == RunClassification.TOLERATED_FAILURE
        assert outcome.build_result == BuildResult.UNSTABLE
        assert outcome.should_continue

    def test_duration_after_finish(self):
        outcome = RunOutcome.succeeded("inst-1").mark_finished()

        assert outcome.is_successful
        assert outcome.duration is not None
        assert outcome.start_time.tzinfo is not None
        assert outcome.end_time.tzinfo is not None
