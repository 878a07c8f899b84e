import json
from unittest.mock import Mock

import pytest

from core.interfaces.storage_interface import IArtifactStorage
from core.models.instance import InstanceStatusCode
from core.services.result_exporter import ResultExporter
from tests.unit.fakes import make_status


class TestResultExporter:
    """Test cases for ResultExporter."""

    @pytest.fixture(autouse=True)
    def _storage(self):
        self.storage = Mock(spec=IArtifactStorage)
        self.storage.write_text.return_value = ["out/result.json"]

    def test_no_output_path_writes_nothing(self, facade, instance):
        """Test a missing output path is a silent no-op."""
        exporter = ResultExporter(facade, self.storage)

        assert exporter.export(instance, None) == []
        assert exporter.export(instance, "") == []
        self.storage.write_text.assert_not_called()
        facade.get_status.assert_not_called()

    def test_exports_status_and_return_values(self, facade, instance):
        """Test the artifact contains ids, status and return values."""
        facade.get_status.return_value = make_status(
            InstanceStatusCode.RUNNING, instance, return_values={"endpoint": "http://10.0.0.5"}
        )
        exporter = ResultExporter(facade, self.storage)

        locations = exporter.export(instance, "out/result.json")

        assert locations == ["out/result.json"]
        path, contents = self.storage.write_text.call_args[0]
        assert path == "out/result.json"
        assert json.loads(contents) == {
            "instanceId": "inst-42",
            "applicationId": "app-1",
            "status": "RUNNING",
            "returnValues": {"endpoint": "http://10.0.0.5"},
        }

    def test_return_values_omitted_when_empty(self, facade, instance):
        """Test returnValues is left out when the instance has none."""
        facade.get_status.return_value = make_status(InstanceStatusCode.RUNNING, instance)
        exporter = ResultExporter(facade, self.storage)

        exporter.export(instance, "result.json")

        contents = json.loads(self.storage.write_text.call_args[0][1])
        assert "returnValues" not in contents

    def test_write_failure_propagates(self, facade, instance):
        """Test storage errors reach the caller."""
        facade.get_status.return_value = make_status(InstanceStatusCode.RUNNING, instance)
        self.storage.write_text.side_effect = PermissionError("read-only")
        exporter = ResultExporter(facade, self.storage)

        with pytest.raises(OSError):
            exporter.export(instance, "result.json")
