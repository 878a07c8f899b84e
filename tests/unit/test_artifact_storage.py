from unittest.mock import Mock

import pytest
from botocore.exceptions import ClientError

from infrastructure.aws.s3_client import S3Client, parse_s3_uri
from infrastructure.aws.session_manager import AWSSessionManager
from infrastructure.storage.mirrored_storage import (
    MirroredFileStorage,
    S3MirroredStorage,
    create_artifact_storage,
    local_shared_root,
)


class TestMirroredFileStorage:
    """Test cases for MirroredFileStorage."""

    def test_writes_workspace_and_shared_root(self, tmp_path):
        """Test the artifact lands in both roots when they differ."""
        storage = MirroredFileStorage(str(tmp_path / "ws"), str(tmp_path / "shared"))

        locations = storage.write_text("out/result.json", "{}")

        assert len(locations) == 2
        assert (tmp_path / "ws" / "out" / "result.json").read_text() == "{}"
        assert (tmp_path / "shared" / "out" / "result.json").read_text() == "{}"

    def test_single_write_when_roots_match(self, tmp_path):
        """Test no mirror copy is made when both roots are the same directory."""
        storage = MirroredFileStorage(str(tmp_path), str(tmp_path / "."))

        assert storage.write_text("result.json", "{}") == [str(tmp_path / "result.json")]


class TestS3Storage:
    """Test cases for S3-backed mirroring."""

    def test_parse_s3_uri(self):
        """Test bucket and prefix are split out."""
        assert parse_s3_uri("s3://artifacts/builds/42/") == ("artifacts", "builds/42")
        assert parse_s3_uri("s3://artifacts") == ("artifacts", "")
        with pytest.raises(ValueError):
            parse_s3_uri("/local/path")

    def test_s3_mirror_uploads_under_prefix(self, tmp_path):
        """Test the local write is followed by an upload."""
        client = Mock()
        s3 = S3Client("artifacts", "builds/42", client=client)
        storage = S3MirroredStorage(str(tmp_path), s3)

        locations = storage.write_text("out/result.json", '{"a": 1}')

        assert locations[1] == "s3://artifacts/builds/42/out/result.json"
        client.put_object.assert_called_once()
        kwargs = client.put_object.call_args.kwargs
        assert kwargs["Bucket"] == "artifacts"
        assert kwargs["Key"] == "builds/42/out/result.json"
        assert kwargs["Body"] == b'{"a": 1}'
        assert (tmp_path / "out" / "result.json").exists()

    def test_upload_error_becomes_os_error(self):
        """Test botocore client errors surface as OSError."""
        client = Mock()
        client.put_object.side_effect = ClientError(
            {"Error": {"Code": "AccessDenied", "Message": "denied"}}, "PutObject"
        )
        s3 = S3Client("artifacts", client=client)

        with pytest.raises(OSError):
            s3.put_text("result.json", "{}")


class TestStorageFactory:
    """Test cases for artifact storage selection."""

    def test_s3_uri_selects_s3_storage(self, tmp_path):
        storage = create_artifact_storage(str(tmp_path), "s3://artifacts/ci")

        assert isinstance(storage, S3MirroredStorage)
        assert storage.s3_client.bucket == "artifacts"
        assert storage.s3_client.prefix == "ci"

    def test_directory_selects_file_storage(self, tmp_path):
        storage = create_artifact_storage(str(tmp_path), "shared")

        assert isinstance(storage, MirroredFileStorage)
        assert storage.shared.base_path == tmp_path / "shared"

    def test_local_shared_root(self, tmp_path):
        assert local_shared_root("s3://bucket", str(tmp_path)) == tmp_path
        assert local_shared_root("", str(tmp_path)) == tmp_path
        assert local_shared_root("/mnt/shared", str(tmp_path)).as_posix() == "/mnt/shared"

    def test_s3_storage_receives_aws_settings(self, tmp_path):
        """Test region and run mode reach the S3 client."""
        storage = create_artifact_storage(
            str(tmp_path), "s3://artifacts/ci", aws_region="eu-west-1", aws_run_mode="pipeline"
        )

        assert storage.s3_client.region == "eu-west-1"
        assert storage.s3_client.run_mode == "pipeline"


class TestAWSSessionManager:
    """Test cases for AWSSessionManager."""

    @pytest.fixture(autouse=True)
    def _clear_sessions(self):
        AWSSessionManager._sessions.clear()
        yield
        AWSSessionManager._sessions.clear()

    def test_pipeline_mode_uses_environment_credentials(self, monkeypatch):
        monkeypatch.setenv("AWS_ACCESS_KEY_ID", "AKIAEXAMPLE")
        monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "secret")
        monkeypatch.delenv("AWS_SESSION_TOKEN", raising=False)
        manager = AWSSessionManager(region="eu-west-1")

        session = manager.get_session("pipeline")

        assert session.region_name == "eu-west-1"
        assert session.get_credentials().access_key == "AKIAEXAMPLE"
        assert manager.get_session("pipeline") is session

    def test_pipeline_mode_requires_credentials(self, monkeypatch):
        monkeypatch.delenv("AWS_ACCESS_KEY_ID", raising=False)
        monkeypatch.delenv("AWS_SECRET_ACCESS_KEY", raising=False)

        with pytest.raises(ValueError):
            AWSSessionManager().get_session("pipeline")

    def test_unsupported_run_mode(self):
        with pytest.raises(ValueError):
            AWSSessionManager().get_session("cloud")

    def test_client_built_from_session_for_run_mode(self):
        """Test the S3 client is created lazily from the run mode's session."""
        s3 = S3Client("artifacts", region="eu-west-1", run_mode="pipeline")
        session = Mock()
        s3._session_manager = Mock(get_session=Mock(return_value=session))

        s3.put_text("result.json", "{}")

        s3._session_manager.get_session.assert_called_once_with("pipeline")
        session.client.assert_called_once_with("s3", region_name="eu-west-1")
        session.client.return_value.put_object.assert_called_once()
