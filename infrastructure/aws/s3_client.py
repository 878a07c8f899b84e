"""AWS S3 client for shared artifact storage."""

from typing import Optional, Tuple

from botocore.exceptions import ClientError
from .session_manager import AWSSessionManager
from core.utils.logger import get_infrastructure_logger


def parse_s3_uri(uri: str) -> Tuple[str, str]:
    """Split ``s3://bucket/prefix`` into bucket and prefix."""
    if not uri.startswith("s3://"):
        raise ValueError(f"Not an S3 URI: {uri}")

    bucket, _, prefix = uri[len("s3://"):].partition("/")
    if not bucket:
        raise ValueError(f"S3 URI has no bucket: {uri}")

    return bucket, prefix.strip("/")


class S3Client:
    """AWS S3 client wrapper for artifact uploads."""

    def __init__(
        self,
        bucket: str,
        prefix: str = "",
        region: Optional[str] = None,
        run_mode: str = "local",
        client=None,
    ):
        self.bucket = bucket
        self.prefix = prefix.strip("/")
        self.region = region
        self.run_mode = run_mode
        self.logger = get_infrastructure_logger(__name__)
        self._client = client
        self._session_manager = AWSSessionManager(region=region)

    @classmethod
    def from_uri(cls, uri: str, **kwargs) -> "S3Client":
        bucket, prefix = parse_s3_uri(uri)
        return cls(bucket, prefix, **kwargs)

    def _ensure_client(self) -> None:
        """Ensure the S3 client is initialized (lazy initialization)."""
        if self._client is None:
            session = self._session_manager.get_session(self.run_mode)
            self._client = session.client("s3", region_name=self.region)

    def _handle_error(self, operation: str, error: Exception) -> None:
        """Handle AWS client errors with consistent logging."""
        if isinstance(error, ClientError):
            error_code = error.response["Error"]["Code"]
            self.logger.error(f"{operation} failed: {error_code}")
        else:
            self.logger.error(f"{operation} failed: {str(error)}")

    def key_for(self, relative_path: str) -> str:
        relative_key = relative_path.replace("\\", "/").lstrip("/")
        if self.prefix:
            return f"{self.prefix}/{relative_key}"
        return relative_key

    def put_text(self, relative_path: str, contents: str, content_type: str = "application/json") -> str:
        """Upload text under the configured prefix and return its s3 URI."""
        key = self.key_for(relative_path)
        try:
            self._ensure_client()
            self._client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=contents.encode("utf-8"),
                ContentType=content_type,
            )
            self.logger.info(f"Uploaded s3://{self.bucket}/{key}")
            return f"s3://{self.bucket}/{key}"
        except ClientError as e:
            self._handle_error("Put object", e)
            raise OSError(f"Unable to upload s3://{self.bucket}/{key}: {e}") from e
