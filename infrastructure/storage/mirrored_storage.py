"""Artifact storage that mirrors writes to a shared root."""

import logging
from pathlib import Path
from typing import List, Optional

from core.interfaces.storage_interface import IArtifactStorage
from infrastructure.aws.s3_client import S3Client
from .file_storage import FileStorage


class MirroredFileStorage(IArtifactStorage):
    """Writes artifacts to the workspace and to a shared directory.

    The shared copy is skipped when both roots resolve to the same
    directory.
    """

    def __init__(self, workspace_root: str, shared_root: str):
        self.workspace = FileStorage(workspace_root)
        self.shared = FileStorage(shared_root)
        self.logger = logging.getLogger(__name__)

    @property
    def is_mirrored(self) -> bool:
        return self.workspace.base_path.resolve() != self.shared.base_path.resolve()

    def write_text(self, relative_path: str, contents: str) -> List[str]:
        locations = [self.workspace.write_file(relative_path, contents)]

        if self.is_mirrored:
            locations.append(self.shared.write_file(relative_path, contents))

        self.logger.info(f"Artifact {relative_path} written to {len(locations)} location(s)")
        return locations


class S3MirroredStorage(IArtifactStorage):
    """Writes artifacts to the workspace and uploads them to S3."""

    def __init__(self, workspace_root: str, s3_client: S3Client):
        self.workspace = FileStorage(workspace_root)
        self.s3_client = s3_client
        self.logger = logging.getLogger(__name__)

    def write_text(self, relative_path: str, contents: str) -> List[str]:
        locations = [self.workspace.write_file(relative_path, contents)]
        locations.append(self.s3_client.put_text(relative_path, contents))

        self.logger.info(f"Artifact {relative_path} written to {len(locations)} location(s)")
        return locations


def create_artifact_storage(
    workspace_root: str,
    shared_root: str,
    aws_region: Optional[str] = None,
    aws_run_mode: str = "local",
) -> IArtifactStorage:
    """Pick the artifact storage for a shared root directory or s3:// URI."""
    if shared_root and shared_root.startswith("s3://"):
        s3_client = S3Client.from_uri(shared_root, region=aws_region, run_mode=aws_run_mode)
        return S3MirroredStorage(workspace_root, s3_client)

    return MirroredFileStorage(workspace_root, str(local_shared_root(shared_root, workspace_root)))


def local_shared_root(shared_root: str, workspace_root: str) -> Path:
    """Directory on the local filesystem used for shared files.

    Relative roots are taken from the workspace. An S3 shared root cannot
    hold staged files, so the workspace itself is used.
    """
    if not shared_root or shared_root.startswith("s3://"):
        return Path(workspace_root)
    return Path(workspace_root) / shared_root
