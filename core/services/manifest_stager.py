"""Manifest staging into a shared root."""

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator
from uuid import uuid4

from core.exceptions import ManifestNotFoundError, ManifestReadError
from core.models.instance import Manifest
from core.utils.logger import get_run_logger
from infrastructure.storage.file_storage import FileStorage

MANIFEST_TEMP_NAME = "project_manifest.yaml"


class ManifestStager:
    """Copies a workspace manifest to a uniquely named file in a shared root.

    The shared root is visible wherever the manifest update runs, so the
    staged copy is usable even when the workspace lives on another node.
    Names combine a random UUID with a fixed suffix; there is no locking.
    """

    def __init__(self, workspace_root: str, shared_root: str):
        self.workspace = FileStorage(workspace_root)
        self.shared = FileStorage(shared_root)
        self.logger = get_run_logger(__name__)

    def temporary_manifest_path(self) -> Path:
        return self.shared.resolve(f"{uuid4()}.{MANIFEST_TEMP_NAME}")

    def stage(self, relative_path: str) -> Path:
        """Copy the manifest into the shared root.

        Raises:
            ManifestNotFoundError: If the source does not exist; nothing is created
        """
        self.logger.info(
            f"Copying manifest from current build workspace. Relative path is {relative_path}"
        )

        source = self.workspace.resolve(relative_path)
        if not source.is_file():
            self.logger.error(
                f"Unable to find manifest file with relative path {relative_path}, "
                f"target file {source} does not exist"
            )
            raise ManifestNotFoundError(relative_path)

        destination = self.temporary_manifest_path()
        self.shared.copy_file(str(source), str(destination))
        return destination

    @contextmanager
    def staged(self, relative_path: str) -> Iterator[Path]:
        """Stage a manifest for the duration of the block, then delete it."""
        staged_path = self.stage(relative_path)
        try:
            yield staged_path
        finally:
            self.logger.info("Deleting temporary manifest file")
            self.shared.delete_file(str(staged_path))

    def read_manifest(self, relative_path: str) -> Manifest:
        """Stage, read and remove a manifest.

        Raises:
            ManifestNotFoundError: If the source does not exist
            ManifestReadError: If the staged copy could not be read
        """
        with self.staged(relative_path) as staged_path:
            try:
                return Manifest(self.shared.read_file(str(staged_path)))
            except (OSError, UnicodeDecodeError) as e:
                self.logger.error(f"Unable to read manifest file: {e}")
                raise ManifestReadError(f"Unable to read manifest file {relative_path}") from e
