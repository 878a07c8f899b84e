"""Storage infrastructure package."""

from .file_storage import FileStorage
from .json_handler import JSONHandler
from .mirrored_storage import (
    MirroredFileStorage,
    S3MirroredStorage,
    create_artifact_storage,
    local_shared_root,
)

__all__ = [
    "FileStorage",
    "JSONHandler",
    "MirroredFileStorage",
    "S3MirroredStorage",
    "create_artifact_storage",
    "local_shared_root",
]
