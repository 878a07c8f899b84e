"""Artifact storage interface."""

from abc import ABC, abstractmethod
from typing import List


class IArtifactStorage(ABC):
    """Interface for persisting run artifacts where later steps can find them."""

    @abstractmethod
    def write_text(self, relative_path: str, contents: str) -> List[str]:
        """Write a text artifact.

        Args:
            relative_path: Path relative to the workspace root
            contents: Text to write

        Returns:
            Every location the artifact was written to

        Raises:
            OSError: If any location could not be written
        """
        pass
