"""File storage handler for basic file operations."""

import shutil
import logging
from typing import Optional
from pathlib import Path


class FileStorage:
    """File storage handler for managing files and directories."""

    def __init__(self, base_path: Optional[str] = None):
        self.base_path = Path(base_path) if base_path else Path.cwd()
        self.logger = logging.getLogger(__name__)

    def resolve(self, file_path: str) -> Path:
        """Resolve a path relative to the base path; absolute paths are kept."""
        path = Path(file_path)
        if path.is_absolute():
            return path
        return self.base_path / path

    def ensure_directory_exists(self, directory_path: str) -> bool:
        """Ensure directory exists, create if it doesn't."""
        try:
            path = self.resolve(directory_path)
            path.mkdir(parents=True, exist_ok=True)

            self.logger.debug(f"Directory ensured: {path}")
            return True

        except Exception as e:
            self.logger.error(f"Failed to create directory {directory_path}: {str(e)}")
            raise

    def write_file(self, file_path: str, content: str, encoding: str = 'utf-8') -> str:
        """Write content to a file and return its full path."""
        try:
            path = self.resolve(file_path)

            # Ensure parent directory exists
            self.ensure_directory_exists(str(path.parent))

            with open(path, 'w', encoding=encoding) as f:
                f.write(content)

            self.logger.debug(f"File written: {path}")
            return str(path)

        except Exception as e:
            self.logger.error(f"Failed to write file {file_path}: {str(e)}")
            raise

    def read_file(self, file_path: str, encoding: str = 'utf-8') -> str:
        """Read content from a file."""
        try:
            path = self.resolve(file_path)

            if not path.exists():
                raise FileNotFoundError(f"File not found: {path}")

            with open(path, 'r', encoding=encoding) as f:
                content = f.read()

            self.logger.debug(f"File read: {path}")
            return content

        except Exception as e:
            self.logger.error(f"Failed to read file {file_path}: {str(e)}")
            raise

    def delete_file(self, file_path: str) -> bool:
        """Delete a file."""
        try:
            path = self.resolve(file_path)

            if path.exists():
                path.unlink()
                self.logger.debug(f"File deleted: {path}")
                return True
            else:
                self.logger.warning(f"File not found for deletion: {path}")
                return False

        except Exception as e:
            self.logger.error(f"Failed to delete file {file_path}: {str(e)}")
            raise

    def copy_file(self, source_path: str, destination_path: str) -> str:
        """Copy a file and return the destination path."""
        try:
            src = self.resolve(source_path)
            dst = self.resolve(destination_path)

            if not src.exists():
                raise FileNotFoundError(f"Source file not found: {src}")

            # Ensure destination directory exists
            self.ensure_directory_exists(str(dst.parent))

            shutil.copyfile(src, dst)

            self.logger.debug(f"File copied: {src} -> {dst}")
            return str(dst)

        except Exception as e:
            self.logger.error(f"Failed to copy file {source_path} to {destination_path}: {str(e)}")
            raise
