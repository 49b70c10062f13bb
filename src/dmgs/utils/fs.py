"""Filesystem access used by the build pipeline.

The pipeline only touches the filesystem through this narrow interface so
tests can run it against an in-memory fake.
"""

import os
import shutil
from typing import Protocol


class FileSystem(Protocol):
    """Filesystem operations needed by the build steps."""

    def exists(self, path: str) -> bool:
        """Return True if ``path`` exists (symlinks are not followed)."""
        ...

    def remove(self, path: str) -> None:
        """Remove a file; missing files are not an error."""
        ...

    def make_dirs(self, path: str) -> None:
        """Create a directory and any missing parents."""
        ...

    def copy_file(self, source: str, destination: str) -> None:
        """Copy a single file."""
        ...


class LocalFileSystem:
    """FileSystem backed by the real disk."""

    def exists(self, path: str) -> bool:
        return os.path.lexists(path)

    def remove(self, path: str) -> None:
        try:
            os.remove(path)
        except FileNotFoundError:
            pass

    def make_dirs(self, path: str) -> None:
        os.makedirs(path, exist_ok=True)

    def copy_file(self, source: str, destination: str) -> None:
        shutil.copyfile(source, destination)
