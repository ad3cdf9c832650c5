"""Saving, loading and deleting byte files, and project directory helpers."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProjectPaths:
    """Well-known directories under a project root."""

    root: Path

    def __post_init__(self) -> None:
        object.__setattr__(self, "root", Path(self.root))

    @property
    def project_directory(self) -> Path:
        return self.root

    @property
    def contents_directory(self) -> Path:
        return self.root / "Content"

    @property
    def saved_directory(self) -> Path:
        return self.root / "Saved"

    @property
    def external_save_directory(self) -> Path:
        """External storage location; the saved directory on desktop systems."""
        return self.saved_directory

    def relative_path(self, full_path: str) -> str:
        """The part of ``full_path`` after the project directory."""
        return project_relative_path(full_path, self.root.as_posix() + "/")


def split_full_path(full_path: str) -> tuple[str, str]:
    """Split at the last ``/`` (or, failing that, the last double backslash).

    Returns ``(directory, file_name)``; both are empty when no separator is found.
    """
    for separator in ("/", "\\\\"):
        directory, found, file_name = full_path.rpartition(separator)
        if found:
            return directory, file_name
    return "", ""


def project_relative_path(full_path: str, project_dir: str) -> str:
    """The text after the first occurrence of ``project_dir``, or ``""``."""
    if not project_dir:
        return ""
    _, found, after = full_path.partition(project_dir)
    return after if found else ""


def save_bytes_to_file(
    data: bytes | bytearray | memoryview,
    directory: str,
    file_name: str,
    log_save: bool = False,
) -> Path:
    """Write ``data`` to ``directory/file_name``, creating directories as needed.

    Returns the absolute path written; raises OSError on failure.
    """
    directory = os.fspath(directory)
    if directory:
        os.makedirs(directory, exist_ok=True)
    joined = directory + file_name if directory.endswith("/") else f"{directory}/{file_name}"
    absolute = Path(os.path.abspath(joined))
    payload = bytes(data)
    try:
        absolute.write_bytes(payload)
    except OSError:
        if log_save:
            logger.info("Failed to save: %s", absolute)
        raise
    if log_save:
        logger.info("Saved: %s with %d bytes", absolute, len(payload))
    return absolute


def save_bytes_to_path(
    data: bytes | bytearray | memoryview, path: str, log_save: bool = False
) -> Path:
    """Full-path variant of :func:`save_bytes_to_file`."""
    directory, file_name = split_full_path(os.fspath(path))
    return save_bytes_to_file(data, directory, file_name, log_save)


def read_bytes_from_file(directory: str, file_name: str) -> bytes:
    """Read ``directory/file_name``; raises OSError if it cannot be read."""
    return read_bytes_from_path(f"{os.fspath(directory)}/{file_name}")


def read_bytes_from_path(path: str | os.PathLike[str]) -> bytes:
    """Read the whole file at ``path``."""
    return Path(path).read_bytes()


def delete_file_at_path(path: str | os.PathLike[str]) -> bool:
    """Delete the file at ``path``; return whether a file was deleted."""
    text = os.fspath(path)
    if not text or "\x00" in text:
        return False
    target = Path(text)
    if not target.is_file():
        return False
    target.unlink()
    return True