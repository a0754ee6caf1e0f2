"""Filesystem port interface and handle DTOs."""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field, field_validator

PathLike = str | os.PathLike[str]


class _Handle(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: Path = Field(..., description="Filesystem path the handle refers to")

    @field_validator("path")
    @classmethod
    def _require_name(cls, value: Path) -> Path:
        # Entry paths are prefixed by this name, so a bare root cannot be archived.
        if not (value.name or value.resolve().name):
            raise ValueError(f"Path has no name to use in archive entries: {value}")
        return value

    @property
    def name(self) -> str:
        """Final path segment, used for archive entry names."""
        return self.path.name or self.path.resolve().name


class FileHandle(_Handle):
    """Reference to a regular file. Existence is checked at use, never cached."""


class DirectoryHandle(_Handle):
    """Reference to a directory. Existence is checked at use, never cached."""


def as_file_handles(items: Iterable[FileHandle | PathLike]) -> list[FileHandle]:
    """Wrap path-likes as :class:`FileHandle`, passing handles through."""
    return [item if isinstance(item, FileHandle) else FileHandle(path=Path(item)) for item in items]


def as_directory_handles(
    items: Iterable[DirectoryHandle | PathLike],
) -> list[DirectoryHandle]:
    """Wrap path-likes as :class:`DirectoryHandle`, passing handles through."""
    return [
        item if isinstance(item, DirectoryHandle) else DirectoryHandle(path=Path(item))
        for item in items
    ]


class FileSystemPort(Protocol):
    """Port interface for filesystem enumeration.

    Side effects: none (read-only metadata access).
    """

    def exists(self, handle: FileHandle | DirectoryHandle) -> bool:
        """Return True if ``handle`` refers to an existing entry of its kind."""
        ...

    def list_files(self, directory: DirectoryHandle) -> list[FileHandle]:
        """Return files directly inside ``directory``, sorted by path."""
        ...

    def list_directories(self, directory: DirectoryHandle) -> list[DirectoryHandle]:
        """Return subdirectories directly inside ``directory``, sorted by path."""
        ...

    def list_files_recursive(self, directory: DirectoryHandle) -> list[FileHandle]:
        """Return files at every depth below ``directory``, sorted by path."""
        ...

    def list_directories_recursive(self, directory: DirectoryHandle) -> list[DirectoryHandle]:
        """Return subdirectories at every depth below ``directory``, sorted by path."""
        ...
