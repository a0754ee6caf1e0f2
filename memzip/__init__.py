"""memzip - build ZIP archives in memory from files and directory trees."""

from __future__ import annotations

__version__ = "0.1.0"
__author__ = "memzip Contributors"

import io
from collections.abc import Iterable
from typing import TYPE_CHECKING

from memzip.app.ports import (
    CompressionLevel,
    DirectoryHandle,
    FileHandle,
    TreeWalkMode,
)
from memzip.config import Settings, get_settings
from memzip.utils.cancellation import CancellationToken, OperationCancelledError

if TYPE_CHECKING:  # pragma: no cover
    from memzip.app.ports.filesystem import PathLike


def build_zip_bytes(
    files: Iterable[FileHandle | PathLike],
    token: CancellationToken | None = None,
    level: CompressionLevel | None = None,
) -> bytes:
    """Archive ``files`` as top-level entries and return the ZIP bytes."""
    from memzip.bootstrap import bootstrap_application

    return bootstrap_application().archive_service.build_zip_bytes(files, token, level)


def build_zip_stream(
    files: Iterable[FileHandle | PathLike],
    token: CancellationToken | None = None,
    level: CompressionLevel | None = None,
) -> io.BytesIO:
    """Archive ``files`` as top-level entries and return a caller-owned stream."""
    from memzip.bootstrap import bootstrap_application

    return bootstrap_application().archive_service.build_zip_stream(files, token, level)


def build_tree_stream(
    directories: Iterable[DirectoryHandle | PathLike],
    token: CancellationToken | None = None,
    level: CompressionLevel | None = None,
    mode: TreeWalkMode | None = None,
) -> io.BytesIO:
    """Archive directory trees and return a caller-owned stream."""
    from memzip.bootstrap import bootstrap_application

    return bootstrap_application().archive_service.build_tree_stream(
        directories, token, level, mode
    )


__all__ = [
    "CancellationToken",
    "CompressionLevel",
    "DirectoryHandle",
    "FileHandle",
    "OperationCancelledError",
    "Settings",
    "TreeWalkMode",
    "build_tree_stream",
    "build_zip_bytes",
    "build_zip_stream",
    "get_settings",
    "__version__",
]
