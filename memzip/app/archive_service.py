"""Archive service for building ZIP archives in memory.

Selects existing files or directory trees, maps them onto archive entry paths
and writes them into a private in-memory sink. Results are returned either as
``bytes`` or as a :class:`io.BytesIO` rewound to offset 0 that the caller owns.

All filesystem and codec access goes through ports.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Callable, Iterable, Sequence
from typing import BinaryIO, TypeVar

from memzip.app.ports import (
    ArchiveCodecPort,
    ArchiveEntryInfo,
    ArchiveSinkPort,
    CompressionLevel,
    DirectoryHandle,
    FileHandle,
    FileSystemPort,
    TreeWalkMode,
    as_directory_handles,
    as_file_handles,
)
from memzip.app.ports.filesystem import PathLike
from memzip.utils.cancellation import CancellationToken, OperationCancelledError
from memzip.utils.paths import join_entry_path

logger = logging.getLogger(__name__)

H = TypeVar("H", FileHandle, DirectoryHandle)


def filter_existing(handles: Iterable[H], filesystem: FileSystemPort) -> list[H]:
    """Return the handles that exist right now, preserving their order."""
    return [handle for handle in handles if filesystem.exists(handle)]


def rewind(stream: BinaryIO) -> BinaryIO:
    """Position ``stream`` at offset 0 and return it."""
    stream.seek(0)
    return stream


def materialize(stream: BinaryIO) -> bytes:
    """Copy the full contents of ``stream`` into ``bytes`` and close it."""
    with stream:
        rewind(stream)
        return stream.read()


class ArchiveService:
    """Builds ZIP archives from files and directory trees.

    Every call constructs its own sink, so one service instance may be shared
    across threads. Entries are written strictly sequentially.
    """

    def __init__(
        self,
        filesystem_port: FileSystemPort,
        codec_port: ArchiveCodecPort,
        *,
        default_level: CompressionLevel = CompressionLevel.OPTIMAL,
        default_mode: TreeWalkMode = TreeWalkMode.REPLICATE,
    ):
        """Initialize archive service.

        Args:
            filesystem_port: Existence checks and directory enumeration
            codec_port: ZIP container reader/writer
            default_level: Compression level used when a call passes none
            default_mode: Tree walk mode used when a call passes none
        """
        self.filesystem = filesystem_port
        self.codec = codec_port
        self.default_level = CompressionLevel(default_level)
        self.default_mode = TreeWalkMode(default_mode)

    def build_zip_bytes(
        self,
        files: Iterable[FileHandle | PathLike],
        token: CancellationToken | None = None,
        level: CompressionLevel | None = None,
    ) -> bytes:
        """Create a ZIP archive of ``files`` and return its bytes.

        Each existing file becomes a top-level entry named by its base name.

        Args:
            files: Files to include; missing ones are skipped
            token: Cancellation token checked before filtering and before each file
            level: Compression level for every entry

        Returns:
            Archive bytes, or ``b""`` when none of ``files`` exist

        Raises:
            OperationCancelledError: If ``token`` is cancelled before completion
        """
        return materialize(self.build_zip_stream(files, token, level))

    def build_zip_stream(
        self,
        files: Iterable[FileHandle | PathLike],
        token: CancellationToken | None = None,
        level: CompressionLevel | None = None,
    ) -> io.BytesIO:
        """Create a ZIP archive of ``files`` as a stream positioned at 0.

        The caller owns the returned stream and must close it. When none of
        ``files`` exist the stream is empty.

        Raises:
            OperationCancelledError: If ``token`` is cancelled before completion
        """
        token = token or CancellationToken.none()
        token.raise_if_cancelled()
        level = self._resolve_level(level)

        to_add = filter_existing(as_file_handles(files), self.filesystem)
        if not to_add:
            logger.debug("No existing files to archive; returning empty stream")
            return io.BytesIO()

        return self._build_stream(
            lambda sink: self._write_files(sink, to_add, token, level),
            label="files",
        )

    def build_tree_stream(
        self,
        directories: Iterable[DirectoryHandle | PathLike],
        token: CancellationToken | None = None,
        level: CompressionLevel | None = None,
        mode: TreeWalkMode | None = None,
    ) -> io.BytesIO:
        """Create a ZIP archive of directory trees as a stream positioned at 0.

        Entry paths start with each directory's own name. With
        :attr:`TreeWalkMode.REPLICATE` every descendant file is re-listed at
        each recursion level, so files nested two or more levels deep appear
        once per ancestor pass under different paths. With
        :attr:`TreeWalkMode.HIERARCHICAL` each file is written exactly once.

        Args:
            directories: Directory roots; missing ones are skipped
            token: Cancellation token checked before each directory and file
            level: Compression level for every entry
            mode: Tree walk mode

        Returns:
            Caller-owned stream; empty when none of ``directories`` exist

        Raises:
            OperationCancelledError: If ``token`` is cancelled before completion
        """
        token = token or CancellationToken.none()
        token.raise_if_cancelled()
        level = self._resolve_level(level)
        mode = TreeWalkMode(mode) if mode is not None else self.default_mode

        to_add = filter_existing(as_directory_handles(directories), self.filesystem)
        if not to_add:
            logger.debug("No existing directories to archive; returning empty stream")
            return io.BytesIO()

        add_tree = (
            self._add_tree_replicating
            if mode is TreeWalkMode.REPLICATE
            else self._add_tree_hierarchical
        )

        def populate(sink: ArchiveSinkPort) -> int:
            written = 0
            for directory in to_add:
                token.raise_if_cancelled()
                written += add_tree(sink, directory, "", token, level)
            return written

        return self._build_stream(populate, label=f"directories ({mode.value})")

    def build_tree_bytes(
        self,
        directories: Iterable[DirectoryHandle | PathLike],
        token: CancellationToken | None = None,
        level: CompressionLevel | None = None,
        mode: TreeWalkMode | None = None,
    ) -> bytes:
        """Bytes-returning variant of :meth:`build_tree_stream`."""
        return materialize(self.build_tree_stream(directories, token, level, mode))

    def list_entries(self, archive: bytes | BinaryIO) -> list[ArchiveEntryInfo]:
        """Read back the entries of a finished archive.

        Streams are rewound to offset 0 before and after reading.
        """
        if isinstance(archive, (bytes, bytearray, memoryview)):
            if not archive:
                return []
            with io.BytesIO(archive) as source:
                return self.codec.read_entries(source)

        rewind(archive)
        try:
            if not archive.read(1):
                return []
            rewind(archive)
            return self.codec.read_entries(archive)
        finally:
            rewind(archive)

    def _resolve_level(self, level: CompressionLevel | None) -> CompressionLevel:
        return CompressionLevel(level) if level is not None else self.default_level

    def _build_stream(
        self,
        populate: Callable[[ArchiveSinkPort], int],
        *,
        label: str,
    ) -> io.BytesIO:
        stream = io.BytesIO()
        try:
            with self.codec.open_sink(stream) as sink:
                written = populate(sink)
        except OperationCancelledError as exc:
            stream.close()
            logger.warning("Archive build of %s cancelled: %s", label, exc.reason)
            raise
        except BaseException:
            stream.close()
            raise

        logger.info(
            "Built archive from %s: %d entries, %d bytes",
            label,
            written,
            stream.seek(0, io.SEEK_END),
        )
        rewind(stream)
        return stream

    def _write_files(
        self,
        sink: ArchiveSinkPort,
        files: Sequence[FileHandle],
        token: CancellationToken,
        level: CompressionLevel,
    ) -> int:
        written = 0
        for file in files:
            token.raise_if_cancelled()
            if not self.filesystem.exists(file):
                logger.debug("Skipping %s: removed after filtering", file.path)
                continue
            sink.add_entry(file.path, file.name, level)
            written += 1
        return written

    def _add_tree_replicating(
        self,
        sink: ArchiveSinkPort,
        directory: DirectoryHandle,
        prefix: str,
        token: CancellationToken,
        level: CompressionLevel,
    ) -> int:
        written = 0
        files = filter_existing(self.filesystem.list_files_recursive(directory), self.filesystem)
        for file in files:
            token.raise_if_cancelled()
            sink.add_entry(file.path, join_entry_path(prefix, directory.name, file.name), level)
            written += 1

        subdirectories = filter_existing(
            self.filesystem.list_directories_recursive(directory), self.filesystem
        )
        if subdirectories:
            nested_prefix = join_entry_path(prefix, directory.name)
            for subdirectory in subdirectories:
                token.raise_if_cancelled()
                written += self._add_tree_replicating(
                    sink, subdirectory, nested_prefix, token, level
                )
        return written

    def _add_tree_hierarchical(
        self,
        sink: ArchiveSinkPort,
        directory: DirectoryHandle,
        prefix: str,
        token: CancellationToken,
        level: CompressionLevel,
    ) -> int:
        written = 0
        base = join_entry_path(prefix, directory.name)
        for file in filter_existing(self.filesystem.list_files(directory), self.filesystem):
            token.raise_if_cancelled()
            sink.add_entry(file.path, join_entry_path(base, file.name), level)
            written += 1

        for subdirectory in filter_existing(
            self.filesystem.list_directories(directory), self.filesystem
        ):
            token.raise_if_cancelled()
            written += self._add_tree_hierarchical(sink, subdirectory, base, token, level)
        return written
