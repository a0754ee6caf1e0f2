"""Port interfaces for the memzip application layer.

These protocol interfaces define contracts for adapters.
The archive service depends on these ports, never on concrete implementations.
"""

__all__ = [
    "ArchiveCodecPort",
    "ArchiveEntryInfo",
    "ArchiveSealedError",
    "ArchiveSinkPort",
    "CompressionLevel",
    "DirectoryHandle",
    "FileHandle",
    "FileSystemPort",
    "TreeWalkMode",
    "as_directory_handles",
    "as_file_handles",
]

from memzip.app.ports.archive import (
    ArchiveCodecPort,
    ArchiveEntryInfo,
    ArchiveSealedError,
    ArchiveSinkPort,
    CompressionLevel,
    TreeWalkMode,
)
from memzip.app.ports.filesystem import (
    DirectoryHandle,
    FileHandle,
    FileSystemPort,
    as_directory_handles,
    as_file_handles,
)
