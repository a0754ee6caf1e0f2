"""Archive codec port interfaces and archive DTOs."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import BinaryIO, Protocol

from pydantic import BaseModel, ConfigDict, Field


class CompressionLevel(str, Enum):
    """Uniform compression setting applied to every entry of one build."""

    NONE = "none"
    FASTEST = "fastest"
    OPTIMAL = "optimal"
    SMALLEST = "smallest"


class TreeWalkMode(str, Enum):
    """How directory trees are mapped onto archive entries.

    ``replicate`` re-enumerates every descendant file at each recursion level,
    so files nested deeper than one level are written once per ancestor pass.
    ``hierarchical`` walks immediate children only and writes each file once.
    """

    REPLICATE = "replicate"
    HIERARCHICAL = "hierarchical"


class ArchiveSealedError(RuntimeError):
    """Raised when an entry is added to a sink that was already sealed."""


class ArchiveEntryInfo(BaseModel):
    """Description of one entry read back from a finished archive."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., description="Forward-slash entry path inside the archive")
    size: int = Field(..., ge=0, description="Uncompressed size in bytes")
    compressed_size: int = Field(..., ge=0, description="Stored size in bytes")
    crc: int = Field(..., ge=0, description="CRC-32 of the uncompressed content")


class ArchiveSinkPort(Protocol):
    """In-progress archive with exclusive write access.

    Side effects: writes into the byte sink it was opened over.
    """

    @property
    def sealed(self) -> bool:
        """Return True once :meth:`seal` has run."""
        ...

    def add_entry(self, source: Path, entry_path: str, level: CompressionLevel) -> None:
        """Compress the full contents of ``source`` into a new entry.

        Args:
            source: File to read
            entry_path: Forward-slash path of the entry inside the archive
            level: Compression level for this entry

        Raises:
            ArchiveSealedError: If the sink was already sealed
        """
        ...

    def seal(self) -> None:
        """Finalize the central directory, leaving the byte sink open."""
        ...

    def __enter__(self) -> ArchiveSinkPort: ...

    def __exit__(self, exc_type, exc, tb) -> None: ...


class ArchiveCodecPort(Protocol):
    """Port interface for the ZIP container codec."""

    def open_sink(self, byte_sink: BinaryIO) -> ArchiveSinkPort:
        """Open a new archive for writing over ``byte_sink``."""
        ...

    def read_entries(self, byte_source: BinaryIO) -> list[ArchiveEntryInfo]:
        """Return the entries of the archive held in ``byte_source``."""
        ...
