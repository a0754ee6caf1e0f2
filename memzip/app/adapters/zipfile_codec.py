"""Archive codec adapter backed by the standard library ``zipfile`` module."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO
from zipfile import ZIP_DEFLATED, ZIP_STORED, ZipFile

from memzip.app.ports import (
    ArchiveCodecPort,
    ArchiveEntryInfo,
    ArchiveSealedError,
    ArchiveSinkPort,
    CompressionLevel,
)

logger = logging.getLogger(__name__)

# (compress_type, compresslevel) per level; deflate 6 is zlib's default balance.
_ZIP_SETTINGS: dict[CompressionLevel, tuple[int, int | None]] = {
    CompressionLevel.NONE: (ZIP_STORED, None),
    CompressionLevel.FASTEST: (ZIP_DEFLATED, 1),
    CompressionLevel.OPTIMAL: (ZIP_DEFLATED, 6),
    CompressionLevel.SMALLEST: (ZIP_DEFLATED, 9),
}


def zip_settings_for(level: CompressionLevel) -> tuple[int, int | None]:
    """Return the ``zipfile`` compression type and level for ``level``."""
    return _ZIP_SETTINGS[CompressionLevel(level)]


class ZipFileSink(ArchiveSinkPort):
    """Write-once ZIP archive over a caller-owned binary stream."""

    def __init__(self, byte_sink: BinaryIO) -> None:
        # ZipFile leaves a passed-in file object open on close().
        self._archive = ZipFile(byte_sink, mode="w", compression=ZIP_DEFLATED)
        self._sealed = False

    @property
    def sealed(self) -> bool:
        return self._sealed

    def add_entry(self, source: Path, entry_path: str, level: CompressionLevel) -> None:
        if self._sealed:
            raise ArchiveSealedError(
                f"Cannot add '{entry_path}': archive has already been sealed"
            )

        level = CompressionLevel(level)
        compress_type, compresslevel = zip_settings_for(level)
        self._archive.write(
            Path(source),
            arcname=entry_path,
            compress_type=compress_type,
            compresslevel=compresslevel,
        )
        logger.debug("Wrote entry %s from %s (%s)", entry_path, source, level.value)

    def seal(self) -> None:
        if self._sealed:
            return
        self._sealed = True
        self._archive.close()

    def __enter__(self) -> ZipFileSink:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.seal()


class ZipFileCodec(ArchiveCodecPort):
    """Adapter that opens ``zipfile`` archives over in-memory streams."""

    def open_sink(self, byte_sink: BinaryIO) -> ZipFileSink:
        return ZipFileSink(byte_sink)

    def read_entries(self, byte_source: BinaryIO) -> list[ArchiveEntryInfo]:
        with ZipFile(byte_source, mode="r") as archive:
            return [
                ArchiveEntryInfo(
                    path=info.filename,
                    size=info.file_size,
                    compressed_size=info.compress_size,
                    crc=info.CRC,
                )
                for info in archive.infolist()
            ]
