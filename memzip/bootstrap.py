"""Application bootstrap wiring ports, adapters, and services."""

from __future__ import annotations

from dataclasses import dataclass

from memzip.app import ArchiveService
from memzip.app.adapters import LocalFileSystemAdapter, ZipFileCodec
from memzip.app.ports import ArchiveCodecPort, FileSystemPort
from memzip.config import Settings, get_settings
from memzip.utils.cancellation import CancellationToken


@dataclass(slots=True)
class ApplicationContainer:
    """Aggregates wired services and adapters for the CLI layer."""

    settings: Settings
    filesystem_port: FileSystemPort
    codec_port: ArchiveCodecPort
    archive_service: ArchiveService

    def new_token(self) -> CancellationToken:
        """Return a cancellation token honouring the configured timeout."""
        return CancellationToken.with_timeout(self.settings.timeout_seconds)


def bootstrap_application(
    settings: Settings | None = None,
    *,
    filesystem_port: FileSystemPort | None = None,
    codec_port: ArchiveCodecPort | None = None,
) -> ApplicationContainer:
    """Create the application container with default adapters.

    Ports may be overridden, which tests use to inject fakes.
    """

    active_settings = settings or get_settings()
    filesystem = filesystem_port or LocalFileSystemAdapter(
        follow_symlinks=active_settings.follow_symlinks
    )
    codec = codec_port or ZipFileCodec()

    archive_service = ArchiveService(
        filesystem,
        codec,
        default_level=active_settings.compression_level,
        default_mode=active_settings.tree_walk_mode,
    )

    return ApplicationContainer(
        settings=active_settings,
        filesystem_port=filesystem,
        codec_port=codec,
        archive_service=archive_service,
    )
