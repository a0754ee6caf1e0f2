"""Cancellation and resource cleanup tests."""

from __future__ import annotations

import time
from pathlib import Path
from typing import BinaryIO

import pytest

from memzip.app import ArchiveService
from memzip.app.adapters import LocalFileSystemAdapter, ZipFileCodec, ZipFileSink
from memzip.app.ports import CompressionLevel, FileHandle
from memzip.utils.cancellation import CancellationToken, OperationCancelledError


class RecordingCodec(ZipFileCodec):
    """Codec that remembers the streams it was opened over."""

    def __init__(self, cancel_after: int | None = None, token: CancellationToken | None = None):
        self.byte_sinks: list[BinaryIO] = []
        self.sinks: list[ZipFileSink] = []
        self.cancel_after = cancel_after
        self.token = token

    def open_sink(self, byte_sink: BinaryIO) -> ZipFileSink:
        self.byte_sinks.append(byte_sink)
        codec = self

        class CountingSink(ZipFileSink):
            written = 0

            def add_entry(self, source: Path, entry_path: str, level: CompressionLevel) -> None:
                super().add_entry(source, entry_path, level)
                self.written += 1
                if codec.token is not None and self.written == codec.cancel_after:
                    codec.token.cancel("stop requested")

        sink = CountingSink(byte_sink)
        self.sinks.append(sink)
        return sink


def test_token_starts_uncancelled() -> None:
    token = CancellationToken.none()

    assert not token.is_cancelled
    token.raise_if_cancelled()


def test_cancel_sets_reason() -> None:
    token = CancellationToken()
    token.cancel("user aborted")

    with pytest.raises(OperationCancelledError) as excinfo:
        token.raise_if_cancelled()

    assert excinfo.value.reason == "user aborted"
    assert "user aborted" in str(excinfo.value)


def test_timeout_token_expires() -> None:
    token = CancellationToken.with_timeout(0.0)
    time.sleep(0.01)

    assert token.is_cancelled
    with pytest.raises(OperationCancelledError, match="timed out"):
        token.raise_if_cancelled()


def test_timeout_none_never_expires() -> None:
    token = CancellationToken.with_timeout(None)

    assert token.deadline is None
    assert not token.is_cancelled


def test_negative_timeout_rejected() -> None:
    with pytest.raises(ValueError):
        CancellationToken.with_timeout(-1)


def test_cancelled_before_start_raises_for_bytes_variant(sample_files: list[Path]) -> None:
    codec = RecordingCodec()
    service = ArchiveService(LocalFileSystemAdapter(), codec)
    token = CancellationToken()
    token.cancel()

    with pytest.raises(OperationCancelledError):
        service.build_zip_bytes(sample_files, token)

    assert codec.byte_sinks == []


def test_cancelled_before_start_raises_even_for_empty_input() -> None:
    service = ArchiveService(LocalFileSystemAdapter(), ZipFileCodec())
    token = CancellationToken()
    token.cancel()

    with pytest.raises(OperationCancelledError):
        service.build_zip_bytes([], token)
    with pytest.raises(OperationCancelledError):
        service.build_tree_stream([], token)


def test_cancel_mid_write_closes_stream_and_seals_sink(sample_files: list[Path]) -> None:
    token = CancellationToken()
    codec = RecordingCodec(cancel_after=1, token=token)
    service = ArchiveService(LocalFileSystemAdapter(), codec)

    with pytest.raises(OperationCancelledError, match="stop requested"):
        service.build_zip_stream(sample_files, token)

    assert codec.sinks[0].written == 1
    assert codec.sinks[0].sealed
    assert codec.byte_sinks[0].closed


def test_cancel_mid_tree_walk_closes_stream(nested_tree: Path) -> None:
    token = CancellationToken()
    codec = RecordingCodec(cancel_after=2, token=token)
    service = ArchiveService(LocalFileSystemAdapter(), codec)

    with pytest.raises(OperationCancelledError):
        service.build_tree_bytes([nested_tree], token)

    assert codec.sinks[0].written == 2
    assert codec.byte_sinks[0].closed


def test_codec_failure_propagates_and_closes_stream(temp_dir: Path) -> None:
    class ExplodingFileSystem(LocalFileSystemAdapter):
        def exists(self, handle) -> bool:
            return True

    codec = RecordingCodec()
    service = ArchiveService(ExplodingFileSystem(), codec)

    with pytest.raises(FileNotFoundError):
        service.build_zip_bytes([FileHandle(path=temp_dir / "absent.txt")])

    assert codec.byte_sinks[0].closed


def test_successful_build_leaves_returned_stream_open(sample_files: list[Path]) -> None:
    codec = RecordingCodec()
    service = ArchiveService(LocalFileSystemAdapter(), codec)

    stream = service.build_zip_stream(sample_files, CancellationToken.with_timeout(60))

    assert stream is codec.byte_sinks[0]
    assert not stream.closed
    assert codec.sinks[0].sealed
    stream.close()
