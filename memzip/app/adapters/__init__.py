"""Concrete adapters wiring application ports to built-in implementations."""

from __future__ import annotations

from .filesystem import LocalFileSystemAdapter
from .zipfile_codec import ZipFileCodec, ZipFileSink

__all__ = [
    "LocalFileSystemAdapter",
    "ZipFileCodec",
    "ZipFileSink",
]
