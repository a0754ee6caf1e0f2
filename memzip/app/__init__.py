"""Application layer for memzip.

This layer orchestrates archive building without direct filesystem or codec
access. All side effects are delegated to adapters via port interfaces.
"""

__all__ = [
    "ArchiveService",
    "filter_existing",
    "materialize",
    "rewind",
]

from memzip.app.archive_service import ArchiveService, filter_existing, materialize, rewind
