"""Utility modules for common operations."""

from memzip.utils.cancellation import CancellationToken, OperationCancelledError
from memzip.utils.paths import find_directories, find_files, join_entry_path

__all__ = [
    "CancellationToken",
    "OperationCancelledError",
    "find_directories",
    "find_files",
    "join_entry_path",
]
