"""Cooperative cancellation for archive builds.

A :class:`CancellationToken` is checked at sequence entry and at every file
boundary. Requests are thread-safe so a signal handler or another thread may
cancel a build running elsewhere. Timeouts are expressed as a deadline on the
token rather than a background timer.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field


class OperationCancelledError(RuntimeError):
    """Raised when an archive build is cancelled before it completes."""

    def __init__(self, reason: str = "Operation was cancelled") -> None:
        super().__init__(reason)
        self.reason = reason


@dataclass
class CancellationToken:
    """Cancellation signal with an optional monotonic deadline.

    Example:
        >>> token = CancellationToken.with_timeout(5.0)
        >>> service.build_zip_bytes(files, token)
    """

    deadline: float | None = None
    """``time.monotonic()`` value after which the token reports cancelled"""

    _event: threading.Event = field(default_factory=threading.Event, init=False, repr=False)
    _reason: str = field(default="Operation was cancelled", init=False, repr=False)

    @classmethod
    def none(cls) -> CancellationToken:
        """Return a token that is never cancelled unless asked to."""
        return cls()

    @classmethod
    def with_timeout(cls, seconds: float | None) -> CancellationToken:
        """Return a token that cancels itself ``seconds`` from now."""
        if seconds is None:
            return cls()
        if seconds < 0:
            raise ValueError(f"Timeout must be non-negative, got {seconds}")
        return cls(deadline=time.monotonic() + seconds)

    def cancel(self, reason: str | None = None) -> None:
        """Request cancellation."""
        if reason:
            self._reason = reason
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        if self._event.is_set():
            return True
        if self.deadline is not None and time.monotonic() >= self.deadline:
            self._reason = "Operation timed out"
            self._event.set()
            return True
        return False

    def raise_if_cancelled(self) -> None:
        """Raise :class:`OperationCancelledError` if cancellation was requested."""
        if self.is_cancelled:
            raise OperationCancelledError(self._reason)
