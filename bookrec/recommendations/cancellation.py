from __future__ import annotations

import threading
import time

from .errors import RequestCancelledError

# Floor for per-call timeouts so an almost-expired deadline still issues a
# well-formed request instead of a zero or negative timeout.
_MIN_CALL_TIMEOUT = 0.05


class CancellationToken:
    """
    Per-request deadline plus an explicit cancel flag.

    External calls take their timeout from :meth:`remaining`, so no call can
    outlive the request that issued it.
    """

    def __init__(self, timeout: float | None = None) -> None:
        self._event = threading.Event()
        self._deadline = time.monotonic() + timeout if timeout is not None else None

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        return self._deadline is not None and time.monotonic() >= self._deadline

    def remaining(self, cap: float) -> float:
        """Return the time left for one external call, at most ``cap`` seconds."""
        if self._deadline is None:
            return cap
        left = self._deadline - time.monotonic()
        return max(_MIN_CALL_TIMEOUT, min(cap, left))

    def raise_if_cancelled(self) -> None:
        if self.cancelled:
            raise RequestCancelledError()
