"""Ordered, thread-safe storage of collected assertion failures."""

from __future__ import annotations

import inspect
import logging
import threading
from types import TracebackType
from typing import Callable

from softly.location import LocationAttributor
from softly.verbose import LOGGER_NAME

AfterFailureCollected = Callable[[BaseException], None]


def complete_traceback(failure: BaseException) -> BaseException:
    """Extend the failure's traceback with the frames of its callers.

    A caught exception only records frames between the raise and the
    ``except`` clause. Prepending the callers above that point gives the full
    stack needed for attribution. A failure that was never raised gets the
    stack of the code that called ``collect``. Completing a traceback twice
    is a no-op because its outermost frame has no caller left.
    """
    tb = failure.__traceback__
    if tb is None:
        outer = inspect.currentframe().f_back
    else:
        outer = tb.tb_frame.f_back
    while outer is not None:
        tb = TracebackType(tb, outer, outer.f_lasti, outer.f_lineno)
        outer = outer.f_back
    return failure.with_traceback(tb)


class FailureCollector:
    """Accumulate failures in arrival order and expose them for reporting."""

    def __init__(
        self,
        attributor: LocationAttributor | None = None,
        logger: logging.Logger | None = None,
        decorate_line_numbers: bool = True,
    ):
        self.logger = logger or logging.getLogger(LOGGER_NAME)
        self.attributor = attributor or LocationAttributor(logger=self.logger)
        self.decorate_line_numbers = decorate_line_numbers
        self._failures: list[BaseException] = []
        self._lock = threading.Lock()
        self._delegate: FailureCollector | None = None
        self._after_collected: AfterFailureCollected | None = None
        self._last_succeeded = True

    def collect(self, failure: BaseException) -> None:
        complete_traceback(failure)
        self._last_succeeded = False
        if self._delegate is not None:
            self._delegate.collect(failure)
        else:
            with self._lock:
                self._failures.append(failure)
        self.logger.debug(f"Collected {type(failure).__name__}: {failure}")
        if self._after_collected is not None:
            self._after_collected(failure)

    def succeeded(self) -> None:
        """Record that the last assertion passed."""
        self._last_succeeded = True

    def was_success(self) -> bool:
        return self._last_succeeded

    def is_empty(self) -> bool:
        with self._lock:
            return not self._failures

    def snapshot(self) -> list[BaseException]:
        """Return an independent, decorated copy of the collected failures."""
        return self.decorate_failures(self.raw_snapshot())

    def raw_snapshot(self) -> list[BaseException]:
        with self._lock:
            return list(self._failures)

    def decorate_failures(self, failures: list[BaseException]) -> list[BaseException]:
        """Hook for post-processing collected failures; adds line numbers by default."""
        if not self.decorate_line_numbers:
            return failures
        return [self.attributor.decorate(f) for f in failures]

    def set_delegate(self, delegate: FailureCollector | None) -> None:
        """Forward every failure collected from now on to ``delegate``."""
        if delegate is self:
            raise ValueError("A collector cannot delegate to itself")
        self._delegate = delegate

    def set_after_failure_collected(self, callback: AfterFailureCollected | None) -> None:
        self._after_collected = callback
