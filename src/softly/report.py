"""Turn collected failures into one aggregate error at checkpoint time."""

from __future__ import annotations

from typing import Sequence

from softly.collector import FailureCollector
from softly.errors import SoftAssertionError


def build_aggregate(failures: Sequence[BaseException]) -> SoftAssertionError:
    """Build the aggregate error listing every failure message on a numbered line."""
    if not failures:
        raise ValueError("Cannot build an aggregate error without failures")
    return SoftAssertionError(failures)


def checkpoint(collector: FailureCollector) -> None:
    """Raise one SoftAssertionError if ``collector`` holds failures, else return.

    Failures are reported but not removed, so calling this again re-raises
    everything collected so far.
    """
    if collector.is_empty():
        collector.logger.info("Checkpoint passed: no soft assertion failed")
        return
    failures = collector.snapshot()
    collector.logger.info(f"Checkpoint failed: {len(failures)} soft assertion(s) failed")
    raise build_aggregate(failures)
