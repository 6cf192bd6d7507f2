"""Public entry point for soft assertions."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Callable, Iterator

from softly.assertions import assert_type_for
from softly.collector import FailureCollector
from softly.config import SoftAssertionsConfig
from softly.errors import expected_exception_not_thrown, failure
from softly.location import LocationAttributor
from softly.proxies import SoftProxies
from softly.report import build_aggregate, checkpoint
from softly.verbose import get_logger


class SoftAssertions(FailureCollector):
    """Collect assertion failures for one test and report them all at once.

    Usage::

        softly = SoftAssertions()
        softly.assert_that(order.total).is_equal_to(42)
        softly.assert_that(order.lines).has_size(3).contains("apples")
        softly.assert_all()

    Assertions made through :meth:`assert_that` or :meth:`proxy` never raise;
    :meth:`assert_all` raises a single ``SoftAssertionError`` listing every
    failure, each followed by the test line that produced it.
    """

    def __init__(self, config: SoftAssertionsConfig | None = None, logger: logging.Logger | None = None):
        self.config = config or SoftAssertionsConfig()
        if logger is None:
            logger = get_logger(self.config.debug_log, verbose=self.config.verbose)
        attributor = LocationAttributor(
            self.config.internal_prefixes,
            self.config.proxy_markers,
            logger=logger,
        )
        super().__init__(
            attributor=attributor,
            logger=logger,
            decorate_line_numbers=self.config.decorate_line_numbers,
        )
        self.proxies = SoftProxies(self)

    def __enter__(self) -> SoftAssertions:
        return self

    def __exit__(self, exc_type, exc_value, tb) -> bool:
        if exc_type is None:
            self.assert_all()
        elif not self.is_empty():
            # the body's own error wins; keep the soft failures visible on it
            exc_value.add_note(str(build_aggregate(self.snapshot())))
        return False

    def proxy(self, assert_class: type, actual_type: type, actual: Any) -> Any:
        """Return a soft proxy of ``assert_class`` checking ``actual``."""
        return self.proxies.create_soft_assertion_proxy(assert_class, actual_type, actual)

    def assert_that(self, actual: Any) -> Any:
        return self.proxy(assert_type_for(actual), type(actual), actual)

    def collect_failure(self, failure: BaseException) -> None:
        self.collect(failure)

    def assert_all(self) -> None:
        checkpoint(self)

    def collected_failures(self) -> list[BaseException]:
        """Return a decorated copy of the failures collected so far."""
        return self.snapshot()

    errors_collected = collected_failures

    def fail(self, message: str, *args: Any, cause: BaseException | None = None) -> None:
        """Collect a failure with ``message``, %-formatted with ``args`` when given."""
        if args:
            message = message % args
        error = failure(message)
        if cause is not None:
            error.__cause__ = cause
        self.collect(error)

    def fail_because_exception_was_not_thrown(self, kind: type[BaseException]) -> None:
        self.collect(expected_exception_not_thrown(kind))

    def should_have_thrown(self, kind: type[BaseException]) -> None:
        self.collect(expected_exception_not_thrown(kind))

    def check(self, assertion: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
        """Run a callable performing hard assertions and collect what it raises."""
        try:
            assertion(*args, **kwargs)
        except AssertionError as error:
            self.collect(error)
        else:
            self.succeeded()

    def assert_also(self, other: FailureCollector) -> None:
        """Collect every failure already collected by ``other``."""
        for error in other.raw_snapshot():
            self.collect(error)


@contextmanager
def soft_assertions(config: SoftAssertionsConfig | None = None) -> Iterator[SoftAssertions]:
    """Context manager running ``assert_all`` when the block exits cleanly."""
    with SoftAssertions(config) as softly:
        yield softly


def assert_softly(
    assertions: Callable[[SoftAssertions], Any], config: SoftAssertionsConfig | None = None
) -> None:
    """Run ``assertions`` against a fresh session, then check all of them."""
    softly = SoftAssertions(config)
    assertions(softly)
    softly.assert_all()
