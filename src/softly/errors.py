"""Failure types raised and collected by soft assertions."""

from __future__ import annotations

from typing import Sequence


class AssertionFailure(AssertionError):
    """Assertion failure that supports being rebuilt with a new message.

    Attributes:
        message: Human-readable description of the failure.
        suppressed: Secondary failures recorded while producing this one.
    """

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.suppressed: list[BaseException] = []

    def add_suppressed(self, failure: BaseException) -> None:
        if failure is self:
            raise ValueError("A failure cannot suppress itself")
        self.suppressed.append(failure)

    def rebuild_with_message(self, message: str) -> AssertionFailure:
        """Return a fresh failure of the same type carrying ``message``.

        Subclasses whose constructor takes other arguments must override this.
        """
        return type(self)(message)

    def __str__(self) -> str:
        return self.message


class SoftAssertionError(AssertionError):
    """Aggregate raised at checkpoint time when soft assertions failed."""

    def __init__(self, failures: Sequence[BaseException]) -> None:
        self.failures = list(failures)
        self.errors = [str(f) for f in self.failures]
        super().__init__(self._format(self.errors))

    @staticmethod
    def _format(errors: list[str]) -> str:
        count = len(errors)
        plural = "assertion" if count == 1 else "assertions"
        lines = [f"The following {count} {plural} failed:"]
        lines.extend(f"{index}) {message}" for index, message in enumerate(errors, start=1))
        return "\n".join(lines)


class SoftProxyCreationError(RuntimeError):
    """A soft proxy could not be synthesized for an assertion class."""


def failure(message: str) -> AssertionFailure:
    return AssertionFailure(message)


def expected_exception_not_thrown(kind: type[BaseException]) -> AssertionFailure:
    return AssertionFailure(f"{kind.__name__} should have been thrown")
