"""Base class for fluent assertion objects."""

from __future__ import annotations

from typing import Any, Callable

from softly.errors import AssertionFailure

NAVIGATION_MARKER = "__soft_navigation__"


def navigation(method):
    """Mark ``method`` as returning an assertion object about a derived value.

    Soft proxies wrap whatever a navigation returns, and when a navigation
    fails they skip the rest of the chain instead of running it against the
    source value. Assertion classes defined outside softly can use it too.
    """
    setattr(method, NAVIGATION_MARKER, True)
    return method


class AbstractAssert:
    """Fluent assertion over a single ``actual`` value.

    Every check either returns ``self`` so calls can be chained, or raises
    :class:`AssertionFailure`. Navigation methods return a new assertion
    object about a derived value.

    Attributes:
        actual: The value under test.
        description: Optional label prefixed to failure messages as
            ``[description] message``.
        actual_types: Types of ``actual`` this class knows how to check.
            Soft proxies refuse subject types outside this tuple.
    """

    actual_types: tuple[type, ...] = (object,)

    def __init__(self, actual: Any) -> None:
        self.actual = actual
        self.description: str | None = None

    def _fail(self, message: str) -> None:
        if self.description:
            message = f"[{self.description}] {message}"
        raise AssertionFailure(message)

    def described_as(self, description: str):
        self.description = description
        return self

    def is_equal_to(self, expected: Any):
        if self.actual != expected:
            self._fail(f"expected <{expected!r}> but was <{self.actual!r}>")
        return self

    def is_not_equal_to(self, other: Any):
        if self.actual == other:
            self._fail(f"expected value other than <{other!r}>")
        return self

    def is_none(self):
        if self.actual is not None:
            self._fail(f"expected None but was <{self.actual!r}>")
        return self

    def is_not_none(self):
        if self.actual is None:
            self._fail("expected a value but was None")
        return self

    def is_same_as(self, other: Any):
        if self.actual is not other:
            self._fail(f"expected <{self.actual!r}> to be the same object as <{other!r}>")
        return self

    def is_instance_of(self, kind: type):
        if not isinstance(self.actual, kind):
            self._fail(
                f"expected instance of <{kind.__name__}> "
                f"but was <{type(self.actual).__name__}>"
            )
        return self

    def is_in(self, *values: Any):
        if self.actual not in values:
            self._fail(f"expected <{self.actual!r}> to be in <{list(values)!r}>")
        return self

    def satisfies(self, predicate: Callable[[Any], bool], description: str = "condition"):
        if not predicate(self.actual):
            self._fail(f"expected <{self.actual!r}> to satisfy {description}")
        return self


class ObjectAssert(AbstractAssert):
    """Assertions for values without a more specific assertion type."""
