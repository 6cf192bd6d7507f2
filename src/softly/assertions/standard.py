"""Assertion types for common built-in values."""

from __future__ import annotations

import re
from typing import Any, Callable

from softly.assertions.base import AbstractAssert, ObjectAssert, navigation


class BooleanAssert(AbstractAssert):
    actual_types = (bool,)

    def is_true(self):
        if self.actual is not True:
            self._fail(f"expected true but was {_bool_text(self.actual)}")
        return self

    def is_false(self):
        if self.actual is not False:
            self._fail(f"expected false but was {_bool_text(self.actual)}")
        return self


class NumberAssert(AbstractAssert):
    actual_types = (int, float)

    def is_greater_than(self, other: float):
        if not self.actual > other:
            self._fail(f"expected <{self.actual!r}> to be greater than <{other!r}>")
        return self

    def is_less_than(self, other: float):
        if not self.actual < other:
            self._fail(f"expected <{self.actual!r}> to be less than <{other!r}>")
        return self

    def is_between(self, start: float, end: float):
        """Inclusive range check built on the bound comparisons."""
        self.is_greater_than_or_equal_to(start)
        self.is_less_than_or_equal_to(end)
        return self

    def is_greater_than_or_equal_to(self, other: float):
        if not self.actual >= other:
            self._fail(f"expected <{self.actual!r}> to be greater than or equal to <{other!r}>")
        return self

    def is_less_than_or_equal_to(self, other: float):
        if not self.actual <= other:
            self._fail(f"expected <{self.actual!r}> to be less than or equal to <{other!r}>")
        return self

    def is_zero(self):
        return self.is_equal_to(0)

    def is_positive(self):
        return self.is_greater_than(0)

    def is_negative(self):
        return self.is_less_than(0)


class StringAssert(AbstractAssert):
    actual_types = (str,)

    def contains(self, *fragments: str):
        missing = [f for f in fragments if f not in self.actual]
        if missing:
            self._fail(f"expected <{self.actual!r}> to contain <{missing!r}>")
        return self

    def starts_with(self, prefix: str):
        if not self.actual.startswith(prefix):
            self._fail(f"expected <{self.actual!r}> to start with <{prefix!r}>")
        return self

    def ends_with(self, suffix: str):
        if not self.actual.endswith(suffix):
            self._fail(f"expected <{self.actual!r}> to end with <{suffix!r}>")
        return self

    def matches(self, pattern: str):
        if re.search(pattern, self.actual) is None:
            self._fail(f"expected <{self.actual!r}> to match pattern <{pattern!r}>")
        return self

    def is_empty(self):
        if self.actual:
            self._fail(f"expected empty string but was <{self.actual!r}>")
        return self

    def has_length(self, length: int):
        if len(self.actual) != length:
            self._fail(f"expected length <{length}> but was <{len(self.actual)}> for <{self.actual!r}>")
        return self


class ListAssert(AbstractAssert):
    actual_types = (list, tuple)

    def has_size(self, size: int):
        if len(self.actual) != size:
            self._fail(f"expected size <{size}> but was <{len(self.actual)}> in <{list(self.actual)!r}>")
        return self

    def is_empty(self):
        if self.actual:
            self._fail(f"expected empty but was <{list(self.actual)!r}>")
        return self

    def contains(self, *values: Any):
        missing = [v for v in values if v not in self.actual]
        if missing:
            self._fail(f"expected <{list(self.actual)!r}> to contain <{missing!r}>")
        return self

    def does_not_contain(self, *values: Any):
        found = [v for v in values if v in self.actual]
        if found:
            self._fail(f"expected <{list(self.actual)!r}> not to contain <{found!r}>")
        return self

    def contains_exactly(self, *values: Any):
        if list(self.actual) != list(values):
            self._fail(f"expected exactly <{list(values)!r}> but was <{list(self.actual)!r}>")
        return self

    @navigation
    def element(self, index: int) -> AbstractAssert:
        if not -len(self.actual) <= index < len(self.actual):
            self._fail(f"expected an element at index <{index}> in <{list(self.actual)!r}>")
        return _navigate(self, self.actual[index])

    @navigation
    def first(self) -> AbstractAssert:
        return self.element(0)

    @navigation
    def last(self) -> AbstractAssert:
        return self.element(-1)

    @navigation
    def extracting(self, extractor: Callable[[Any], Any]) -> ListAssert:
        return _navigate(self, [extractor(item) for item in self.actual])


class DictAssert(AbstractAssert):
    actual_types = (dict,)

    def has_size(self, size: int):
        if len(self.actual) != size:
            self._fail(f"expected size <{size}> but was <{len(self.actual)}> in <{self.actual!r}>")
        return self

    def contains_key(self, key: Any):
        if key not in self.actual:
            self._fail(f"expected <{self.actual!r}> to contain key <{key!r}>")
        return self

    def does_not_contain_key(self, key: Any):
        if key in self.actual:
            self._fail(f"expected <{self.actual!r}> not to contain key <{key!r}>")
        return self

    def contains_entry(self, key: Any, value: Any):
        if key not in self.actual or self.actual[key] != value:
            self._fail(f"expected <{self.actual!r}> to contain entry <{key!r}: {value!r}>")
        return self

    @navigation
    def value(self, key: Any) -> AbstractAssert:
        self.contains_key(key)
        return _navigate(self, self.actual[key])


# bool before int: bool is an int subclass
_ASSERT_TYPES: list[tuple[tuple[type, ...], type[AbstractAssert]]] = [
    ((bool,), BooleanAssert),
    ((int, float), NumberAssert),
    ((str,), StringAssert),
    ((list, tuple), ListAssert),
    ((dict,), DictAssert),
]


def assert_type_for(actual: Any) -> type[AbstractAssert]:
    """Return the most specific assertion class for ``actual``."""
    for kinds, assert_class in _ASSERT_TYPES:
        if isinstance(actual, kinds):
            return assert_class
    return ObjectAssert


def assert_that(actual: Any) -> AbstractAssert:
    """Hard assertion entry point: failures raise immediately."""
    return assert_type_for(actual)(actual)


def _navigate(source: AbstractAssert, value: Any) -> AbstractAssert:
    target = assert_type_for(value)(value)
    target.description = source.description
    return target


def _bool_text(value: Any) -> str:
    if isinstance(value, bool):
        return str(value).lower()
    return f"<{value!r}>"
