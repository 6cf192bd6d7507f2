"""Fluent assertion types wrapped by soft assertions."""

from softly.assertions.base import AbstractAssert, ObjectAssert, navigation
from softly.assertions.standard import (
    BooleanAssert,
    DictAssert,
    ListAssert,
    NumberAssert,
    StringAssert,
    assert_that,
    assert_type_for,
)

__all__ = [
    "AbstractAssert",
    "BooleanAssert",
    "DictAssert",
    "ListAssert",
    "NumberAssert",
    "ObjectAssert",
    "StringAssert",
    "assert_that",
    "assert_type_for",
    "navigation",
]
