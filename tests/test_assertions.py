"""Tests for the fluent assertion types."""

import pytest

from softly.assertions import (
    BooleanAssert,
    DictAssert,
    ListAssert,
    NumberAssert,
    ObjectAssert,
    StringAssert,
    assert_that,
    assert_type_for,
)
from softly.errors import AssertionFailure


# --- assert_type_for ---


@pytest.mark.parametrize(
    "actual, expected",
    [
        (True, BooleanAssert),
        (3, NumberAssert),
        (2.5, NumberAssert),
        ("text", StringAssert),
        ([1, 2], ListAssert),
        ((1, 2), ListAssert),
        ({"a": 1}, DictAssert),
        (None, ObjectAssert),
        (object(), ObjectAssert),
    ],
)
def test_assert_type_for(actual, expected):
    assert assert_type_for(actual) is expected


# --- object checks ---


def test_is_equal_to_pass_returns_self():
    a = assert_that(1)
    assert a.is_equal_to(1) is a


def test_is_equal_to_fail_message():
    with pytest.raises(AssertionFailure) as exc_info:
        assert_that(2).is_equal_to(1)
    assert str(exc_info.value) == "expected <1> but was <2>"


def test_description_prefixes_message():
    with pytest.raises(AssertionFailure, match=r"^\[order total\] expected <10>"):
        assert_that(9).described_as("order total").is_equal_to(10)


def test_is_none_and_is_not_none():
    assert_that(None).is_none()
    with pytest.raises(AssertionFailure, match="expected a value but was None"):
        assert_that(None).is_not_none()


def test_satisfies_uses_description():
    with pytest.raises(AssertionFailure, match="to satisfy is even"):
        assert_that(3).satisfies(lambda v: v % 2 == 0, "is even")


def test_is_instance_of_fail():
    with pytest.raises(AssertionFailure, match="expected instance of <str> but was <int>"):
        assert_that(3).is_instance_of(str)


# --- booleans ---


def test_is_true_fail_message():
    with pytest.raises(AssertionFailure) as exc_info:
        assert_that(False).is_true()
    assert str(exc_info.value) == "expected true but was false"


def test_is_false_pass():
    assert_that(False).is_false()


# --- numbers ---


def test_is_between_pass():
    assert_that(5).is_between(1, 5)


def test_is_between_fail():
    with pytest.raises(AssertionFailure, match="less than or equal to <5>"):
        assert_that(6).is_between(1, 5)


def test_is_positive_fail():
    with pytest.raises(AssertionFailure, match="greater than <0>"):
        assert_that(-1).is_positive()


# --- strings ---


def test_string_contains_reports_missing_fragments():
    with pytest.raises(AssertionFailure, match=r"\['xyz'\]"):
        assert_that("hello world").contains("hello", "xyz")


def test_string_matches_pattern():
    assert_that("order-42").matches(r"order-\d+").starts_with("order").ends_with("42")


def test_string_has_length_fail():
    with pytest.raises(AssertionFailure, match="expected length <3> but was <5>"):
        assert_that("hello").has_length(3)


# --- lists ---


def test_list_has_size_and_contains():
    assert_that([1, 2, 3]).has_size(3).contains(1, 3).does_not_contain(4)


def test_list_contains_exactly_fail():
    with pytest.raises(AssertionFailure, match=r"expected exactly <\[3, 2, 1\]>"):
        assert_that([1, 2, 3]).contains_exactly(3, 2, 1)


def test_list_first_navigates_to_element_assertion():
    first = assert_that(["apples", "pears"]).first()
    assert isinstance(first, StringAssert)
    assert first.actual == "apples"


def test_list_element_out_of_range_fails():
    with pytest.raises(AssertionFailure, match="expected an element at index <5>"):
        assert_that([1]).element(5)


def test_list_extracting_keeps_description():
    names = assert_that([{"name": "a"}, {"name": "b"}]).described_as("rows").extracting(lambda r: r["name"])
    assert isinstance(names, ListAssert)
    assert names.actual == ["a", "b"]
    assert names.description == "rows"


# --- dicts ---


def test_dict_contains_entry_fail():
    with pytest.raises(AssertionFailure, match="to contain entry <'a': 2>"):
        assert_that({"a": 1}).contains_entry("a", 2)


def test_dict_value_navigates():
    value = assert_that({"a": 1}).value("a")
    assert isinstance(value, NumberAssert)
    value.is_equal_to(1)
