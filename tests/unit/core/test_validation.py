from __future__ import annotations

import math
from datetime import timedelta

import pytest

from apatience.core import (
    to_seconds,
    validate_callable,
    validate_failure_message,
    validate_instance,
    validate_max_retries,
)

################################
#     Tests for to_seconds     #
################################


@pytest.mark.parametrize(
    ("duration", "expected"),
    [
        (0, 0.0),
        (1, 1.0),
        (2.5, 2.5),
        (timedelta(seconds=3), 3.0),
        (timedelta(milliseconds=250), 0.25),
        (timedelta(0), 0.0),
    ],
)
def test_to_seconds(duration: float | timedelta, expected: float) -> None:
    seconds = to_seconds(duration)
    assert seconds == expected
    assert isinstance(seconds, float)


def test_to_seconds_infinity() -> None:
    assert to_seconds(math.inf) == math.inf


@pytest.mark.parametrize("duration", [-1, -0.001, timedelta(seconds=-1)])
def test_to_seconds_negative(duration: float | timedelta) -> None:
    with pytest.raises(ValueError, match="timeout must be >= 0"):
        to_seconds(duration, "timeout")


def test_to_seconds_nan() -> None:
    with pytest.raises(ValueError, match="duration must not be NaN"):
        to_seconds(math.nan)


@pytest.mark.parametrize("duration", [None, True, "1", [1.0]])
def test_to_seconds_invalid_type(duration: object) -> None:
    with pytest.raises(TypeError, match="delay must be a number of seconds or a timedelta"):
        to_seconds(duration, "delay")


##########################################
#     Tests for validate_max_retries     #
##########################################


@pytest.mark.parametrize("max_retries", [0, 1, 10])
def test_validate_max_retries(max_retries: int) -> None:
    assert validate_max_retries(max_retries) == max_retries


def test_validate_max_retries_negative() -> None:
    with pytest.raises(ValueError, match="max_retries must be >= 0, got -1"):
        validate_max_retries(-1)


@pytest.mark.parametrize("max_retries", [1.0, "3", None, True])
def test_validate_max_retries_invalid_type(max_retries: object) -> None:
    with pytest.raises(TypeError, match="max_retries must be an integer"):
        validate_max_retries(max_retries)


#######################################
#     Tests for validate_callable     #
#######################################


def test_validate_callable() -> None:
    validate_callable(len, "operation")


def test_validate_callable_invalid() -> None:
    with pytest.raises(TypeError, match="operation must be callable, got 42"):
        validate_callable(42, "operation")


#######################################
#     Tests for validate_instance     #
#######################################


def test_validate_instance() -> None:
    validate_instance(1.5, float, "delay")
    validate_instance(True, int, "flag")


@pytest.mark.parametrize("value", [None, "1.5", 1])
def test_validate_instance_invalid(value: object) -> None:
    with pytest.raises(TypeError, match="delay must be an instance of float, got"):
        validate_instance(value, float, "delay")


##############################################
#     Tests for validate_failure_message     #
##############################################


@pytest.mark.parametrize("failure_message", ["gave up", "", lambda: "gave up"])
def test_validate_failure_message(failure_message: object) -> None:
    validate_failure_message(failure_message)


@pytest.mark.parametrize("failure_message", [None, 42, b"gave up"])
def test_validate_failure_message_invalid(failure_message: object) -> None:
    with pytest.raises(TypeError, match="failure_message must be a string or a callable"):
        validate_failure_message(failure_message)
