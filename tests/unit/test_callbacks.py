from __future__ import annotations

import pytest

from apatience.callbacks import AttemptInfo, FailureInfo, RetryInfo, SuccessInfo


def test_attempt_info() -> None:
    info = AttemptInfo(attempt=1, elapsed_time=0.0)
    assert info.attempt == 1
    assert info.elapsed_time == 0.0


def test_retry_info() -> None:
    info = RetryInfo(attempt=2, wait_time=1.5, description="None", elapsed_time=3.0)
    assert info.attempt == 2
    assert info.wait_time == 1.5
    assert info.description == "None"
    assert info.elapsed_time == 3.0


def test_success_info() -> None:
    info = SuccessInfo(attempt=3, value={"status": "up"}, total_time=4.5)
    assert info.value == {"status": "up"}
    assert info.total_time == 4.5


def test_failure_info() -> None:
    info = FailureInfo(attempts=2, descriptions=("None", "False"), total_time=1.0)
    assert info.attempts == 2
    assert info.descriptions == ("None", "False")


@pytest.mark.parametrize(
    "info",
    [
        AttemptInfo(attempt=1, elapsed_time=0.0),
        FailureInfo(attempts=1, descriptions=("None",), total_time=0.0),
    ],
)
def test_info_frozen(info: object) -> None:
    with pytest.raises(AttributeError):
        info.attempt = 5
