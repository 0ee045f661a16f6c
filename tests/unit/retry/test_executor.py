from __future__ import annotations

import math
from functools import partial
from typing import TYPE_CHECKING, Any
from unittest.mock import Mock, call

import pytest

from apatience.callbacks import AttemptInfo, FailureInfo, RetryInfo, SuccessInfo
from apatience.delays import BaseDelayFactory, ExponentialDelay, FixedDelay
from apatience.exceptions import (
    PatientContractError,
    PatientExecutionError,
    PatientInterruptedError,
)
from apatience.execution import (
    ExecutionOutcome,
    IgnoringExecutionHandler,
    SimpleExecutionHandler,
    default_filter,
)
from apatience.retry import (
    CallbackConfig,
    CallbackManager,
    MaxRetriesBound,
    RetryExecutor,
    TimeoutBound,
)
from apatience.sleep import Sleep
from tests.helpers import FakeClock, always_false, make_operation

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


class SequenceDelay(BaseDelayFactory):
    """Delay factory returning a given sequence, possibly invalid."""

    def __init__(self, *delays: Any) -> None:
        self._delays = delays

    def calculate(self, attempt: int) -> float:
        return self._delays[attempt]

    def create(self) -> Iterator[float]:
        return iter(self._delays)


def make_attempt(
    operation: Callable[[], Any], filter: Callable[[Any], bool] = default_filter  # noqa: A002
) -> Callable[[], ExecutionOutcome]:
    return partial(SimpleExecutionHandler().execute, operation, filter)


@pytest.fixture
def executor(fake_sleep: Sleep, fake_clock: FakeClock) -> RetryExecutor:
    return RetryExecutor(sleep=fake_sleep, clock=fake_clock)


###################################
#     Tests for RetryExecutor     #
###################################


def test_retry_executor_default_callbacks(fake_sleep: Sleep) -> None:
    executor = RetryExecutor(sleep=fake_sleep)
    assert executor.sleep is fake_sleep
    assert isinstance(executor.callbacks, CallbackManager)


def test_retry_executor_first_attempt_passes(
    executor: RetryExecutor, mock_sleep_func: Mock
) -> None:
    operation = Mock(return_value="x")
    delay_factory = Mock(wraps=FixedDelay(1.0))

    result = executor.execute(make_attempt(operation), MaxRetriesBound(3), delay_factory)

    assert result.success
    assert result.value == "x"
    operation.assert_called_once_with()
    mock_sleep_func.assert_not_called()
    delay_factory.create.assert_called_once_with()


def test_retry_executor_max_retries_exhausted(
    executor: RetryExecutor, mock_sleep_func: Mock
) -> None:
    operation = Mock(return_value=1)

    result = executor.execute(
        make_attempt(operation, always_false), MaxRetriesBound(3), FixedDelay(0)
    )

    assert not result.success
    assert result.descriptions == ("1", "1", "1", "1")
    assert operation.call_count == 4
    mock_sleep_func.assert_not_called()


def test_retry_executor_second_attempt_passes(
    executor: RetryExecutor, mock_sleep_func: Mock
) -> None:
    operation = make_operation([None, "x"])

    result = executor.execute(make_attempt(operation), MaxRetriesBound(3), FixedDelay(1.0))

    assert result.value == "x"
    assert operation.call_count == 2
    assert mock_sleep_func.call_args_list == [call(1.0)]


@pytest.mark.parametrize("bound", [MaxRetriesBound(0), TimeoutBound(0)])
def test_retry_executor_single_attempt(
    executor: RetryExecutor, mock_sleep_func: Mock, bound: Any
) -> None:
    operation = Mock(return_value=None)

    result = executor.execute(make_attempt(operation), bound, FixedDelay(1.0))

    assert result.descriptions == ("None",)
    operation.assert_called_once_with()
    mock_sleep_func.assert_not_called()


def test_retry_executor_exponential_delays(
    executor: RetryExecutor, mock_sleep_func: Mock
) -> None:
    operation = Mock(return_value=False)

    result = executor.execute(
        make_attempt(operation), MaxRetriesBound(3), ExponentialDelay(base=2, initial_delay=1.0)
    )

    assert result.descriptions == ("False", "False", "False", "False")
    assert mock_sleep_func.call_args_list == [call(1.0), call(2.0), call(4.0)]


def test_retry_executor_timeout_stops_before_deadline(
    executor: RetryExecutor, mock_sleep_func: Mock
) -> None:
    operation = Mock(return_value=None)

    result = executor.execute(make_attempt(operation), TimeoutBound(10.0), FixedDelay(4.0))

    # attempts at t=0, t=4 and t=8, waking up at t=12 would overshoot
    assert operation.call_count == 3
    assert len(result.descriptions) == 3
    assert mock_sleep_func.call_args_list == [call(4.0), call(4.0)]


def test_retry_executor_timeout_deadline_is_exclusive(
    executor: RetryExecutor, mock_sleep_func: Mock
) -> None:
    operation = Mock(return_value=None)

    executor.execute(make_attempt(operation), TimeoutBound(8.0), FixedDelay(4.0))

    assert operation.call_count == 2
    assert mock_sleep_func.call_args_list == [call(4.0)]


def test_retry_executor_timeout_counts_attempt_duration() -> None:
    clock = FakeClock(tick=1.0)
    executor = RetryExecutor(sleep=Sleep(sleep_func=clock.advance), clock=clock)
    operation = Mock(return_value=None)

    executor.execute(make_attempt(operation), TimeoutBound(5.0), FixedDelay(1.0))

    assert operation.call_count < 5


def test_retry_executor_timeout_passes_before_deadline(
    executor: RetryExecutor, fake_clock: FakeClock
) -> None:
    operation = make_operation([None, None, "ready"])

    result = executor.execute(make_attempt(operation), TimeoutBound(10.0), FixedDelay(1.0))

    assert result.value == "ready"
    assert fake_clock.now == 2.0


def test_retry_executor_max_retries_ignores_clock(mock_sleep_func: Mock) -> None:
    clock = FakeClock(tick=1000.0)
    executor = RetryExecutor(sleep=Sleep(sleep_func=mock_sleep_func), clock=clock)
    operation = Mock(return_value=None)

    result = executor.execute(make_attempt(operation), MaxRetriesBound(2), FixedDelay(0.1))

    assert len(result.descriptions) == 3


def test_retry_executor_timeout_infinite_delay_stops(executor: RetryExecutor) -> None:
    operation = Mock(return_value=None)

    result = executor.execute(make_attempt(operation), TimeoutBound(100.0), FixedDelay(math.inf))

    assert result.descriptions == ("None",)


def test_retry_executor_max_retries_infinite_delay_overflows(executor: RetryExecutor) -> None:
    with pytest.raises(OverflowError):
        executor.execute(
            make_attempt(Mock(return_value=None)), MaxRetriesBound(1), FixedDelay(math.inf)
        )


def test_retry_executor_ignored_exceptions(executor: RetryExecutor) -> None:
    operation = make_operation([KeyError("a"), KeyError("b"), 7])
    attempt = partial(IgnoringExecutionHandler(KeyError).execute, operation, default_filter)

    result = executor.execute(attempt, MaxRetriesBound(5), FixedDelay(0.5))

    assert result.value == 7


def test_retry_executor_ignored_exceptions_descriptions(executor: RetryExecutor) -> None:
    operation = make_operation([KeyError("a"), None])
    attempt = partial(IgnoringExecutionHandler(KeyError).execute, operation, default_filter)

    result = executor.execute(attempt, MaxRetriesBound(1), FixedDelay(0.5))

    assert result.descriptions == ("Ignored exception -> KeyError('a')", "None")


def test_retry_executor_fatal_exception(executor: RetryExecutor, mock_sleep_func: Mock) -> None:
    operation = make_operation([None, ValueError("boom"), "x"])

    with pytest.raises(PatientExecutionError):
        executor.execute(make_attempt(operation), MaxRetriesBound(5), FixedDelay(0.5))

    assert operation.call_count == 2
    assert mock_sleep_func.call_args_list == [call(0.5)]


def test_retry_executor_interrupted_sleep(fake_clock: FakeClock) -> None:
    executor = RetryExecutor(
        sleep=Sleep(sleep_func=Mock(side_effect=InterruptedError)), clock=fake_clock
    )
    operation = Mock(return_value=None)

    with pytest.raises(PatientInterruptedError):
        executor.execute(make_attempt(operation), MaxRetriesBound(5), FixedDelay(0.5))

    operation.assert_called_once_with()


def test_retry_executor_executor_reusable(executor: RetryExecutor) -> None:
    factory = ExponentialDelay(base=2, initial_delay=1.0)
    first = executor.execute(make_attempt(Mock(return_value=None)), MaxRetriesBound(1), factory)
    second = executor.execute(make_attempt(Mock(return_value="x")), MaxRetriesBound(1), factory)
    assert not first.success
    assert second.value == "x"


################################################
#     Tests for RetryExecutor contract checks  #
################################################


def test_retry_executor_negative_first_delay(
    executor: RetryExecutor, mock_sleep_func: Mock
) -> None:
    operation = Mock(return_value=None)

    with pytest.raises(PatientContractError, match="invalid delay"):
        executor.execute(make_attempt(operation), MaxRetriesBound(3), SequenceDelay(-1.0))

    operation.assert_called_once_with()
    mock_sleep_func.assert_not_called()


@pytest.mark.parametrize("delay", [math.nan, "1", True, [1.0]])
def test_retry_executor_invalid_delay(executor: RetryExecutor, delay: Any) -> None:
    with pytest.raises(PatientContractError, match="invalid delay"):
        executor.execute(
            make_attempt(Mock(return_value=None)), MaxRetriesBound(3), SequenceDelay(delay)
        )


def test_retry_executor_none_delay(executor: RetryExecutor) -> None:
    with pytest.raises(PatientContractError, match="None delay"):
        executor.execute(
            make_attempt(Mock(return_value=None)), MaxRetriesBound(3), SequenceDelay(None)
        )


def test_retry_executor_delay_generator_exhausted(executor: RetryExecutor) -> None:
    operation = Mock(return_value=None)

    with pytest.raises(PatientContractError, match="stopped producing delays"):
        executor.execute(make_attempt(operation), MaxRetriesBound(5), SequenceDelay(0.1, 0.1))

    assert operation.call_count == 3


@pytest.mark.parametrize("bound", [MaxRetriesBound(0), TimeoutBound(0)])
def test_retry_executor_delay_checked_after_last_attempt(
    executor: RetryExecutor, bound: Any
) -> None:
    with pytest.raises(PatientContractError):
        executor.execute(make_attempt(Mock(return_value=None)), bound, SequenceDelay(-1.0))


def test_retry_executor_delay_not_pulled_on_success(executor: RetryExecutor) -> None:
    result = executor.execute(
        make_attempt(Mock(return_value="x")), MaxRetriesBound(0), SequenceDelay()
    )
    assert result.value == "x"


def test_retry_executor_factory_returns_non_iterator(executor: RetryExecutor) -> None:
    delay_factory = Mock(spec=BaseDelayFactory)
    delay_factory.create.return_value = [1.0, 2.0]
    operation = Mock(return_value="x")

    with pytest.raises(PatientContractError, match="instead of a delay generator"):
        executor.execute(make_attempt(operation), MaxRetriesBound(3), delay_factory)

    operation.assert_not_called()


def test_retry_executor_attempt_returns_non_outcome(executor: RetryExecutor) -> None:
    with pytest.raises(PatientContractError, match="instead of an ExecutionOutcome"):
        executor.execute(Mock(return_value="x"), MaxRetriesBound(3), FixedDelay(0))


def test_retry_executor_attempt_raises(executor: RetryExecutor) -> None:
    cause = ValueError("broken handler")
    with pytest.raises(PatientContractError, match="Unexpected exception") as exc_info:
        executor.execute(Mock(side_effect=cause), MaxRetriesBound(3), FixedDelay(0))
    assert exc_info.value.__cause__ is cause


def test_retry_executor_attempt_raises_patient_error(executor: RetryExecutor) -> None:
    with pytest.raises(PatientExecutionError):
        executor.execute(
            Mock(side_effect=PatientExecutionError("fatal")), MaxRetriesBound(3), FixedDelay(0)
        )


##########################################
#     Tests for RetryExecutor callbacks  #
##########################################


def test_retry_executor_callbacks_on_success(
    fake_sleep: Sleep, fake_clock: FakeClock
) -> None:
    on_attempt, on_retry, on_success, on_failure = Mock(), Mock(), Mock(), Mock()
    callbacks = CallbackManager(
        CallbackConfig(
            on_attempt=on_attempt, on_retry=on_retry, on_success=on_success, on_failure=on_failure
        )
    )
    executor = RetryExecutor(sleep=fake_sleep, callbacks=callbacks, clock=fake_clock)

    executor.execute(make_attempt(make_operation([None, "x"])), MaxRetriesBound(3), FixedDelay(2.0))

    assert on_attempt.call_args_list == [
        call(AttemptInfo(attempt=1, elapsed_time=0.0)),
        call(AttemptInfo(attempt=2, elapsed_time=2.0)),
    ]
    on_retry.assert_called_once_with(
        RetryInfo(attempt=1, wait_time=2.0, description="None", elapsed_time=0.0)
    )
    on_success.assert_called_once_with(SuccessInfo(attempt=2, value="x", total_time=2.0))
    on_failure.assert_not_called()


def test_retry_executor_callbacks_on_failure(
    fake_sleep: Sleep, fake_clock: FakeClock, mock_callback: Mock
) -> None:
    callbacks = CallbackManager(CallbackConfig(on_failure=mock_callback))
    executor = RetryExecutor(sleep=fake_sleep, callbacks=callbacks, clock=fake_clock)

    executor.execute(make_attempt(Mock(return_value=None)), MaxRetriesBound(2), FixedDelay(1.0))

    mock_callback.assert_called_once_with(
        FailureInfo(attempts=3, descriptions=("None", "None", "None"), total_time=2.0)
    )


def test_retry_executor_logs_failed_attempts(
    executor: RetryExecutor, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level("DEBUG", logger="apatience.retry.executor"):
        executor.execute(make_attempt(Mock(return_value=None)), MaxRetriesBound(1), FixedDelay(1.5))

    records = [record for record in caplog.records if hasattr(record, "failure_description")]
    assert [record.attempt for record in records] == [1, 2]
    assert records[0].wait_time == 1.5
    assert records[0].failure_description == "None"
