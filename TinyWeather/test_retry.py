"""Tests for retry module."""
from unittest.mock import Mock

import pytest

from retry import RetryPolicy, call_with_retry
from weather_provider import WeatherProviderError


def test_retry_policy_linear_delay():
    policy = RetryPolicy(max_attempts=4, base_delay_seconds=1.5)
    assert [policy.delay_for(n) for n in (1, 2, 3)] == [1.5, 3.0, 4.5]


@pytest.mark.parametrize("kwargs", [
    {"max_attempts": 0},
    {"base_delay_seconds": -1},
])
def test_retry_policy_validation(kwargs):
    with pytest.raises(ValueError):
        RetryPolicy(**kwargs)


def test_call_with_retry_succeeds_first_time():
    operation = Mock(return_value="ok")
    sleep = Mock()

    assert call_with_retry(operation, RetryPolicy(), sleep=sleep) == "ok"
    assert operation.call_count == 1
    sleep.assert_not_called()


def test_call_with_retry_recovers_after_failures():
    """Test that transient errors are retried with a growing delay."""
    operation = Mock(side_effect=[WeatherProviderError("boom"), WeatherProviderError("boom"), "ok"])
    sleep = Mock()

    result = call_with_retry(operation, RetryPolicy(max_attempts=3, base_delay_seconds=2), sleep=sleep)

    assert result == "ok"
    assert operation.call_count == 3
    assert [c.args[0] for c in sleep.call_args_list] == [2, 4]


def test_call_with_retry_raises_last_error():
    errors = [WeatherProviderError("first"), WeatherProviderError("second")]
    operation = Mock(side_effect=errors)
    sleep = Mock()

    with pytest.raises(WeatherProviderError) as exc_info:
        call_with_retry(operation, RetryPolicy(max_attempts=2), sleep=sleep)

    assert exc_info.value is errors[1]
    # No wait after the final attempt
    assert sleep.call_count == 1


def test_call_with_retry_only_retries_listed_errors():
    operation = Mock(side_effect=KeyError("not transient"))
    sleep = Mock()

    with pytest.raises(KeyError):
        call_with_retry(operation, RetryPolicy(), retry_on=(WeatherProviderError,), sleep=sleep)

    assert operation.call_count == 1
    sleep.assert_not_called()
