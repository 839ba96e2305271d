"""Unit tests for retry utilities with exponential backoff."""

from unittest.mock import Mock

import pytest

from pinmatch.utils.retry import RetryableError, RetryConfig, retry_with_backoff


@pytest.mark.unit
class TestRetryConfig:
    """Test RetryConfig dataclass."""

    def test_default_config(self):
        """Test RetryConfig with default values."""
        config = RetryConfig()
        assert config.max_retries == 2
        assert config.initial_delay == 0.5
        assert config.max_delay == 10.0
        assert config.exponential_base == 2.0
        assert config.jitter is True
        assert config.retryable_exceptions == (Exception,)

    def test_calculate_delay_no_jitter(self):
        """Test delay calculation without jitter."""
        config = RetryConfig(initial_delay=1.0, exponential_base=2.0, jitter=False)

        assert config.calculate_delay(0) == 1.0
        assert config.calculate_delay(1) == 2.0
        assert config.calculate_delay(2) == 4.0

    def test_calculate_delay_with_max(self):
        """Test delay calculation respects max_delay."""
        config = RetryConfig(initial_delay=10.0, max_delay=30.0, jitter=False)

        # 10 * 2^5 = 320, capped at 30
        assert config.calculate_delay(5) == 30.0

    def test_calculate_delay_with_jitter(self):
        """Test jittered delay stays between 50% and 100% of base delay."""
        config = RetryConfig(initial_delay=10.0, max_delay=100.0, jitter=True)

        for _ in range(20):
            assert 5.0 <= config.calculate_delay(0) <= 10.0

    def test_config_is_frozen(self):
        config = RetryConfig()
        with pytest.raises(AttributeError):
            config.max_retries = 5


@pytest.mark.unit
class TestRetryWithBackoff:
    """Test retry_with_backoff decorator."""

    def test_successful_first_attempt(self):
        """Test function succeeds on first attempt without sleeping."""
        mock_func = Mock(return_value="success", __name__="mock_func")
        sleep = Mock()
        decorated = retry_with_backoff(sleep=sleep)(mock_func)

        assert decorated() == "success"
        assert mock_func.call_count == 1
        sleep.assert_not_called()

    def test_retry_on_retryable_exception(self):
        """Test function retries on retryable exception."""
        mock_func = Mock(
            side_effect=[ValueError("error 1"), ValueError("error 2"), "success"],
            __name__="mock_func",
        )
        config = RetryConfig(max_retries=3, jitter=False)
        decorated = retry_with_backoff(config, sleep=Mock())(mock_func)

        assert decorated() == "success"
        assert mock_func.call_count == 3

    def test_max_retries_exhausted(self):
        """Test function raises after max retries exhausted."""
        mock_func = Mock(side_effect=ValueError("persistent error"), __name__="mock_func")
        config = RetryConfig(max_retries=2, jitter=False)
        decorated = retry_with_backoff(config, sleep=Mock())(mock_func)

        with pytest.raises(ValueError, match="persistent error"):
            decorated()

        # Initial call plus two retries
        assert mock_func.call_count == 3

    def test_zero_retries_calls_once(self):
        mock_func = Mock(side_effect=ValueError("boom"), __name__="mock_func")
        sleep = Mock()
        decorated = retry_with_backoff(RetryConfig(max_retries=0), sleep=sleep)(mock_func)

        with pytest.raises(ValueError):
            decorated()

        assert mock_func.call_count == 1
        sleep.assert_not_called()

    def test_non_retryable_exception_not_retried(self):
        """Test non-retryable exceptions are raised immediately."""
        mock_func = Mock(side_effect=TypeError("non-retryable"), __name__="mock_func")
        config = RetryConfig(max_retries=3, retryable_exceptions=(ValueError,))
        decorated = retry_with_backoff(config, sleep=Mock())(mock_func)

        with pytest.raises(TypeError, match="non-retryable"):
            decorated()

        assert mock_func.call_count == 1

    def test_exponential_backoff_delay(self):
        """Test exponential backoff delays are passed to sleep."""
        mock_func = Mock(side_effect=[ValueError(), ValueError(), "success"], __name__="mock_func")
        sleep = Mock()
        config = RetryConfig(max_retries=3, initial_delay=1.0, jitter=False)
        decorated = retry_with_backoff(config, sleep=sleep)(mock_func)

        assert decorated() == "success"

        assert sleep.call_count == 2
        assert sleep.call_args_list[0][0][0] == 1.0
        assert sleep.call_args_list[1][0][0] == 2.0

    def test_arguments_passed_through(self):
        mock_func = Mock(return_value=42, __name__="mock_func")
        decorated = retry_with_backoff(sleep=Mock())(mock_func)

        decorated(b"image", flag=True)

        mock_func.assert_called_once_with(b"image", flag=True)


@pytest.mark.unit
class TestRetryableError:
    """Test RetryableError exception."""

    def test_retryable_error_is_exception(self):
        error = RetryableError("test error")
        assert isinstance(error, Exception)
        assert str(error) == "test error"

    def test_retry_on_retryable_error(self):
        """Test retry works with RetryableError."""
        mock_func = Mock(side_effect=[RetryableError("error"), "success"], __name__="mock_func")
        config = RetryConfig(max_retries=2, retryable_exceptions=(RetryableError,))
        decorated = retry_with_backoff(config, sleep=Mock())(mock_func)

        assert decorated() == "success"
        assert mock_func.call_count == 2
