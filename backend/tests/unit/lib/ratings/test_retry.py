"""Unit tests for the store retry wrapper."""

from unittest.mock import AsyncMock, call, patch

import pytest

from site_ratings.lib.exceptions import StoreConnectionError, StoreError
from site_ratings.lib.ratings.retry import (
    MAX_ATTEMPTS,
    RETRY_DELAY_SECONDS,
    is_transient_error,
    with_retry,
)

CONNECT_MESSAGE = "Could not establish connection. Receiving end does not exist."


class TestIsTransientError:
    """Tests for is_transient_error() classification."""

    def test_store_connection_error_is_transient(self):
        assert is_transient_error(StoreConnectionError("socket closed"))

    def test_message_phrase_is_transient(self):
        assert is_transient_error(RuntimeError(CONNECT_MESSAGE))

    def test_store_rejection_is_not_transient(self):
        assert not is_transient_error(StoreError("duplicate key value violates unique constraint"))

    def test_other_connection_wording_is_not_transient(self):
        """Only the known phrase counts, not any mention of connections."""
        assert not is_transient_error(RuntimeError("connection reset by peer"))


class TestWithRetry:
    """Tests for with_retry()."""

    def test_budget_constants(self):
        assert MAX_ATTEMPTS == 3
        assert RETRY_DELAY_SECONDS == 1.0

    @pytest.mark.asyncio
    async def test_returns_first_success_without_sleeping(self):
        operation = AsyncMock(return_value="ok")

        with patch("site_ratings.lib.ratings.retry.asyncio.sleep", new=AsyncMock()) as mock_sleep:
            result = await with_retry(operation)

        assert result == "ok"
        assert operation.await_count == 1
        mock_sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_succeeds_on_third_attempt_after_transient_failures(self):
        operation = AsyncMock(
            side_effect=[
                StoreConnectionError(CONNECT_MESSAGE),
                RuntimeError(CONNECT_MESSAGE),
                "ok",
            ]
        )

        with patch("site_ratings.lib.ratings.retry.asyncio.sleep", new=AsyncMock()) as mock_sleep:
            result = await with_retry(operation)

        assert result == "ok"
        assert operation.await_count == 3
        # Constant delay, no backoff growth
        assert mock_sleep.await_args_list == [call(1.0), call(1.0)]

    @pytest.mark.asyncio
    async def test_raises_last_failure_when_attempts_exhausted(self):
        first = StoreConnectionError(f"{CONNECT_MESSAGE} (1)")
        second = StoreConnectionError(f"{CONNECT_MESSAGE} (2)")
        third = StoreConnectionError(f"{CONNECT_MESSAGE} (3)")
        operation = AsyncMock(side_effect=[first, second, third])

        with pytest.raises(StoreConnectionError) as exc_info:
            await with_retry(operation, delay_seconds=0)

        assert exc_info.value is third
        assert operation.await_count == 3

    @pytest.mark.asyncio
    async def test_non_transient_failure_propagates_immediately(self):
        failure = StoreError("permission denied for table ratings")
        operation = AsyncMock(side_effect=failure)

        with patch("site_ratings.lib.ratings.retry.asyncio.sleep", new=AsyncMock()) as mock_sleep:
            with pytest.raises(StoreError) as exc_info:
                await with_retry(operation)

        assert exc_info.value is failure
        assert operation.await_count == 1
        mock_sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_non_transient_failure_on_last_attempt_propagates(self):
        final = ValueError("malformed row")
        operation = AsyncMock(
            side_effect=[
                StoreConnectionError(CONNECT_MESSAGE),
                StoreConnectionError(CONNECT_MESSAGE),
                final,
            ]
        )

        with patch("site_ratings.lib.ratings.retry.asyncio.sleep", new=AsyncMock()) as mock_sleep:
            with pytest.raises(ValueError) as exc_info:
                await with_retry(operation)

        assert exc_info.value is final
        assert operation.await_count == 3
        assert mock_sleep.await_count == 2

    @pytest.mark.asyncio
    async def test_custom_attempt_budget(self):
        operation = AsyncMock(side_effect=StoreConnectionError(CONNECT_MESSAGE))

        with pytest.raises(StoreConnectionError):
            await with_retry(operation, max_attempts=5, delay_seconds=0)

        assert operation.await_count == 5

    @pytest.mark.asyncio
    @pytest.mark.parametrize("max_attempts", [0, -1])
    async def test_attempt_budget_below_one_rejected(self, max_attempts):
        operation = AsyncMock(return_value="ok")

        with pytest.raises(ValueError, match="max_attempts"):
            await with_retry(operation, max_attempts=max_attempts)

        operation.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_retry_log_names_operation(self, caplog):
        operation = AsyncMock(side_effect=[StoreConnectionError(CONNECT_MESSAGE), "ok"])

        with caplog.at_level("WARNING", logger="site_ratings.lib.ratings.retry"):
            await with_retry(operation, delay_seconds=0, operation_name="fetch_ratings")

        assert "Transient error in fetch_ratings (attempt 1/3)" in caplog.text
