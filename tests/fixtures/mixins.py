"""Test mixins for reusable test patterns.

Provides base classes with common testing utilities for assertions,
async operations, and test patterns.
"""

import asyncio
from typing import Any, Awaitable, TypeVar
from unittest.mock import AsyncMock

from neuroglia.core import OperationResult

T = TypeVar("T")


# ============================================================================
# ASYNC TEST MIXINS
# ============================================================================


class AsyncTestMixin:
    """Mixin providing utilities for async tests."""

    @staticmethod
    async def await_with_timeout(coro: Awaitable[T], timeout: float = 5.0, error_msg: str | None = None) -> T:
        """Await a coroutine with timeout."""
        try:
            result: T = await asyncio.wait_for(coro, timeout=timeout)
            return result
        except asyncio.TimeoutError as e:
            msg: str = error_msg or f"Operation timed out after {timeout}s"
            raise AssertionError(msg) from e

    @staticmethod
    async def gather_with_timeout(*coros: Awaitable[Any], timeout: float = 5.0) -> list[Any]:
        """Run coroutines concurrently on the current loop and collect their results."""
        return await asyncio.wait_for(asyncio.gather(*coros), timeout=timeout)


# ============================================================================
# ASSERTION MIXINS
# ============================================================================


class AssertionMixin:
    """Mixin providing custom assertion helpers."""

    @staticmethod
    def assert_status(result: OperationResult, expected_status: int) -> None:
        """Assert an OperationResult carries the expected HTTP status."""
        assert result.status == expected_status, f"Expected status {expected_status}, got {result.status}: {result.detail}"

    @staticmethod
    def assert_task_ids(tasks: list[Any], expected_ids: list[str]) -> None:
        """Assert a list of tasks holds exactly the expected ids, in order."""
        actual_ids: list[str] = [task.id for task in tasks]
        assert actual_ids == expected_ids, f"Expected task ids {expected_ids}, got {actual_ids}"

    @staticmethod
    def assert_dict_contains(actual: dict[str, Any], expected: dict[str, Any]) -> None:
        """Assert actual dict contains all key-value pairs from expected dict."""
        for key, value in expected.items():
            assert key in actual, f"Key '{key}' not found in actual dict"
            assert actual[key] == value, f"Value for key '{key}' doesn't match: {actual[key]} != {value}"

    @staticmethod
    def assert_list_length(actual: list[Any], expected_length: int) -> None:
        """Assert list has expected length with helpful error message."""
        actual_length: int = len(actual)
        assert actual_length == expected_length, f"Expected list length {expected_length}, got {actual_length}"


# ============================================================================
# MOCK HELPER MIXINS
# ============================================================================


class MockHelperMixin:
    """Mixin providing utilities for working with mocks."""

    @staticmethod
    def create_async_mock(return_value: Any = None) -> AsyncMock:
        """Create an AsyncMock with optional return value."""
        mock: AsyncMock = AsyncMock()
        mock.return_value = return_value
        return mock

    @staticmethod
    def published_events(cloud_event_bus: Any) -> list[Any]:
        """Return the cloud events pushed onto a mocked bus output stream."""
        return [call.args[0] for call in cloud_event_bus.output_stream.on_next.call_args_list]


# ============================================================================
# COMBINED TEST BASE
# ============================================================================


class BaseTestCase(
    AsyncTestMixin,
    AssertionMixin,
    MockHelperMixin,
):
    """Combined base test class with all mixins.

    Use this as a base class for test classes that need multiple utilities.
    """

    pass
