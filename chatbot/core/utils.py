"""Utility functions for the chatbot framework."""

import inspect
import logging
import sys
from collections.abc import Callable
from typing import Any

from ..config.settings import settings


async def call_maybe_async(func: Callable, *args: Any, **kwargs: Any) -> Any:
    """
    Call a plugin hook or command callback, awaiting the result if needed.

    Hooks may be plain functions, coroutine functions, or plain functions
    returning an awaitable (bound ``functools.partial`` objects and mocks).

    Args:
        func: The callable to invoke
        *args: Positional arguments forwarded to the callable
        **kwargs: Keyword arguments forwarded to the callable

    Returns:
        The (awaited) return value of the callable
    """
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        return await result
    return result


def setup_logging(level: str | None = None) -> None:
    """Setup logging configuration."""
    logging.basicConfig(
        level=getattr(logging, (level or settings.log_level).upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
