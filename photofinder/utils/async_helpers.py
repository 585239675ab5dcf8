"""Async programming utilities and helpers."""

from __future__ import annotations

import logging
import traceback
from collections import abc
from functools import wraps
from typing import Any, ParamSpec, TypeVar


_T = TypeVar("_T")  # type
_P = ParamSpec("_P")  # params

logger = logging.getLogger("PhotoFinder")


def format_traceback(exc: BaseException, **kwargs: Any) -> str:
    """
    Like `traceback.print_exc` but returns a string. Uses the passed-in exception.
    Any additional `**kwargs` are passed to the underlaying `traceback.format_exception`.
    """
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__, **kwargs))


def task_wrapper(
    afunc: abc.Callable[_P, abc.Coroutine[Any, Any, _T]] | None = None, *, reraise: bool = True
):
    """
    Decorator for async tasks that logs exceptions before they reach the task.

    Args:
        afunc: The async function to wrap
        reraise: If False, the exception is logged and the task finishes quietly.
            Used for background work whose failure only matters to the log.
    """

    def decorator(
        afunc: abc.Callable[_P, abc.Coroutine[Any, Any, _T]],
    ) -> abc.Callable[_P, abc.Coroutine[Any, Any, _T | None]]:
        @wraps(afunc)
        async def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _T | None:
            try:
                return await afunc(*args, **kwargs)
            except Exception:
                logger.exception(f"Exception in {afunc.__name__} task")
                if reraise:
                    raise  # raise up to the wrapping task
            return None

        return wrapper

    if afunc is None:
        return decorator
    return decorator(afunc)
