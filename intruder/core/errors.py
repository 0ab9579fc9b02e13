"""Error boundary for intruder helpers.

Wrapped callables never raise: a failure is logged with its context and
the call returns None, so "failed" and "returned None" look the same to the
caller.
"""

import functools
from typing import Any, Callable, Optional, TypeVar

from intruder.reporters.console import Log

T = TypeVar("T")

_default_log = Log(verbose=1)


def handle_error(error: BaseException, context: str, logger: Optional[Any] = None) -> None:
    """Report *error* raised while doing *context*."""
    log = logger if logger is not None else _default_log
    log.error(f"Intruder error ({context}): {type(error).__name__}: {error}")


def with_error_handling(
    fn: Callable[..., T],
    context: str,
    logger: Optional[Any] = None,
) -> Callable[..., Optional[T]]:
    """Wrap *fn* so exceptions are logged and turned into None.

    *logger* is anything with an ``error(msg)`` method; the console ``Log``
    is used when omitted.
    """

    @functools.wraps(fn)
    def wrapper(*args, **kwargs) -> Optional[T]:
        try:
            return fn(*args, **kwargs)
        except Exception as e:
            handle_error(e, context, logger)
            return None

    return wrapper
