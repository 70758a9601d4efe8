from concurrent.futures import Future
from typing import Any


def immediate_failure(error: BaseException) -> Future:
    """Future that has already failed with error."""
    future: Future = Future()
    future.set_exception(error)
    return future


def immediate_success(value: Any = None) -> Future:
    future: Future = Future()
    future.set_result(value)
    return future
