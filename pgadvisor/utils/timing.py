import logging
from functools import wraps
from time import perf_counter
from typing import Callable

from pgadvisor.static.vars import K10, APP_NAME_UPPER

__all__ = ['time_decorator']
_logger = logging.getLogger(APP_NAME_UPPER)


def time_decorator(func: Callable):
    @wraps(func)
    def wrapper(*args, **kwargs):
        start_time = perf_counter()
        result = func(*args, **kwargs)
        _logger.debug(f"Time elapsed for {func.__name__}: {(perf_counter() - start_time) * K10:.2f} ms.")
        return result

    return wrapper
