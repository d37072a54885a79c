import functools
import logging
from typing import Any, Callable, Tuple, Type

def best_effort(on_failure: Callable[[Exception], Any],
                exceptions: Tuple[Type[BaseException], ...] = (Exception,),
                label: str = None):
    """
    Превращает ошибку корутины в результат неудачи.

    Ошибка логируется как предупреждение и не пробрасывается вызывающему:
    вызывающий получает значение on_failure(exc).
    """
    def decorator(func):
        name = label or func.__name__

        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except exceptions as e:
                logging.getLogger(func.__module__).warning(f"⚠️ {name} failed: {e}")
                return on_failure(e)
        return wrapper
    return decorator
