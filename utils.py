import logging
import time
from asyncio import sleep
from datetime import timedelta
from functools import wraps

import orjson
from httpx import AsyncClient, Timeout
from httpx_secure import httpx_ssrf_protection

from config import USER_AGENT

HTTP = httpx_ssrf_protection(
    AsyncClient(
        headers={'User-Agent': USER_AGENT},
        timeout=Timeout(60, connect=15),
        follow_redirects=True,
    )
)

JSON_DECODE = orjson.loads


def retry_exponential(
    timeout: timedelta | float | None,
    *,
    start: float = 1,
    give_up_on: tuple[type[Exception], ...] = (),
):
    """
    Retry an async function with exponential backoff until the timeout is exceeded.

    Exceptions listed in `give_up_on` are raised immediately.
    """

    if timeout is None:
        timeout_seconds = float('inf')
    elif isinstance(timeout, timedelta):
        timeout_seconds = timeout.total_seconds()
    else:
        timeout_seconds = timeout

    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            ts = time.perf_counter()
            sleep_time = start

            while True:
                try:
                    return await func(*args, **kwargs)
                except give_up_on:
                    raise
                except Exception:
                    logging.warning('%s failed', func.__qualname__, exc_info=True)
                    if (time.perf_counter() + sleep_time) - ts > timeout_seconds:
                        raise
                    await sleep(sleep_time)
                    sleep_time = min(sleep_time * 2, 4 * 3600)  # max 4 hours

        return wrapper

    return decorator
