# newsdesk/core/singleflight.py
import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Hashable

logger = logging.getLogger(__name__)


class SingleFlight:
    """
    At most one in-flight call per key. Callers arriving while a call for the
    same key is running await that call's result (or its exception) instead of
    starting their own.
    """

    def __init__(self):
        self._calls: Dict[Hashable, asyncio.Future] = {}

    def in_flight(self, key: Hashable) -> bool:
        return key in self._calls

    async def do(self, key: Hashable, fn: Callable[[], Awaitable[Any]]) -> Any:
        fut = self._calls.get(key)
        if fut is not None:
            logger.info("Joining in-flight call for %r", key)
            return await asyncio.shield(fut)

        fut = asyncio.get_running_loop().create_future()
        self._calls[key] = fut
        try:
            result = await fn()
        except Exception as e:
            fut.set_exception(e)
            # mark retrieved so a leader without followers doesn't log a warning
            fut.exception()
            raise
        else:
            fut.set_result(result)
            return result
        finally:
            if not fut.done():
                fut.cancel()
            self._calls.pop(key, None)
