import time
import logging

import httpx

logger = logging.getLogger(__name__)

_START_KEY = "timing.start"


async def _mark_start(request: httpx.Request):
    request.extensions[_START_KEY] = time.perf_counter()


async def _log_latency(response: httpx.Response):
    request = response.request
    start = request.extensions.get(_START_KEY)
    latency_ms = int((time.perf_counter() - start) * 1000) if start is not None else -1
    logger.debug(
        "%s %s -> %s (%d ms)",
        request.method, request.url, response.status_code, latency_ms,
    )


def timing_hooks() -> dict:
    """httpx.AsyncClient(event_hooks=...)에 넘길 요청 지연 측정 훅"""
    return {"request": [_mark_start], "response": [_log_latency]}
