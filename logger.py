import logging
import time
import uuid

from fastapi import Request

import config

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"

log = logging.getLogger("budget")


# -----------------------------
# Logging setup
# -----------------------------
def configure_logging():
    """Configure root logging once, to ``config.LOG_FILE`` or stderr."""
    kwargs = {"level": config.LOG_LEVEL, "format": LOG_FORMAT}
    if config.LOG_FILE:
        kwargs["filename"] = config.LOG_FILE
    logging.basicConfig(**kwargs)


def get_trace_id(request: Request) -> str | None:
    return getattr(request.state, "trace_id", None)


# -----------------------------
# Request id middleware
# -----------------------------
async def request_id_middleware(request: Request, call_next):
    """Tag each request with a trace id and log one line when it finishes.

    An incoming ``X-Request-Id`` header is reused so callers can correlate
    their own logs; otherwise a fresh uuid4 is issued.
    """
    trace_id = request.headers.get("x-request-id") or str(uuid.uuid4())
    request.state.trace_id = trace_id

    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000

    response.headers["X-Request-Id"] = trace_id
    log.info(
        f"{request.method} {request.url.path} -> {response.status_code} "
        f"({elapsed_ms:.1f} ms) trace_id={trace_id}"
    )
    return response
