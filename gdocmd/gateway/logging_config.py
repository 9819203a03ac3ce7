"""Logging configuration: loguru setup, standard logging interception, request context."""

import logging
import sys
import uuid
from collections.abc import Callable
from pathlib import Path

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

from gdocmd.gateway.exceptions import APIError


class InterceptHandler(logging.Handler):
    """Route standard library logging to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        # Get corresponding loguru level
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller frame (skip logging internals)
        frame, depth = sys._getframe(), 0
        while frame and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<magenta>{extra[request_id]}</magenta> | <cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


def configure_logging(log_dir: Path | None, level: str = "INFO") -> None:
    """Log to stdout, and to `gdocmd.jsonl` under log_dir when one is given.

    Records outside a request carry request_id "-".
    """
    logger.remove()
    logger.configure(extra={"request_id": "-"})
    logger.add(sys.stdout, format=CONSOLE_FORMAT, level=level, colorize=True)

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_dir / "gdocmd.jsonl",
            format="{message}",
            level=level,
            serialize=True,
            rotation="20 MB",
            retention="14 days",
            compression="gz",
        )

    # Intercept standard logging → loguru
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Add request_id to logging context for correlation."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = uuid.uuid4().hex[:8]
        request.state.request_id = request_id

        with logger.contextualize(request_id=request_id):
            response = await call_next(request)

        return response


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Map APIError subclasses to their status code."""
    logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unhandled exceptions with request context."""
    request_id = getattr(request.state, "request_id", None)

    context_parts = [f"{request.method} {request.url.path}"]
    if request_id:
        context_parts.append(f"request_id={request_id}")

    context = " ".join(context_parts)
    logger.exception(f"Unhandled exception on {context}: {exc}")

    return JSONResponse(status_code=500, content={"detail": "Internal server error"})
