"""Protocol logging for Humanity API calls.

Every HTTP exchange made by the default client is captured, grouped by the
SDK operation that made it, and written to the ``humanity_sdk.protocol``
logger with credentials masked.

Log levels:
- ERROR: failed exchanges only
- INFO: one summary line per exchange
- DEBUG: summary plus request and response headers
- TRACE: headers plus bodies, unmasked only when explicitly enabled
"""

from __future__ import annotations

import itertools
import logging
import re
import time
import uuid
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field, fields
from datetime import UTC, datetime
from enum import IntEnum
from typing import Any

import httpx

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

logger = logging.getLogger("humanity_sdk.protocol")

BODY_LOG_LIMIT = 2000
REDACTED = "[REDACTED]"


class LogLevel(IntEnum):
    """Verbosity of protocol logging."""

    ERROR = logging.ERROR
    INFO = logging.INFO
    DEBUG = logging.DEBUG
    TRACE = TRACE


_SECRET_NAMES = ("client_secret", "code", "access_token", "refresh_token", "id_token", "code_verifier")
_AUTH_SCHEMES = ("Bearer", "Basic")

SENSITIVE_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    # form bodies and query strings
    *((re.compile(rf"(\b{name}=)[^&\s]+", re.IGNORECASE), rf"\1{REDACTED}") for name in _SECRET_NAMES),
    # header lines and bare header values
    *(
        (re.compile(rf"({prefix}{scheme}\s+)\S+", re.IGNORECASE), rf"\1{REDACTED}")
        for scheme in _AUTH_SCHEMES
        for prefix in (r"Authorization:\s*", "^")
    ),
    # JSON bodies
    *(
        (re.compile(rf'"({name})"\s*:\s*"[^"]+"', re.IGNORECASE), rf'"\1": "{REDACTED}"')
        for name in (*_SECRET_NAMES, "token")
    ),
    (re.compile(r'"(tokens)"\s*:\s*\[[^\]]*\]', re.IGNORECASE), rf'"\1": ["{REDACTED}"]'),
]


def redact_sensitive(text: str) -> str:
    """Mask tokens, secrets, codes and verifiers in ``text``."""
    for pattern, replacement in SENSITIVE_PATTERNS:
        text = pattern.sub(replacement, text)
    return text


def _clip(body: str) -> str:
    if len(body) <= BODY_LOG_LIMIT:
        return body
    return body[:BODY_LOG_LIMIT] + "..."


def _decode(content: bytes) -> str | None:
    if not content:
        return None
    try:
        return content.decode("utf-8")
    except UnicodeDecodeError:
        return "<binary content>"


# Fields of HttpExchange whose values may carry credentials
_MASKED_TEXT_FIELDS = frozenset({"url", "request_body", "response_body"})
_MASKED_HEADER_FIELDS = frozenset({"request_headers", "response_headers"})


@dataclass
class HttpExchange:
    """One request/response pair sent to the Humanity API."""

    id: str
    timestamp: datetime
    method: str
    url: str
    request_headers: dict[str, str] = field(default_factory=dict)
    request_body: str | None = None
    status_code: int | None = None
    response_headers: dict[str, str] = field(default_factory=dict)
    response_body: str | None = None
    elapsed_ms: float | None = None
    error: str | None = None

    def to_dict(self, include_sensitive: bool = False) -> dict[str, Any]:
        """Serialize the exchange, masking credentials unless asked not to."""
        mask: Callable[[str], str] = (lambda value: value) if include_sensitive else redact_sensitive
        data: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name in _MASKED_HEADER_FIELDS:
                value = {name: mask(header) for name, header in value.items()}
            elif f.name in _MASKED_TEXT_FIELDS and value is not None:
                value = mask(value)
            elif isinstance(value, datetime):
                value = value.isoformat()
            data[f.name] = value
        return data

    def format_log(self, level: LogLevel, include_sensitive: bool = False) -> str:
        """Render the exchange as log text.

        Args:
            level: INFO gives a summary, DEBUG adds headers, TRACE adds bodies.
            include_sensitive: Leave credentials unmasked.
        """
        show: Callable[[str], str] = (lambda value: value) if include_sensitive else redact_sensitive

        lines = [f"HTTP {self.method} {show(self.url)} -> {self.status_code or 'ERROR'}"]
        if self.elapsed_ms is not None:
            lines.append(f"  Duration: {self.elapsed_ms:.1f}ms")
        if self.error:
            lines.append(f"  Error: {self.error}")

        if level <= LogLevel.DEBUG:
            for title, headers in (("Request Headers", self.request_headers), ("Response Headers", self.response_headers)):
                if headers or title == "Request Headers":
                    lines.append(f"  {title}:")
                    lines.extend(f"    {name}: {show(value)}" for name, value in headers.items())

        if level <= LogLevel.TRACE:
            for title, body in (("Request Body", self.request_body), ("Response Body", self.response_body)):
                if body:
                    lines.append(f"  {title}:")
                    lines.append(f"    {_clip(show(body))}")

        return "\n".join(lines)


@dataclass
class OperationLog:
    """Exchanges made while one SDK operation ran."""

    operation: str
    operation_id: str
    exchanges: list[HttpExchange] = field(default_factory=list)
    started_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    finished_at: datetime | None = None

    def record(self, exchange: HttpExchange) -> None:
        self.exchanges.append(exchange)

    def finish(self) -> None:
        self.finished_at = datetime.now(UTC)

    def to_dict(self, include_sensitive: bool = False) -> dict[str, Any]:
        """Serialize the operation and its exchanges."""
        return {
            "operation": self.operation,
            "operation_id": self.operation_id,
            "started_at": self.started_at.isoformat(),
            "finished_at": self.finished_at.isoformat() if self.finished_at else None,
            "exchange_count": len(self.exchanges),
            "exchanges": [exchange.to_dict(include_sensitive) for exchange in self.exchanges],
        }


class ProtocolLogger:
    """Collects exchanges per operation and emits them to ``humanity_sdk.protocol``.

    The operation in progress is tracked per thread (and per asyncio task), so
    one logger can be shared by clients used concurrently.

    Attributes:
        level: Configured verbosity.
        trace_enabled: TRACE output (unmasked bodies) is only produced when
            this is set; otherwise a TRACE level behaves like DEBUG.
    """

    def __init__(self, level: LogLevel = LogLevel.INFO, trace_enabled: bool = False) -> None:
        self.level = level
        self.trace_enabled = trace_enabled
        self._current: ContextVar[OperationLog | None] = ContextVar(
            f"humanity_sdk_operation_{id(self):x}", default=None
        )

    @property
    def effective_level(self) -> LogLevel:
        """Get the level actually applied after the TRACE opt-in check."""
        if self.level == LogLevel.TRACE and not self.trace_enabled:
            return LogLevel.DEBUG
        return self.level

    @property
    def current_operation(self) -> OperationLog | None:
        """Get the log of the operation in progress in this context, if any."""
        return self._current.get()

    def begin(self, operation: str, operation_id: str | None = None) -> OperationLog:
        """Start collecting exchanges for ``operation``."""
        log = OperationLog(
            operation=operation,
            operation_id=operation_id or f"{operation}_{uuid.uuid4().hex[:8]}",
        )
        self._current.set(log)
        logger.debug(f"Begin {operation} ({log.operation_id})")
        return log

    def finish(self) -> OperationLog | None:
        """Close the operation in progress and return its log."""
        log = self._current.get()
        if log is not None:
            self._current.set(None)
            log.finish()
            logger.debug(f"Finished {log.operation} ({log.operation_id}): {len(log.exchanges)} exchanges")
        return log

    @contextmanager
    def operation(self, operation: str) -> Iterator[OperationLog]:
        """Collect exchanges for the duration of a ``with`` block."""
        log = self.begin(operation)
        try:
            yield log
        finally:
            if self._current.get() is log:
                self.finish()

    def record(self, exchange: HttpExchange) -> None:
        """Attach an exchange to the current operation and log it."""
        current = self._current.get()
        if current is not None:
            current.record(exchange)

        level = self.effective_level
        unmasked = self.trace_enabled and level == LogLevel.TRACE
        if level <= LogLevel.INFO:
            logger.log(logging.DEBUG if level <= LogLevel.DEBUG else logging.INFO, exchange.format_log(level, unmasked))
        if exchange.error:
            logger.error(f"HTTP {exchange.method} {redact_sensitive(exchange.url)} failed: {exchange.error}")


class LoggingClient(httpx.Client):
    """``httpx.Client`` that reports every exchange to a :class:`ProtocolLogger`.

    Redirects are not followed unless ``follow_redirects=True`` is passed.
    """

    def __init__(self, protocol_logger: ProtocolLogger | None = None, **kwargs: Any) -> None:
        kwargs.setdefault("follow_redirects", False)
        super().__init__(**kwargs)
        self.protocol_logger = protocol_logger or get_protocol_logger()
        self._sequence = itertools.count(1)

    def send(self, request: httpx.Request, **kwargs: Any) -> httpx.Response:  # type: ignore[override]
        exchange = HttpExchange(
            id=f"http_{next(self._sequence):04d}",
            timestamp=datetime.now(UTC),
            method=request.method,
            url=str(request.url),
            request_headers=dict(request.headers),
            request_body=_decode(request.content),
        )
        started = time.perf_counter()
        try:
            response = super().send(request, **kwargs)
        except httpx.HTTPError as e:
            exchange.error = str(e)
            raise
        else:
            exchange.status_code = response.status_code
            exchange.response_headers = dict(response.headers)
            exchange.response_body = response.text
            return response
        finally:
            exchange.elapsed_ms = (time.perf_counter() - started) * 1000
            self.protocol_logger.record(exchange)


_default_logger: ProtocolLogger | None = None


def get_protocol_logger() -> ProtocolLogger:
    """Get the process-wide default protocol logger, creating it on first use."""
    global _default_logger
    if _default_logger is None:
        _default_logger = ProtocolLogger()
    return _default_logger


def set_protocol_logger(protocol_logger: ProtocolLogger) -> None:
    """Replace the process-wide default protocol logger."""
    global _default_logger
    _default_logger = protocol_logger


def parse_log_level(level: LogLevel | str) -> LogLevel:
    """Parse a level name (ERROR, INFO, DEBUG, TRACE). Unknown names map to INFO."""
    if isinstance(level, LogLevel):
        return level
    return LogLevel.__members__.get(level.upper(), LogLevel.INFO)


def configure_logging(
    level: LogLevel | str = LogLevel.INFO,
    trace_enabled: bool = False,
    log_file: str | None = None,
) -> ProtocolLogger:
    """Attach handlers to the protocol logger and install a default ProtocolLogger.

    Args:
        level: Level or level name.
        trace_enabled: Allow TRACE output, which includes credentials.
        log_file: Also write to this file.

    Returns:
        The new default ProtocolLogger.
    """
    level = parse_log_level(level)

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    formatter = logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
    logger.handlers.clear()
    logger.setLevel(level)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    protocol_logger = ProtocolLogger(level=level, trace_enabled=trace_enabled)
    set_protocol_logger(protocol_logger)
    if trace_enabled:
        logger.warning("TRACE protocol logging enabled: tokens and client secrets will appear in logs")
    return protocol_logger
