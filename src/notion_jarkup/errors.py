"""Error hierarchy for notion-jarkup.

* **Hard errors** -- :class:`JarkupTransportError` and
  :class:`JarkupParseError` subclasses.  They propagate out of
  :meth:`BlockConverter.convert` and abort the whole conversion.
* **Soft errors** -- :class:`JarkupFetchError`.  Raised only inside the
  enrichment layer and always absorbed there; callers of the converter
  never see it.

Subclasses are built with keyword arguments only
(``message=``, ``context=``, ``cause=``); each fixes its own ``code``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

# ---------------------------------------------------------------------------
# Error code enum
# ---------------------------------------------------------------------------

class ErrorCode(str, Enum):
    TRANSPORT_ERROR = "TRANSPORT_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    AUTH_ERROR = "AUTH_ERROR"
    PERMISSION_ERROR = "PERMISSION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    RETRY_EXHAUSTED = "RETRY_EXHAUSTED"
    NETWORK_ERROR = "NETWORK_ERROR"
    INVALID_RESPONSE = "INVALID_RESPONSE"
    PARSE_ERROR = "PARSE_ERROR"
    NESTING_TOO_DEEP = "NESTING_TOO_DEEP"
    COMPONENT_SHAPE = "COMPONENT_SHAPE"
    FETCH_ERROR = "FETCH_ERROR"


# ---------------------------------------------------------------------------
# Base error
# ---------------------------------------------------------------------------

class JarkupError(Exception):
    """Base exception for all notion-jarkup errors.

    ``context`` holds structured diagnostics (keys listed per subclass);
    ``cause`` is also set as ``__cause__``.
    """

    def __init__(
        self,
        code: str,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.code: str = code
        self.message: str = message
        self.context: dict[str, Any] = context or {}
        self.cause: Exception | None = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        ctx = f", context={self.context!r}" if self.context else ""
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r}{ctx})"


class _CodedError(JarkupError):
    """A :class:`JarkupError` whose code is fixed by the class."""

    default_code: str = ErrorCode.TRANSPORT_ERROR
    default_message: str = "Error"

    def __init__(
        self,
        message: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
        code: str | None = None,
    ) -> None:
        super().__init__(
            code=code or self.default_code,
            message=message or self.default_message,
            context=context,
            cause=cause,
        )


# ---------------------------------------------------------------------------
# Transport errors (hard)
# ---------------------------------------------------------------------------

class JarkupTransportError(_CodedError):
    """Base class for failures talking to the Notion API."""

    default_message = "Transport error"


class JarkupValidationError(JarkupTransportError):
    """400 or another non-retryable 4xx.

    Context keys: ``status_code``, ``notion_code``, ``body``.
    """

    default_code = ErrorCode.VALIDATION_ERROR


class JarkupAuthError(JarkupTransportError):
    """401: the integration token is invalid or expired.

    Context keys: ``status_code``, ``notion_code``.
    """

    default_code = ErrorCode.AUTH_ERROR


class JarkupPermissionError(JarkupTransportError):
    """403: the integration cannot read the block.

    Context keys: ``status_code``, ``notion_code``, ``operation``.
    """

    default_code = ErrorCode.PERMISSION_ERROR


class JarkupNotFoundError(JarkupTransportError):
    """404, or a block the integration was never shared with.

    Context keys: ``status_code``, ``notion_code``, ``path``.
    """

    default_code = ErrorCode.NOT_FOUND


class JarkupRetryExhaustedError(JarkupTransportError):
    """Every attempt got a retryable status.

    Context keys: ``attempts``, ``last_status_code``.
    """

    default_code = ErrorCode.RETRY_EXHAUSTED


class JarkupNetworkError(JarkupTransportError):
    """An httpx transport failure (timeout, DNS, reset, protocol, proxy).

    Context keys: ``url``, ``attempt``.
    """

    default_code = ErrorCode.NETWORK_ERROR


class JarkupInvalidResponseError(JarkupTransportError):
    """A 2xx response whose body is not a JSON object.

    Context keys: ``status_code``, ``path``, ``content_type``.
    """

    default_code = ErrorCode.INVALID_RESPONSE


# ---------------------------------------------------------------------------
# Parse errors (hard)
# ---------------------------------------------------------------------------

class JarkupParseError(_CodedError):
    """A block or rich-text record does not have the expected structure.

    Context keys: ``block_id``, ``block_type``, ``span_type``, ``reason``
    (whichever apply).
    """

    default_code = ErrorCode.PARSE_ERROR
    default_message = "Parse error"


class JarkupNestingDepthError(JarkupParseError):
    """Context keys: ``block_id``, ``depth``, ``limit``."""

    default_code = ErrorCode.NESTING_TOO_DEEP


class JarkupComponentShapeError(JarkupParseError):
    """A component slot was given children of the wrong kind.

    Context keys: ``component``, ``slot``, ``expected``, ``got``.
    """

    default_code = ErrorCode.COMPONENT_SHAPE


# ---------------------------------------------------------------------------
# Enrichment errors (soft)
# ---------------------------------------------------------------------------

class JarkupFetchError(_CodedError):
    """An enrichment URL could not be fetched or decoded.

    Never escapes :class:`~notion_jarkup.enrich.MetadataEnricher`.

    Context keys: ``url``, ``status_code`` (when a response arrived).
    """

    default_code = ErrorCode.FETCH_ERROR
    default_message = "Fetch error"
