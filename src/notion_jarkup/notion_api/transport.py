"""Async HTTP transport for the Notion API.

Request lifecycle:

1. Wait for the pacer to open the next request slot.
2. Send the request with auth and version headers.
3. On ``2xx`` -- return the parsed JSON body.
4. On ``429`` -- honour ``Retry-After`` and retry.
5. On ``5xx`` / network error -- exponential backoff and retry.
6. On other ``4xx`` -- raise the matching typed error immediately.
7. When attempts run out -- raise :class:`JarkupRetryExhaustedError`.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import AsyncIterator
from typing import Any

import httpx

from notion_jarkup.config import JarkupConfig
from notion_jarkup.errors import (
    JarkupAuthError,
    JarkupInvalidResponseError,
    JarkupNetworkError,
    JarkupNotFoundError,
    JarkupPermissionError,
    JarkupRetryExhaustedError,
    JarkupValidationError,
)
from notion_jarkup.observability import get_logger, resolve_metrics

from .rate_limit import RequestPacer
from .retries import RETRYABLE_STATUSES, RetryPolicy, retry_reason

log = get_logger("notion_jarkup.transport")

PAGE_SIZE = 100


def _parse_retry_after(response: httpx.Response) -> float | None:
    """Return the ``Retry-After`` header as a float, or ``None``."""
    raw = response.headers.get("retry-after")
    if raw is None:
        return None
    try:
        return float(raw)
    except (ValueError, TypeError):
        return None


def _json_object(response: httpx.Response, method: str, path: str) -> dict:
    """Decode a 2xx body, which must be a JSON object."""
    context = {
        "status_code": response.status_code,
        "path": path,
        "content_type": response.headers.get("content-type"),
    }
    message = f"Non-JSON-object response on {method} {path}: {response.text[:200]!r}"
    try:
        body = response.json()
    except ValueError as exc:
        raise JarkupInvalidResponseError(message=message, context=context, cause=exc) from exc
    if not isinstance(body, dict):
        raise JarkupInvalidResponseError(message=message, context=context)
    return body


def _raise_for_status(response: httpx.Response, method: str, path: str) -> None:
    """Raise the typed error for a non-retryable 4xx response."""
    status = response.status_code
    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}

    notion_message = body.get("message", response.text[:500])
    notion_code = body.get("code", "")

    if status == 401:
        raise JarkupAuthError(
            message=f"Authentication failed on {method} {path}: {notion_message}",
            context={"status_code": status, "notion_code": notion_code},
        )
    if status == 403:
        raise JarkupPermissionError(
            message=f"Permission denied on {method} {path}: {notion_message}",
            context={
                "status_code": status,
                "notion_code": notion_code,
                "operation": f"{method} {path}",
            },
        )
    if status == 404:
        raise JarkupNotFoundError(
            message=f"Resource not found on {method} {path}: {notion_message}",
            context={"status_code": status, "notion_code": notion_code, "path": path},
        )

    raise JarkupValidationError(
        message=f"Client error {status} on {method} {path}: {notion_message}",
        context={"status_code": status, "notion_code": notion_code, "body": body},
    )


class AsyncNotionTransport:
    """Asynchronous HTTP transport with auth, retry, and pacing.

    Parameters
    ----------
    config:
        Connection, retry and pacing settings.
    client:
        Optional pre-built :class:`httpx.AsyncClient`.  When omitted one is
        created from *config* and closed by :meth:`close`.
    """

    def __init__(
        self,
        config: JarkupConfig,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._policy = RetryPolicy.from_config(config)
        self._pacer = RequestPacer(rate_rps=config.rate_limit_rps, burst=10)
        self._metrics = resolve_metrics(config.metrics)

        if client is None:
            client = httpx.AsyncClient(
                base_url=config.base_url,
                headers={
                    "Authorization": f"Bearer {config.token}",
                    "Notion-Version": config.notion_version,
                    "Content-Type": "application/json",
                },
                timeout=httpx.Timeout(config.timeout_seconds),
                proxy=config.http_proxy,
            )
        self._client = client

    async def request(self, method: str, path: str, **kwargs: Any) -> dict:
        """Execute an HTTP request against the Notion API.

        Parameters
        ----------
        method:
            HTTP method.
        path:
            API path relative to ``base_url`` (e.g. ``/blocks/{id}/children``).
        **kwargs:
            Forwarded to :meth:`httpx.AsyncClient.request`.

        Returns
        -------
        dict
            Parsed JSON response body (``{}`` for empty responses).

        Raises
        ------
        JarkupAuthError
            On 401 responses.
        JarkupPermissionError
            On 403 responses.
        JarkupNotFoundError
            On 404 responses.
        JarkupValidationError
            On 400 and other non-retryable 4xx responses.
        JarkupRetryExhaustedError
            When every attempt received a retryable status.
        JarkupNetworkError
            When the last attempt failed at the network level, or at once
            for transport failures that are not worth retrying.
        JarkupInvalidResponseError
            When a 2xx body is not a JSON object.
        """
        last_status: int | None = None

        for attempt in range(self._policy.max_attempts):
            try:
                response = await self._send(method, path, **kwargs)
            except httpx.HTTPError as exc:
                last_status = None
                self._on_network_error(method, path, exc, attempt)
                await self._backoff(method, path, attempt, None)
                continue

            if response.is_success:
                if response.status_code == 204 or not response.content:
                    return {}
                return _json_object(response, method, path)

            last_status = response.status_code
            if last_status not in RETRYABLE_STATUSES:
                _raise_for_status(response, method, path)
            if not self._policy.is_retryable(attempt, status_code=last_status):
                break

            retry_after: float | None = None
            if last_status == 429:
                retry_after = _parse_retry_after(response)
                self._metrics.increment(
                    "notion_jarkup.rate_limited_total",
                    tags={"method": method, "path": path},
                )
                log.warning(
                    "Rate limited by Notion API",
                    extra={
                        "extra_fields": {
                            "op": "request",
                            "method": method,
                            "path": path,
                            "retry_after": retry_after,
                            "attempt": attempt + 1,
                        }
                    },
                )
            await self._backoff(method, path, attempt, last_status, retry_after)

        raise JarkupRetryExhaustedError(
            message=(
                f"All {self._policy.max_attempts} attempts exhausted for {method} {path} "
                f"(last status: {last_status})"
            ),
            context={"attempts": self._policy.max_attempts, "last_status_code": last_status},
        )

    async def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """One paced attempt, with request metrics."""
        waited = await self._pacer.wait()
        if waited > 0:
            self._metrics.timing(
                "notion_jarkup.rate_limit_wait_ms",
                waited * 1000,
                tags={"method": method, "path": path},
            )

        t0 = time.monotonic()
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError:
            self._metrics.increment(
                "notion_jarkup.requests_total",
                tags={"method": method, "path": path, "status": "error"},
            )
            raise

        tags = {"method": method, "path": path, "status": str(response.status_code)}
        self._metrics.increment("notion_jarkup.requests_total", tags=tags)
        self._metrics.timing(
            "notion_jarkup.request_duration_ms",
            (time.monotonic() - t0) * 1000,
            tags=tags,
        )
        return response

    def _on_network_error(
        self,
        method: str,
        path: str,
        exc: Exception,
        attempt: int,
    ) -> None:
        """Log a network failure; raise :class:`JarkupNetworkError` when it
        cannot be retried."""
        log.warning(
            "Request network error",
            extra={
                "extra_fields": {
                    "op": "request",
                    "method": method,
                    "path": path,
                    "attempt": attempt + 1,
                    "error": str(exc),
                }
            },
        )
        if not self._policy.is_retryable(attempt, exception=exc):
            raise JarkupNetworkError(
                message=f"Network error on {method} {path}: {exc}",
                context={"url": path, "attempt": attempt + 1},
                cause=exc,
            ) from exc

    async def _backoff(
        self,
        method: str,
        path: str,
        attempt: int,
        status_code: int | None,
        retry_after: float | None = None,
    ) -> None:
        self._metrics.increment(
            "notion_jarkup.retries_total",
            tags={"method": method, "path": path, "reason": retry_reason(status_code)},
        )
        await asyncio.sleep(self._policy.delay(attempt, retry_after))

    async def paginate(self, path: str, **kwargs: Any) -> AsyncIterator[dict]:
        """Yield every ``results`` item of a cursor-paginated GET endpoint.

        Pages are requested lazily: the next page is fetched only once the
        consumer has taken every item of the current one.
        """
        params: dict[str, Any] = dict(kwargs.pop("params", None) or {})
        params["page_size"] = PAGE_SIZE
        cursor: str | None = None

        while True:
            if cursor is not None:
                params["start_cursor"] = cursor
            data = await self.request("GET", path, params=dict(params), **kwargs)
            for item in data.get("results", []):
                yield item

            if not data.get("has_more", False):
                break
            cursor = data.get("next_cursor")
            if cursor is None:
                break

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> AsyncNotionTransport:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()
