"""HTTP transport for the document service API.

The transport handles the full request lifecycle:

1. Acquire a token-bucket slot (wait if needed).
2. Send the HTTP request with the bearer token.
3. On ``2xx`` -- return the parsed JSON response.
4. On ``429`` -- honour ``Retry-After``, sleep, and retry.
5. On ``5xx`` / network error -- exponential backoff and retry.
6. On non-retryable ``4xx`` -- raise the matching typed error immediately.
7. On max attempts exceeded -- raise :class:`FimRetryExhaustedError`.
"""

from __future__ import annotations

import json as _json
import sys
import time
from collections.abc import Callable
from typing import Any

import httpx

from fimigrate.config import MigrationConfig
from fimigrate.errors import (
    FimAuthError,
    FimConflictError,
    FimNetworkError,
    FimNotFoundError,
    FimPermissionError,
    FimRetryExhaustedError,
    FimValidationError,
)
from fimigrate.observability import get_logger, resolve_metrics

from .rate_limit import TokenBucket
from .retries import RETRYABLE_EXCEPTIONS, RETRYABLE_STATUSES, compute_backoff, should_retry

log = get_logger("fimigrate.transport")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _parse_retry_after(response: httpx.Response) -> float | None:
    """Extract the ``Retry-After`` header value as a float, or ``None``."""
    raw = response.headers.get("retry-after")
    if raw is None:
        return None
    try:
        return float(raw)
    except (ValueError, TypeError):
        return None


def _raise_for_status(response: httpx.Response, method: str, path: str) -> None:
    """Raise the :class:`FimError` subclass matching a non-retryable 4xx."""
    status = response.status_code
    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}

    api_message = body.get("message", response.text[:500])
    api_code = body.get("code", "")

    if status == 401:
        raise FimAuthError(
            message=f"Authentication failed on {method} {path}: {api_message}",
            context={"status_code": status, "api_code": api_code},
        )
    if status == 403:
        raise FimPermissionError(
            message=f"Permission denied on {method} {path}: {api_message}",
            context={
                "status_code": status,
                "api_code": api_code,
                "operation": f"{method} {path}",
            },
        )
    if status == 404:
        raise FimNotFoundError(
            message=f"Resource not found on {method} {path}: {api_message}",
            context={"status_code": status, "api_code": api_code, "path": path},
        )
    if status == 409:
        raise FimConflictError(
            message=f"Conflict on {method} {path}: {api_message}",
            context={"status_code": status, "api_code": api_code},
        )

    # 400 and any other client error.
    raise FimValidationError(
        message=f"Client error {status} on {method} {path}: {api_message}",
        context={"status_code": status, "api_code": api_code, "body": body},
    )


def _dump_payload(
    method: str,
    url: str,
    payload: Any,
    response_status: int | None,
    response_body: Any | None,
    token: str | None = None,
) -> None:
    """Write a redacted debug dump of the request/response to stderr."""
    from fimigrate.utils.redact import redact

    dump: dict[str, Any] = {
        "method": method,
        "url": url,
    }
    if payload is not None:
        dump["request_body"] = payload
    if response_status is not None:
        dump["response_status"] = response_status
    if response_body is not None:
        dump["response_body"] = response_body
    print(
        _json.dumps(redact(dump, token), indent=2, default=str),
        file=sys.stderr,
    )


# ---------------------------------------------------------------------------
# Transport
# ---------------------------------------------------------------------------

class Transport:
    """Synchronous HTTP transport with auth, retry, and rate limiting.

    Parameters
    ----------
    config:
        A :class:`MigrationConfig` controlling all transport behaviour.
    client:
        Optional pre-built :class:`httpx.Client`.  When omitted one is
        created from *config*.
    sleep:
        Sleep function used between retries, injectable for tests.
    """

    def __init__(
        self,
        config: MigrationConfig,
        client: httpx.Client | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._config = config
        self._sleep = sleep
        self._bucket = TokenBucket(rate_rps=config.rate_limit_rps, burst=10)
        self._metrics = resolve_metrics(config.metrics)

        if client is None:
            client = httpx.Client(
                base_url=config.base_url,
                headers={
                    "Authorization": f"Bearer {config.token}",
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                },
                timeout=httpx.Timeout(config.timeout_seconds),
                proxy=config.http_proxy,
            )
        self._client = client

    # -- public API --------------------------------------------------------

    def request(self, method: str, path: str, **kwargs: Any) -> dict:
        """Execute an HTTP request against the document service.

        Parameters
        ----------
        method:
            HTTP method (``GET``, ``POST``, ``PATCH``, ``PUT``, ``DELETE``).
        path:
            API path relative to ``base_url`` (e.g. ``/documents``).
        **kwargs:
            Forwarded to :meth:`httpx.Client.request` (``json=``,
            ``params=``, ``headers=``).

        Returns
        -------
        dict
            Parsed JSON response body (``{}`` for empty responses).

        Raises
        ------
        FimAuthError
            On 401 responses.
        FimPermissionError
            On 403 responses.
        FimNotFoundError
            On 404 responses.
        FimConflictError
            On 409 responses.
        FimValidationError
            On 400 and other non-retryable 4xx responses.
        FimRetryExhaustedError
            When all attempts were answered with a retryable status.
        FimNetworkError
            On transport-level failures after exhausting retries.
        """
        max_attempts = self._config.retry_max_attempts
        last_status: int | None = None
        json_payload = kwargs.get("json")

        for attempt in range(max_attempts):
            self._bucket.acquire()

            t0 = time.monotonic()
            try:
                response = self._client.request(method, path, **kwargs)
            except RETRYABLE_EXCEPTIONS as exc:
                self._sleep(self._handle_network_exception(method, path, exc, attempt))
                continue
            elapsed_ms = (time.monotonic() - t0) * 1000

            last_status = response.status_code
            tags = {"method": method, "path": path, "status": str(last_status)}
            self._metrics.increment("fimigrate.requests_total", tags=tags)
            self._metrics.timing("fimigrate.request_duration_ms", elapsed_ms, tags=tags)

            if self._config.debug_dump_payload:
                self._debug_dump(method, response, json_payload)

            if 200 <= response.status_code < 300:
                if response.status_code == 204 or not response.content:
                    return {}
                result: dict = response.json()
                return result

            if response.status_code not in RETRYABLE_STATUSES:
                _raise_for_status(response, method, path)

            if not should_retry(response.status_code, None, attempt, max_attempts):
                break

            retry_after: float | None = None
            reason = "server_error"
            if response.status_code == 429:
                retry_after = _parse_retry_after(response)
                reason = "rate_limited"
                self._metrics.increment(
                    "fimigrate.rate_limited_total",
                    tags={"method": method, "path": path},
                )
                log.warning(
                    "Rate limited by document service",
                    extra={
                        "extra_fields": {
                            "op": "request",
                            "method": method,
                            "path": path,
                            "status_code": 429,
                            "retry_after": retry_after,
                            "attempt": attempt + 1,
                        }
                    },
                )

            self._metrics.increment(
                "fimigrate.retries_total",
                tags={"method": method, "path": path, "reason": reason},
            )
            self._sleep(
                compute_backoff(
                    attempt,
                    base=self._config.retry_base_delay,
                    maximum=self._config.retry_max_delay,
                    jitter=self._config.retry_jitter,
                    retry_after=retry_after,
                )
            )

        raise FimRetryExhaustedError(
            message=(
                f"All {max_attempts} attempts exhausted for {method} {path} "
                f"(last status: {last_status})"
            ),
            context={"attempts": max_attempts, "last_status_code": last_status},
        )

    def close(self) -> None:
        """Close the underlying HTTP client and release resources."""
        self._client.close()

    def __enter__(self) -> Transport:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    # -- internals ---------------------------------------------------------

    def _handle_network_exception(
        self,
        method: str,
        path: str,
        exc: Exception,
        attempt: int,
    ) -> float:
        """Return the backoff delay for a retryable network error.

        Raises :class:`FimNetworkError` once retries are exhausted.
        """
        self._metrics.increment(
            "fimigrate.requests_total",
            tags={"method": method, "path": path, "status": "error"},
        )
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
        if should_retry(None, exc, attempt, self._config.retry_max_attempts):
            self._metrics.increment(
                "fimigrate.retries_total",
                tags={"method": method, "path": path, "reason": "network_error"},
            )
            return compute_backoff(
                attempt,
                base=self._config.retry_base_delay,
                maximum=self._config.retry_max_delay,
                jitter=self._config.retry_jitter,
            )
        raise FimNetworkError(
            message=f"Network error on {method} {path}: {exc}",
            context={"url": path, "attempt": attempt + 1},
            cause=exc,
        ) from exc

    def _debug_dump(self, method: str, response: httpx.Response, json_payload: Any) -> None:
        try:
            resp_body = response.json()
        except ValueError:
            resp_body = response.text[:1000]
        _dump_payload(
            method, str(response.url), json_payload,
            response.status_code, resp_body,
            token=self._config.token,
        )
