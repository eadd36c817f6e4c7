from __future__ import annotations

"""
HTTP transport for the Ollama API.

Owns URL construction, retries, timeouts, status classification and streaming
decode, keeping the endpoint-level client free from transport micromanagement.
"""

from typing import Callable, Iterator, Optional, Type, TypeVar
import logging
import threading
import time

import httpx

from ..domain.errors import (
    Cancelled,
    InvalidParameters,
    InvalidResponse,
    NetworkError,
    UnexpectedStatusCode,
    classify_status,
)
from .policy import RetryPolicy
from .stream import DiscardHook, NDJSONDecoder

T = TypeVar("T")

JSON_HEADERS = {"Content-Type": "application/json"}


class TransportHttpClient:
    """
    Thin wrapper around an httpx.Client.
    Responsibilities:
      - Join base URL, API prefix and endpoint
      - Retry transport failures with a fixed delay (never HTTP error statuses)
      - Map non-2xx statuses onto the error taxonomy
      - Decode newline-delimited JSON streams lazily, one record per line
    """

    def __init__(
        self,
        base_url: str,
        *,
        api_prefix: str = "/api",
        timeout_s: float = 30.0,
        verify: bool = True,
        retry_policy: Optional[RetryPolicy] = None,
        http_client: Optional[httpx.Client] = None,
        sleep_fn: Callable[[float], None] = time.sleep,
        logger: Optional[logging.Logger] = None,
        trace_hook: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_prefix = api_prefix.strip("/")
        self.timeout_s = float(timeout_s)
        self.retry_policy = retry_policy or RetryPolicy()
        self.sleep_fn = sleep_fn
        self.logger = logger or logging.getLogger(__name__)
        self._trace = trace_hook or (lambda _e: None)
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=httpx.Timeout(self.timeout_s), verify=verify)

    # ---------------- Internal helpers ----------------
    def url_for(self, endpoint: str) -> str:
        parts = [self.base_url]
        if self.api_prefix:
            parts.append(self.api_prefix)
        parts.append(endpoint.strip("/"))
        return "/".join(parts)

    def _pause(self, delay: float, cancel_event: Optional[threading.Event]) -> None:
        if cancel_event is None:
            self.sleep_fn(delay)
        elif cancel_event.wait(delay):
            raise Cancelled()

    def _send_once(self, method: str, url: str, body: Optional[bytes]) -> httpx.Response:
        headers = JSON_HEADERS if body is not None else None
        try:
            return self._client.request(method, url, content=body, headers=headers)
        except httpx.InvalidURL as e:
            raise InvalidParameters(f"Invalid URL {url}: {e}") from e
        except httpx.DecodingError as e:
            raise InvalidResponse() from e

    # ---------------- Public API ----------------
    def request(
        self,
        endpoint: str,
        method: str = "GET",
        body: Optional[bytes] = None,
        *,
        cancel_event: Optional[threading.Event] = None,
    ) -> bytes:
        """
        Send one request and return the raw body of a 2xx response.

        Transport failures are retried per the policy and surface as
        NetworkError once exhausted. HTTP error statuses raise immediately.
        Setting `cancel_event` stops further attempts with Cancelled.
        """
        url = self.url_for(endpoint)
        attempt = 0
        while True:
            if cancel_event is not None and cancel_event.is_set():
                raise Cancelled()
            try:
                response = self._send_once(method, url, body)
            except httpx.TransportError as e:
                if not self.retry_policy.should_retry(e, attempt_index=attempt):
                    self.logger.error(f"Final attempt {attempt + 1} failed for {method} {url}: {e}")
                    raise NetworkError(e) from e
                delay = self.retry_policy.backoff_seconds(attempt)
                self.logger.debug(f"Attempt {attempt + 1} failed for {method} {url}: {e}; retrying in {delay:.2f}s")
                self._trace(f"transport:retry attempt={attempt + 1} delay={delay:.2f}s")
                self._pause(delay, cancel_event)
                attempt += 1
                continue

            error = classify_status(response.status_code, response.content)
            if error is not None:
                self.logger.debug(f"{method} {url} -> {response.status_code}")
                raise error
            return response.content

    def stream(
        self,
        endpoint: str,
        body: bytes,
        record_type: Type[T],
        method: str = "POST",
        *,
        cancel_event: Optional[threading.Event] = None,
        on_discard: Optional[DiscardHook] = None,
    ) -> Iterator[T]:
        """
        Open a streaming request and yield decoded records in arrival order.

        The connection is opened on first iteration and released when the
        iterator is exhausted, fails, or is closed by the consumer. Streams are
        not retried: a connection failure ends iteration with NetworkError.
        """
        url = self.url_for(endpoint)
        decoder = NDJSONDecoder(record_type, on_discard=on_discard, logger=self.logger)
        try:
            with self._client.stream(method, url, content=body, headers=JSON_HEADERS) as response:
                if not 200 <= response.status_code <= 299:
                    raise UnexpectedStatusCode(response.status_code)
                self._trace(f"transport:stream:open {method} {url}")
                for chunk in response.iter_bytes():
                    if cancel_event is not None and cancel_event.is_set():
                        raise Cancelled()
                    yield from decoder.feed(chunk)
        except httpx.TransportError as e:
            self.logger.debug(f"Stream {method} {url} failed: {e}")
            raise NetworkError(e) from e
        except httpx.InvalidURL as e:
            raise InvalidParameters(f"Invalid URL {url}: {e}") from e
        except httpx.DecodingError as e:
            raise InvalidResponse() from e
        finally:
            if decoder.pending:
                self.logger.debug(f"Stream {method} {url} ended with {len(decoder.pending)} undelimited bytes")

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> TransportHttpClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
