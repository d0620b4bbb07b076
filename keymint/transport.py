"""HTTP transport shared by every KeyMint operation.

Each call performs exactly one round trip: serialize the parameters,
send them with the bearer token, then classify the response status and
decode the body. Failures are raised as :mod:`keymint.errors` subclasses
so that every operation reports errors the same way.

``config.timeout`` bounds the whole call, from connecting to reading the
last byte of the body. ``requests`` only applies its timeout to each socket
operation, so the exchange runs on a worker thread and the caller waits at
most the configured number of seconds for it.
"""

from __future__ import annotations

import json
import logging
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar

import requests

from .config import ClientConfig
from .errors import (
    ApiError,
    DecodingError,
    EncodingError,
    TransportError,
    UnclassifiedApiError,
)
from .types import ErrorBody

__all__ = ["Transport"]

logger = logging.getLogger(__name__)

R = TypeVar("R")

Decoder = Callable[[Any], R]

_BODY_METHODS = frozenset({"POST", "PUT"})
_QUERY_METHODS = frozenset({"GET", "DELETE"})


class Transport:
    """Thin wrapper around a ``requests.Session`` bound to one access token."""

    def __init__(self, config: ClientConfig, session: Optional[requests.Session] = None) -> None:
        self.config = config
        self.session = session or requests.Session()
        self.session.headers["Authorization"] = f"Bearer {config.access_token}"
        self.session.headers["Content-Type"] = "application/json"

    def close(self) -> None:
        self.session.close()

    # --- public primitives ---

    def send_with_body(self, method: str, path: str, params: Any, decode: Decoder[R]) -> R:
        """POST or PUT ``params.to_payload()`` as a JSON object."""

        if method not in _BODY_METHODS:
            raise ValueError(f"send_with_body only supports POST and PUT, got {method!r}")
        return self._request(method, path, decode, body=params)

    def send_get(self, path: str, query: Optional[Dict[str, str]], decode: Decoder[R]) -> R:
        return self._request("GET", path, decode, query=query)

    def send_delete(self, path: str, query: Optional[Dict[str, str]], decode: Decoder[R]) -> R:
        return self._request("DELETE", path, decode, query=query)

    # --- internals ---

    def _request(
        self,
        method: str,
        path: str,
        decode: Decoder[R],
        body: Any = None,
        query: Optional[Dict[str, str]] = None,
    ) -> R:
        data: Optional[bytes] = None
        if method in _BODY_METHODS:
            data = self._encode(body)
        elif method not in _QUERY_METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")

        url = f"{self.config.base_url}{path}"
        logger.debug("KeyMint request %s %s", method, url)

        status, raw = self._exchange_within_deadline(method, url, query, data)

        logger.debug("KeyMint response %s %s -> %s", method, url, status)

        if status >= 400:
            raise self._classify_error(raw, status)

        try:
            payload = json.loads(raw)
            return decode(payload)
        except (ValueError, TypeError) as exc:
            raise DecodingError(
                f"failed to unmarshal response: {exc}", http_status=status
            ) from exc

    def _exchange_within_deadline(
        self,
        method: str,
        url: str,
        query: Optional[Dict[str, str]],
        data: Optional[bytes],
    ) -> Tuple[int, bytes]:
        timeout = self.config.timeout
        opened: List[Any] = []
        executor = ThreadPoolExecutor(max_workers=1)
        try:
            future = executor.submit(self._exchange, method, url, query, data, opened)
            return future.result(timeout=timeout)
        except FutureTimeoutError as exc:
            # Closing the response makes the worker's pending read fail.
            for response in opened:
                response.close()
            if opened:
                raise TransportError(
                    f"failed to read response: timeout of {timeout}s exceeded while reading body",
                    http_status=opened[0].status_code,
                ) from exc
            raise TransportError(
                f"request failed: timeout of {timeout}s exceeded while awaiting headers"
            ) from exc
        except (requests.RequestException, UnicodeError) as exc:
            # http.client raises UnicodeEncodeError for non latin-1 header values.
            raise TransportError(f"request failed: {exc}") from exc
        finally:
            executor.shutdown(wait=False)

    def _exchange(
        self,
        method: str,
        url: str,
        query: Optional[Dict[str, str]],
        data: Optional[bytes],
        opened: List[Any],
    ) -> Tuple[int, bytes]:
        response = self.session.request(
            method,
            url,
            params=query or None,
            data=data,
            timeout=self.config.timeout,
            stream=True,
        )
        opened.append(response)
        try:
            status = response.status_code
            try:
                raw = response.content
            except requests.RequestException as exc:
                raise TransportError(
                    f"failed to read response: {exc}", http_status=status
                ) from exc
        finally:
            response.close()
        return status, raw

    @staticmethod
    def _encode(params: Any) -> bytes:
        try:
            payload = params.to_payload()
            return json.dumps(payload, allow_nan=False).encode("utf-8")
        except (TypeError, ValueError, AttributeError) as exc:
            raise EncodingError(f"failed to marshal request: {exc}") from exc

    @staticmethod
    def _classify_error(raw: bytes, status: int):
        try:
            error_body = ErrorBody.from_payload(json.loads(raw))
        except ValueError:
            error_body = None

        if error_body is not None and error_body.message:
            return ApiError(error_body.message, error_body.code, http_status=status)

        text = raw.decode("utf-8", errors="replace")
        return UnclassifiedApiError(f"API error: {text}", -1, http_status=status)
