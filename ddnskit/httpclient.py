"""HTTP clients with the project's defaults and response helpers."""

from __future__ import annotations

import json
import ssl
from typing import Any, Union

import httpx

from .messages import log_str

_TIMEOUT = 30.0
_MAX_IDLE_CONNECTIONS = 100
_IDLE_TIMEOUT = 90.0
MAX_BODY_SIZE = 1024000

_insecure_context: ssl.SSLContext | None = None


class HTTPStatusError(Exception):
    """A response came back with a status code of 300 or above."""

    def __init__(self, message: str, status_code: int, body: bytes) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


def _limits(keep_alive: bool) -> httpx.Limits:
    return httpx.Limits(
        max_connections=None,
        max_keepalive_connections=_MAX_IDLE_CONNECTIONS if keep_alive else 0,
        keepalive_expiry=_IDLE_TIMEOUT,
    )


def _verify() -> Union[bool, ssl.SSLContext]:
    return _insecure_context if _insecure_context is not None else True


def create_http_client() -> httpx.Client:
    """Create a client that honours proxy settings from the environment."""
    return httpx.Client(
        timeout=httpx.Timeout(_TIMEOUT),
        limits=_limits(keep_alive=True),
        verify=_verify(),
        trust_env=True,
    )


def create_no_proxy_http_client(network: str) -> httpx.Client:
    """Create a client without proxies bound to IPv6 for "tcp6", IPv4 otherwise."""
    local_address = "::" if network == "tcp6" else "0.0.0.0"
    transport = httpx.HTTPTransport(
        verify=_verify(),
        limits=_limits(keep_alive=False),
        local_address=local_address,
    )
    return httpx.Client(
        timeout=httpx.Timeout(_TIMEOUT),
        transport=transport,
        trust_env=False,
    )


def set_insecure_skip_verify() -> ssl.SSLContext:
    """Disable TLS certificate verification for clients created from now on."""
    global _insecure_context
    context = ssl.create_default_context()
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    _insecure_context = context
    return context


def get_http_response_org(response: httpx.Response) -> bytes:
    """Read at most MAX_BODY_SIZE bytes of the body; raise HTTPStatusError for status >= 300."""
    body = bytearray()
    try:
        for chunk in response.iter_bytes():
            body += chunk[: MAX_BODY_SIZE - len(body)]
            if len(body) >= MAX_BODY_SIZE:
                break
    finally:
        response.close()

    data = bytes(body)
    if response.status_code >= 300:
        message = log_str(
            "返回内容: %s ,返回状态码: %d",
            data.decode("utf-8", errors="replace"),
            response.status_code,
        )
        raise HTTPStatusError(message, response.status_code, data)
    return data


def get_http_response(response: httpx.Response) -> Any:
    """Return the decoded JSON body, or None when the body is empty."""
    body = get_http_response_org(response)
    if not body:
        return None
    return json.loads(body)