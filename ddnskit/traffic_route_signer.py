"""Request building and signing for the Volcengine TrafficRoute DNS API."""

from __future__ import annotations

import hashlib
import hmac
from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from urllib.parse import quote_plus

from .huawei_signer import Request

VERSION = "2018-08-01"
SERVICE = "DNS"
REGION = "cn-north-1"
HOST = "open.volcengineapi.com"

_CONTENT_TYPE = "application/json"
_SIGNED_HEADERS = "content-type;host;x-content-sha256;x-date"


def _hmac_sha256(key: bytes, content: str) -> bytes:
    return hmac.new(key, content.encode("utf-8"), hashlib.sha256).digest()


def _hash_sha256(content: bytes) -> str:
    return hashlib.sha256(content).hexdigest()


def _encode_values(values: Mapping[str, Sequence[str]]) -> str:
    pairs = []
    for key in sorted(values):
        encoded_key = quote_plus(key)
        pairs.extend(f"{encoded_key}={quote_plus(value)}" for value in values[key])
    return "&".join(pairs)


def traffic_route_signer(
    method: str,
    query: Mapping[str, Sequence[str]] | None,
    header: Mapping[str, str] | None,
    ak: str,
    sk: str,
    action: str,
    body: bytes | None,
) -> Request:
    """Build a signed request for ``action`` with the given query, headers and body."""
    payload = body or b""
    values = {key: list(items) for key, items in (query or {}).items()}
    values["Action"] = [action]
    values["Version"] = [VERSION]
    raw_query = _encode_values(values)

    request = Request(method=method or "GET", url=f"https://{HOST}/?{raw_query}", body=payload)
    for key, value in (header or {}).items():
        request.set_header(key, value)

    x_date = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    short_date = x_date[:8]
    content_sha256 = _hash_sha256(payload)

    canonical_request = "\n".join(
        (
            request.method,
            "/",
            raw_query,
            "\n".join(
                (
                    f"content-type:{_CONTENT_TYPE}",
                    f"host:{request.host}",
                    f"x-content-sha256:{content_sha256}",
                    f"x-date:{x_date}",
                )
            ),
            "",
            _SIGNED_HEADERS,
            content_sha256,
        )
    )
    credential_scope = "/".join((short_date, REGION, SERVICE, "request"))
    to_sign = "\n".join(
        ("HMAC-SHA256", x_date, credential_scope, _hash_sha256(canonical_request.encode("utf-8")))
    )

    k_date = _hmac_sha256(sk.encode("utf-8"), short_date)
    k_region = _hmac_sha256(k_date, REGION)
    k_service = _hmac_sha256(k_region, SERVICE)
    k_signing = _hmac_sha256(k_service, "request")
    signature = _hmac_sha256(k_signing, to_sign).hex()

    authorization = (
        f"HMAC-SHA256 Credential={ak}/{credential_scope}, "
        f"SignedHeaders={_SIGNED_HEADERS}, Signature={signature}"
    )

    request.set_header("Host", request.host)
    request.set_header("Content-Type", _CONTENT_TYPE)
    request.set_header("X-Date", x_date)
    request.set_header("X-Content-Sha256", content_sha256)
    request.set_header("Authorization", authorization)
    return request