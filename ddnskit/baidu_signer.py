"""Request signing for the Baidu Cloud API (bce-auth-v1)."""

from __future__ import annotations

import hashlib
import hmac
from datetime import datetime, timezone

from .huawei_signer import HEADER_AUTHORIZATION, Request, canonical_uri

BAIDU_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
EXPIRATION_PERIOD = "1800"
_SIGNED_HOST = "host:bcd.baidubce.com"


def hmac_sha256_hex(secret: str, message: str) -> str:
    """Return the hex HMAC-SHA256 of ``message`` keyed with ``secret``."""
    return hmac.new(secret.encode("utf-8"), message.encode("utf-8"), hashlib.sha256).hexdigest()


def baidu_canonical_uri(r: Request) -> str:
    """Return the escaped request path without a trailing slash."""
    return canonical_uri(r)[:-1]


def baidu_signer(access_key_id: str, access_secret: str, r: Request) -> str:
    """Set the Authorization header of ``r`` and return its value."""
    stamp = datetime.now(timezone.utc).strftime(BAIDU_DATE_FORMAT)
    prefix = f"bce-auth-v1/{access_key_id}/{stamp}/{EXPIRATION_PERIOD}"
    canonical = f"{r.method}\n{baidu_canonical_uri(r)}\n\n{_SIGNED_HOST}"

    signing_key = hmac_sha256_hex(access_secret, prefix)
    signature = hmac_sha256_hex(signing_key, canonical)

    authorization = f"{prefix}/host/{signature}"
    r.set_header(HEADER_AUTHORIZATION, authorization)
    return authorization