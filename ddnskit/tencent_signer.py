"""Request signing for the Tencent Cloud DNSPod API (TC3-HMAC-SHA256)."""

from __future__ import annotations

import hashlib
import hmac
import time
from datetime import datetime, timezone

from .huawei_signer import Request

_ALGORITHM = "TC3-HMAC-SHA256"
_SERVICE = "dnspod"
_HOST = f"{_SERVICE}.tencentcloudapi.com"
_SIGNED_HEADERS = "content-type;host;x-tc-action"


def _sha256_hex(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def _hmac_sha256(key: bytes, message: str) -> bytes:
    return hmac.new(key, message.encode("utf-8"), hashlib.sha256).digest()


def tencent_cloud_signer(secret_id: str, secret_key: str, r: Request, action: str, payload: str) -> str:
    """Add the TC3 signature headers for a JSON POST of ``payload`` to ``r``; return the Authorization value."""
    timestamp = int(time.time())
    timestamp_str = str(timestamp)

    canonical_headers = (
        f"content-type:application/json\nhost:{_HOST}\nx-tc-action:{action.lower()}\n"
    )
    canonical_request = (
        f"POST\n/\n\n{canonical_headers}\n{_SIGNED_HEADERS}\n{_sha256_hex(payload)}"
    )

    date = datetime.fromtimestamp(timestamp, timezone.utc).strftime("%Y-%m-%d")
    credential_scope = f"{date}/{_SERVICE}/tc3_request"
    to_sign = f"{_ALGORITHM}\n{timestamp_str}\n{credential_scope}\n{_sha256_hex(canonical_request)}"

    secret_date = _hmac_sha256(("TC3" + secret_key).encode("utf-8"), date)
    secret_service = _hmac_sha256(secret_date, _SERVICE)
    secret_signing = _hmac_sha256(secret_service, "tc3_request")
    signature = _hmac_sha256(secret_signing, to_sign).hex()

    authorization = (
        f"{_ALGORITHM} Credential={secret_id}/{credential_scope}, "
        f"SignedHeaders={_SIGNED_HEADERS}, Signature={signature}"
    )

    r.set_header("Authorization", authorization)
    r.set_header("Host", _HOST)
    r.set_header("X-TC-Action", action)
    r.set_header("X-TC-Timestamp", timestamp_str)
    return authorization