"""Request signing for the Aliyun RPC API."""

from __future__ import annotations

import base64
import hashlib
import hmac
import re
import time
from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from urllib.parse import quote_plus

_SIGN_METHODS = {
    "HMAC-SHA1": hashlib.sha1,
    "HMAC-SHA256": hashlib.sha256,
    "HMAC-MD5": hashlib.md5,
}
_SPECIAL = re.compile(r"%7E|[%*/&=+]")

Values = Mapping[str, "str | Sequence[str]"]


def _encode_values(vals: Values) -> str:
    pairs = []
    for key in sorted(vals):
        value = vals[key]
        items = [value] if isinstance(value, str) else list(value)
        encoded_key = quote_plus(key, safe="")
        pairs.extend(f"{encoded_key}={quote_plus(item, safe='')}" for item in items)
    return "&".join(pairs)


def _replace_special(match: re.Match[str]) -> str:
    text = match.group()
    if text == "%7E":
        return "~"
    if text == "+":
        return "%20"
    return f"%{ord(text):02X}"


def special_url_encode(s: str) -> str:
    """Turn form encoding into the percent encoding the signature expects."""
    return _SPECIAL.sub(_replace_special, s)


def _data_to_sign(http_method: str, vals: Values) -> str:
    return "&".join(
        (http_method, special_url_encode("/"), special_url_encode(_encode_values(vals)))
    )


def hmac_sign(sign_method: str, http_method: str, app_key_secret: str, vals: Values) -> bytes:
    """Return the raw HMAC signature; unknown methods fall back to HMAC-SHA1."""
    digest = _SIGN_METHODS.get(sign_method, hashlib.sha1)
    key = (app_key_secret + "&").encode("utf-8")
    return hmac.new(key, _data_to_sign(http_method, vals).encode("utf-8"), digest).digest()


def hmac_sign_to_b64(sign_method: str, http_method: str, app_key_secret: str, vals: Values) -> str:
    """Return the HMAC signature in standard base64."""
    return base64.b64encode(hmac_sign(sign_method, http_method, app_key_secret, vals)).decode("ascii")


def aliyun_signer(access_key_id: str, access_secret: str, params: Values) -> dict[str, str | Sequence[str]]:
    """Return ``params`` with the common parameters and the GET signature added."""
    signed: dict[str, str | Sequence[str]] = dict(params)
    signed["SignatureMethod"] = "HMAC-SHA1"
    signed["SignatureNonce"] = str(time.time_ns())
    signed["AccessKeyId"] = access_key_id
    signed["SignatureVersion"] = "1.0"
    signed["Timestamp"] = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    signed["Format"] = "JSON"
    signed["Version"] = "2015-01-09"
    signed["Signature"] = hmac_sign_to_b64("HMAC-SHA1", "GET", access_secret, signed)
    return signed