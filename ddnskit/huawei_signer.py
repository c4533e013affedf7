"""Request signing for the Huawei Cloud API gateway (SDK-HMAC-SHA256)."""

from __future__ import annotations

import hashlib
import hmac
from dataclasses import dataclass, field
from datetime import datetime, timezone
from urllib.parse import parse_qs, unquote, urlsplit, urlunsplit

from .text import escape

BASIC_DATE_FORMAT = "%Y%m%dT%H%M%SZ"
ALGORITHM = "SDK-HMAC-SHA256"
HEADER_X_DATE = "X-Sdk-Date"
HEADER_HOST = "host"
HEADER_AUTHORIZATION = "Authorization"
HEADER_CONTENT_SHA256 = "X-Sdk-Content-Sha256"


def _canonical_key(name: str) -> str:
    return "-".join(part[:1].upper() + part[1:].lower() for part in name.split("-"))


@dataclass
class Request:
    """An outgoing HTTP request that can be signed."""

    method: str = "GET"
    url: str = ""
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes | None = None
    host: str = ""

    def __post_init__(self) -> None:
        self.headers = {_canonical_key(key): value for key, value in self.headers.items()}
        if not self.host:
            self.host = urlsplit(self.url).netloc

    @property
    def path(self) -> str:
        """The decoded URL path."""
        return unquote(urlsplit(self.url).path)

    @property
    def raw_query(self) -> str:
        """The encoded query string without the leading question mark."""
        return urlsplit(self.url).query

    def query(self) -> dict[str, list[str]]:
        """Return the decoded query parameters."""
        return parse_qs(self.raw_query, keep_blank_values=True)

    def get_header(self, name: str) -> str:
        """Return the header value, or an empty string when it is missing."""
        return self.headers.get(_canonical_key(name), "")

    def set_header(self, name: str, value: str) -> None:
        """Set a header, replacing any value it had."""
        self.headers[_canonical_key(name)] = value

    def _set_raw_query(self, query: str) -> None:
        self.url = urlunsplit(urlsplit(self.url)._replace(query=query))


def _hmac_sha256(key: bytes, data: str) -> bytes:
    return hmac.new(key, data.encode("utf-8"), hashlib.sha256).digest()


def canonical_request(r: Request, signed_headers: list[str]) -> str:
    """Build the canonical request string that the signature covers."""
    hexencode = r.get_header(HEADER_CONTENT_SHA256)
    if not hexencode:
        hexencode = hex_encode_sha256_hash(request_payload(r))
    return "\n".join(
        (
            r.method,
            canonical_uri(r),
            canonical_query_string(r),
            canonical_headers(r, signed_headers),
            ";".join(signed_headers),
            hexencode,
        )
    )


def canonical_uri(r: Request) -> str:
    """Return the escaped request path, always ending in a slash."""
    path = "/".join(escape(segment) for segment in r.path.split("/"))
    if not path.endswith("/"):
        path += "/"
    return path


def canonical_query_string(r: Request) -> str:
    """Return the sorted, escaped query string and store it back in the request."""
    query = r.query()
    pairs = []
    for key in sorted(query):
        escaped_key = escape(key)
        pairs.extend(f"{escaped_key}={escape(value)}" for value in sorted(query[key]))
    result = "&".join(pairs)
    r._set_raw_query(result)
    return result


def canonical_headers(r: Request, signer_headers: list[str]) -> str:
    """Return the signed headers as "name:value" lines, each ending in a newline."""
    lowered = {key.lower(): [value] for key, value in r.headers.items()}
    lines = []
    for key in signer_headers:
        values = [r.host] if key.lower() == HEADER_HOST else lowered.get(key, [])
        lines.extend(f"{key}:{value.strip()}" for value in sorted(values))
    return "\n".join(lines) + "\n"


def signed_headers(r: Request) -> list[str]:
    """Return the sorted lower-case names of all request headers."""
    return sorted(key.lower() for key in r.headers)


def request_payload(r: Request) -> bytes:
    """Return the request body, or empty bytes when there is none."""
    return r.body or b""


def string_to_sign(canonical_request: str, t: datetime) -> str:
    """Build the string to sign from the canonical request and the signing time."""
    digest = hashlib.sha256(canonical_request.encode("utf-8")).hexdigest()
    stamp = t.astimezone(timezone.utc).strftime(BASIC_DATE_FORMAT)
    return f"{ALGORITHM}\n{stamp}\n{digest}"


def sign_string_to_sign(string_to_sign: str, signing_key: bytes | str) -> str:
    """Return the hex HMAC-SHA256 of the string to sign."""
    key = signing_key.encode("utf-8") if isinstance(signing_key, str) else signing_key
    return _hmac_sha256(key, string_to_sign).hex()


def hex_encode_sha256_hash(body: bytes | None) -> str:
    """Return the hex SHA-256 digest of ``body`` (empty when None)."""
    return hashlib.sha256(body or b"").hexdigest()


def auth_header_value(signature: str, access_key: str, signed_headers: list[str]) -> str:
    """Build the value of the Authorization header."""
    return (
        f"{ALGORITHM} Access={access_key}, "
        f"SignedHeaders={';'.join(signed_headers)}, Signature={signature}"
    )


@dataclass
class Signer:
    """Credentials that sign requests for the API gateway."""

    key: str
    secret: str

    def sign(self, r: Request) -> str:
        """Sign ``r`` in place by setting its Authorization header; return that value."""
        t: datetime | None = None
        stamp = r.get_header(HEADER_X_DATE)
        if stamp:
            try:
                t = datetime.strptime(stamp, BASIC_DATE_FORMAT).replace(tzinfo=timezone.utc)
            except ValueError:
                t = None
        if t is None:
            t = datetime.now(timezone.utc).replace(microsecond=0)
            r.set_header(HEADER_X_DATE, t.strftime(BASIC_DATE_FORMAT))

        headers = signed_headers(r)
        request_string = canonical_request(r, headers)
        signature = sign_string_to_sign(string_to_sign(request_string, t), self.secret.encode("utf-8"))
        value = auth_header_value(signature, self.key, headers)
        r.set_header(HEADER_AUTHORIZATION, value)
        return value