import re

from ddnskit.baidu_signer import baidu_canonical_uri, baidu_signer, hmac_sha256_hex
from ddnskit.huawei_signer import Request


def _request():
    return Request(method="POST", url="https://bcd.baidubce.com/v1/domain/resolve/add")


def test_hmac_sha256_hex_known_vector():
    assert (
        hmac_sha256_hex("Jefe", "what do ya want for nothing?")
        == "5bdcc146bf60754e6a042426089575c75a003f089d2739839dec58b964ec3843"
    )


def test_canonical_uri_plain_path():
    assert baidu_canonical_uri(_request()) == "/v1/domain/resolve/add"


def test_canonical_uri_strips_trailing_slash_and_escapes():
    assert baidu_canonical_uri(Request(url="https://example.com/a b/")) == "/a%20b"


def test_canonical_uri_of_root_is_empty():
    assert baidu_canonical_uri(Request(url="https://example.com/")) == ""


def test_signer_sets_authorization_header():
    r = _request()
    value = baidu_signer("AKID", "secret", r)
    assert r.get_header("Authorization") == value
    match = re.fullmatch(
        r"bce-auth-v1/AKID/(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z)/1800/host/([0-9a-f]{64})",
        value,
    )
    assert match is not None


def test_signature_depends_on_secret():
    first = baidu_signer("AKID", "secret", _request())
    second = baidu_signer("AKID", "token", _request())
    assert first.rsplit("/", 1)[1] != second.rsplit("/", 1)[1]