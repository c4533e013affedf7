import base64
import hashlib

from ddnskit.aliyun_signer import (
    aliyun_signer,
    hmac_sign,
    hmac_sign_to_b64,
    special_url_encode,
)

PARAMS = {"Action": "DescribeDomainRecords", "DomainName": "example.com", "Note": "a b~c*"}


def test_special_url_encode_slash():
    assert special_url_encode("/") == "%2F"


def test_special_url_encode_tilde_and_space():
    assert special_url_encode("%7E") == "~"
    assert special_url_encode("a+b") == "a%20b"


def test_special_url_encode_leaves_plain_text():
    assert special_url_encode("AbC-123_.x") == "AbC-123_.x"


def test_b64_matches_raw_signature():
    raw = hmac_sign("HMAC-SHA256", "GET", "secret", PARAMS)
    assert base64.b64decode(hmac_sign_to_b64("HMAC-SHA256", "GET", "secret", PARAMS)) == raw


def test_digest_sizes_follow_method():
    assert len(hmac_sign("HMAC-SHA1", "GET", "secret", PARAMS)) == hashlib.sha1().digest_size
    assert len(hmac_sign("HMAC-SHA256", "GET", "secret", PARAMS)) == hashlib.sha256().digest_size
    assert len(hmac_sign("HMAC-MD5", "GET", "secret", PARAMS)) == hashlib.md5().digest_size


def test_unknown_method_falls_back_to_sha1():
    assert hmac_sign("HMAC-XYZ", "GET", "secret", PARAMS) == hmac_sign("HMAC-SHA1", "GET", "secret", PARAMS)


def test_signature_depends_on_secret_and_method():
    base = hmac_sign("HMAC-SHA1", "GET", "secret", PARAMS)
    assert hmac_sign("HMAC-SHA1", "GET", "token", PARAMS) != base
    assert hmac_sign("HMAC-SHA1", "POST", "secret", PARAMS) != base


def test_parameter_order_does_not_matter():
    reordered = dict(reversed(list(PARAMS.items())))
    assert hmac_sign("HMAC-SHA1", "GET", "secret", reordered) == hmac_sign("HMAC-SHA1", "GET", "secret", PARAMS)


def test_list_values_are_accepted():
    as_lists = {key: [value] for key, value in PARAMS.items()}
    assert hmac_sign("HMAC-SHA1", "GET", "secret", as_lists) == hmac_sign("HMAC-SHA1", "GET", "secret", PARAMS)


def test_aliyun_signer_adds_common_parameters():
    signed = aliyun_signer("access-id", "secret", PARAMS)
    assert signed["SignatureMethod"] == "HMAC-SHA1"
    assert signed["SignatureVersion"] == "1.0"
    assert signed["Format"] == "JSON"
    assert signed["Version"] == "2015-01-09"
    assert signed["AccessKeyId"] == "access-id"
    assert signed["Action"] == "DescribeDomainRecords"
    assert "Signature" not in PARAMS


def test_aliyun_signer_signature_covers_other_parameters():
    signed = aliyun_signer("access-id", "secret", PARAMS)
    unsigned = {key: value for key, value in signed.items() if key != "Signature"}
    assert signed["Signature"] == hmac_sign_to_b64("HMAC-SHA1", "GET", "secret", unsigned)