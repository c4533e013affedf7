import re

from ddnskit.huawei_signer import hex_encode_sha256_hash
from ddnskit.traffic_route_signer import traffic_route_signer

EMPTY_SHA256 = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


def _sign(body=b"", sk="secret", query=None, header=None, method="GET"):
    return traffic_route_signer(method, query or {}, header or {}, "AKID", sk, "ListZones", body)


def test_query_carries_action_and_version():
    request = _sign(query={"PageNumber": ["1"]})
    assert request.query() == {
        "Action": ["ListZones"],
        "Version": ["2018-08-01"],
        "PageNumber": ["1"],
    }


def test_query_keys_are_sorted():
    request = _sign(query={"b": ["2"], "a": ["1"]})
    keys = [pair.split("=")[0] for pair in request.raw_query.split("&")]
    assert keys == sorted(keys)


def test_url_targets_api_host():
    request = _sign()
    assert request.url.startswith("https://open.volcengineapi.com/?")
    assert request.host == "open.volcengineapi.com"
    assert request.get_header("Host") == "open.volcengineapi.com"


def test_content_hash_of_empty_body():
    request = _sign(body=None)
    assert request.get_header("X-Content-Sha256") == EMPTY_SHA256
    assert request.body == b""


def test_content_hash_matches_body():
    body = b'{"ZID": 1}'
    request = _sign(body=body, method="POST")
    assert request.get_header("X-Content-Sha256") == hex_encode_sha256_hash(body)
    assert request.method == "POST"
    assert request.body == body


def test_authorization_structure():
    request = _sign()
    x_date = request.get_header("X-Date")
    assert re.fullmatch(r"\d{8}T\d{6}Z", x_date)
    prefix = (
        f"HMAC-SHA256 Credential=AKID/{x_date[:8]}/cn-north-1/DNS/request, "
        "SignedHeaders=content-type;host;x-content-sha256;x-date, Signature="
    )
    authorization = request.get_header("Authorization")
    assert authorization.startswith(prefix)
    assert re.fullmatch(r"[0-9a-f]{64}", authorization[len(prefix):])
    assert request.get_header("Content-Type") == "application/json"


def test_extra_headers_are_kept():
    request = _sign(header={"x-custom": "value"})
    assert request.get_header("X-Custom") == "value"


def test_signature_depends_on_secret():
    first = _sign(sk="secret").get_header("Authorization")
    second = _sign(sk="token").get_header("Authorization")
    assert first.split("Signature=")[1] != second.split("Signature=")[1]