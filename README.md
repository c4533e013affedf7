# ddnskit

A library of the pieces a dynamic DNS client needs around its calls to DNS
providers. It has no command-line entry point; everything is used from Python.

## Modules

- `ddnskit.aliyun_signer` – `aliyun_signer(access_key_id, access_secret, params)`
  returns a new dict holding `params` plus the common Aliyun RPC parameters and
  the `Signature`. `hmac_sign`, `hmac_sign_to_b64` and `special_url_encode` are
  the pieces it is built from.
- `ddnskit.huawei_signer` – a small `Request` dataclass (method, URL, headers,
  body, host) and a `Signer(key, secret)` whose `sign(request)` sets the
  `X-Sdk-Date` header when missing and the `Authorization` header
  (SDK-HMAC-SHA256). The canonical-request helpers are public too.
- `ddnskit.baidu_signer` – `baidu_signer(access_key_id, access_secret, request)`
  sets a `bce-auth-v1` `Authorization` header on a `Request`.
- `ddnskit.tencent_signer` – `tencent_cloud_signer(secret_id, secret_key, request, action, payload)`
  adds the TC3-HMAC-SHA256 headers for the DNSPod API to a `Request`.
- `ddnskit.traffic_route_signer` – `traffic_route_signer(method, query, header, ak, sk, action, body)`
  builds and returns a signed `Request` for the Volcengine DNS API.
- `ddnskit.ipcache` – `IpCache.check(new_addr)` returns True when the address
  changed or after a number of unchanged checks, read from the
  `DDNS_IP_CACHE_TIMES` environment variable (default 5). An empty address
  always returns True.
- `ddnskit.netutil` – `is_private_network(remote_addr)` for loopback, private
  and link-local addresses with an optional port, and
  `get_request_ip_str(remote_addr, headers)` to describe a request's origin.
- `ddnskit.httpclient` – `create_http_client()` and
  `create_no_proxy_http_client(network)` return `httpx.Client` objects with a
  30-second timeout; `set_insecure_skip_verify()` turns off certificate checks
  for clients created afterwards. `get_http_response_org(response)` reads at
  most 1,024,000 bytes and raises `HTTPStatusError` for status 300 and above;
  `get_http_response(response)` also decodes the JSON body.
- `ddnskit.resolver` – `lookup_host(url)` resolves the host of a URL (raising
  `OSError`), `set_dns(server)` sends further lookups to a chosen server
  (`[udp|tcp://]host[:port]`), `init_backup_dns` / `backup_dns` manage the
  fallback servers, and `wait_internet(addresses)` blocks, retrying every five
  seconds and switching to fallback servers, until one address resolves.
- `ddnskit.passwords` – bcrypt `hash_password`, `password_ok`,
  `is_hashed_password`, and `generate_token(username)`.
- `ddnskit.messages` – `log_str(key, *args)` and `log(key, *args)` format
  messages whose keys are Chinese strings, translated to English unless
  `init_log_lang` was given a language starting with `"zh"`.
- `ddnskit.ordinal` – `ordinal(x, lang)` gives `"1st"`, `"12th"`, `"23rd"`;
  for `"zh"` the bare number.
- `ddnskit.environment` – `is_run_in_docker()`, `is_termux()`,
  `get_config_file_path()` (from `DDNS_CONFIG_FILE_PATH`, else
  `~/.ddns_go_config.yaml`), `fix_timezone()` for Android, and
  `open_explorer(url)`.
- `ddnskit.weblogs` – `MemoryLogs` keeps the last 50 log entries and
  `Result` / `ok_result` / `error_result` produce JSON replies. Importing this
  module attaches handlers to the `ddnskit` logger that write to
  `weblogs.MEMORY_LOGS` and to standard output.
- `ddnskit.versioning` – `parse_version(text)` returns a `Version` of
  major.minor.patch; pre-release and build parts are accepted but ignored.
- `ddnskit.selfupdate` – `decompress_command(src, url, cmd)` takes the
  executable out of a `.zip` or `.tar.gz` asset (or returns other data as it
  is), `apply(update, target_path)` replaces a file via `.new` and `.old`
  siblings, and `decompress_and_update` does both.
- `ddnskit.release` – fetches the latest release description from GitHub
  (`get_latest`, `detect_latest`), picks the asset for the running OS and
  architecture (`find_asset`), and `self_update(version)` replaces the running
  program (`sys.argv[0]`) when a newer release exists.

## Examples

```python
from ddnskit.ipcache import IpCache

cache = IpCache()
if cache.check("203.0.113.7"):
    ...  # new address, or time to compare with the DNS provider again
```

```python
from ddnskit.netutil import is_private_network

is_private_network("192.168.1.18:9876")  # True
is_private_network("[2409::1]:9876")     # False
```

```python
from ddnskit.aliyun_signer import aliyun_signer

params = {"Action": "DescribeSubDomainRecords", "SubDomain": "www.example.com"}
signed = aliyun_signer("placeholder", "secret", params)
signed["Signature"]  # base64 HMAC-SHA1; params itself is left unchanged
```

```python
from ddnskit.huawei_signer import Request, Signer

request = Request(method="GET", url="https://dns.example.com/v2/zones?type=public")
Signer(key="placeholder", secret="secret").sign(request)
request.get_header("Authorization")
```

```python
from ddnskit.passwords import hash_password, password_ok, is_hashed_password

password = "password"
hashed = hash_password(password)
assert is_hashed_password(hashed)
assert password_ok(hashed, password)
```

```python
from ddnskit.versioning import parse_version

current = parse_version("v1.2")
str(current)                                  # "1.2.0"
current.greater_than(parse_version("1.1.9"))  # True
```

```python
from ddnskit.messages import init_log_lang, log_str
from ddnskit.ordinal import ordinal

init_log_lang("en")
log_str("网络已连接")  # "The network is connected"
ordinal(21, "en")      # "21st"
```

## What it does not do

The package does not talk to any DNS provider to create or update records, does
not read or write a configuration file, has no web server or login pages, and
cannot install itself as a system service. It offers the signing, caching,
networking, logging and update helpers such a program is built on.

## Tests

The test suite uses pytest and respx, listed in the `test` extra.