"""Host lookups through the system resolver or a chosen DNS server, and waiting for a network."""

from __future__ import annotations

import ipaddress
import socket
import time
from collections.abc import Sequence
from urllib.parse import urlsplit

import dns.exception as dns_exception
import dns.resolver as dns_resolver

from .messages import log
from .text import to_hostname

_DEFAULT_BACKUP_DNS = ("1.1.1.1", "8.8.8.8", "9.9.9.9", "223.5.5.5")
_CHINESE_BACKUP_DNS = ("223.5.5.5", "114.114.114.114", "119.29.29.29")
_CHINESE = "zh"
_DNS_PORT = 53
_RETRY_DELAY = 5.0

_backup_dns: list[str] = list(_DEFAULT_BACKUP_DNS)
_custom: dns_resolver.Resolver | None = None
_custom_tcp = False


def init_backup_dns(custom_dns: str, lang: str) -> None:
    """Choose the fallback DNS servers: the custom one, or a set suited to the language."""
    global _backup_dns
    if custom_dns:
        _backup_dns = [custom_dns]
        return
    if lang == _CHINESE:
        _backup_dns = list(_CHINESE_BACKUP_DNS)


def backup_dns() -> list[str]:
    """Return the fallback DNS servers."""
    return list(_backup_dns)


def set_dns(dns: str) -> dns_resolver.Resolver:
    """Send all further lookups to the server ``dns`` ("[udp|tcp://]host[:port]")."""
    global _custom, _custom_tcp
    server = dns if "://" in dns else "udp://" + dns
    parts = urlsplit(server)
    use_tcp = parts.scheme.lower() == "tcp"
    host = parts.hostname or ""
    if not host:
        raise ValueError(f"invalid DNS server: {dns!r}")
    try:
        port = parts.port
    except ValueError as exc:
        raise ValueError(f"invalid DNS server: {dns!r}") from exc
    if port is None:
        port = _DNS_PORT

    try:
        ipaddress.ip_address(host)
        address = host
    except ValueError:
        address = socket.gethostbyname(host)

    resolver = dns_resolver.Resolver(configure=False)
    resolver.port = port
    resolver.nameservers = [address]
    _custom = resolver
    _custom_tcp = use_tcp
    return resolver


def _lookup_custom(resolver: dns_resolver.Resolver, name: str) -> list[str]:
    addresses: list[str] = []
    errors: list[Exception] = []
    for rdtype in ("A", "AAAA"):
        try:
            answer = resolver.resolve(name, rdtype, tcp=_custom_tcp)
        except dns_exception.DNSException as exc:
            errors.append(exc)
            continue
        addresses.extend(str(record) for record in answer)
    if not addresses:
        reason = errors[0] if errors else "no such host"
        raise OSError(f"lookup {name}: {reason}")
    return addresses


def lookup_host(url: str) -> list[str]:
    """Resolve the host of ``url``; raise OSError when it cannot be resolved."""
    name = to_hostname(url)
    try:
        ipaddress.ip_address(name)
    except ValueError:
        pass
    else:
        return [name]

    if _custom is not None:
        return _lookup_custom(_custom, name)

    try:
        infos = socket.getaddrinfo(name, None)
    except OSError as exc:
        raise OSError(f"lookup {name}: {exc}") from exc
    return list(dict.fromkeys(str(info[4][0]) for info in infos))


def is_dns_error(error: BaseException) -> bool:
    """Return True if the error comes from an unreachable local DNS server."""
    return "[::1]:53: read: connection refused" in str(error)


def wait_internet(addresses: Sequence[str]) -> str:
    """Block until one of ``addresses`` resolves and return it."""
    if not addresses:
        raise ValueError("no addresses to wait for")
    retry_times = 0
    failed = False
    while True:
        for addr in addresses:
            try:
                lookup_host(addr)
            except OSError as exc:
                failed = True
                log("等待网络连接: %s", exc)
                log("%s 后重试...", f"{_RETRY_DELAY:g}s")
                if is_dns_error(exc) or retry_times > 0:
                    server = _backup_dns[retry_times % len(_backup_dns)]
                    log("本机DNS异常! 将默认使用 %s, 可参考文档通过 -dns 自定义 DNS 服务器", server)
                    set_dns(server)
                    retry_times += 1
                time.sleep(_RETRY_DELAY)
                continue
            if failed:
                log("网络已连接")
            return addr