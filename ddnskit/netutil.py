"""Network address helpers for incoming requests."""

from __future__ import annotations

import ipaddress
from collections.abc import Mapping

_PRIVATE_V4 = tuple(
    ipaddress.ip_network(net) for net in ("10.0.0.0/8", "172.16.0.0/12", "192.168.0.0/16")
)
_PRIVATE_V6 = (ipaddress.ip_network("fc00::/7"),)


def _parse_ip(text: str) -> ipaddress.IPv4Address | ipaddress.IPv6Address | None:
    if "%" in text:
        return None
    try:
        ip = ipaddress.ip_address(text)
    except ValueError:
        return None
    if isinstance(ip, ipaddress.IPv6Address) and ip.ipv4_mapped is not None:
        return ip.ipv4_mapped
    return ip


def is_private_network(remote_addr: str) -> bool:
    """Return True for loopback, private or link-local addresses (an optional port is ignored)."""
    host = remote_addr
    if host.startswith("["):
        end = host.rfind("]")
        if end == -1:
            return False
        host = host[1:end]
    else:
        colon = host.rfind(":")
        if colon != -1:
            host = host[:colon]

    ip = _parse_ip(host)
    if ip is None:
        return False
    private = _PRIVATE_V4 if ip.version == 4 else _PRIVATE_V6
    return ip.is_loopback or any(ip in net for net in private) or ip.is_link_local


def _header(headers: Mapping[str, str], name: str) -> str:
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return ""


def get_request_ip_str(remote_addr: str, headers: Mapping[str, str]) -> str:
    """Describe where a request came from, including proxy headers."""
    addr = "Remote: " + remote_addr
    real_ip = _header(headers, "X-Real-IP")
    if real_ip:
        addr += " ,Real-IP: " + real_ip
    forwarded = _header(headers, "X-Forwarded-For")
    if forwarded:
        addr += " ,Forwarded-For: " + forwarded
    return addr