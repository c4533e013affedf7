"""Cache of the last known IP address that limits provider comparisons."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass

IP_CACHE_TIMES_ENV = "DDNS_IP_CACHE_TIMES"
DEFAULT_IP_CACHE_TIMES = 5

force_compare_global = True

_INTEGER = re.compile(r"[+-]?\d+")


def _cache_times() -> int:
    raw = os.environ.get(IP_CACHE_TIMES_ENV, "")
    if _INTEGER.fullmatch(raw):
        return int(raw)
    return DEFAULT_IP_CACHE_TIMES


@dataclass
class IpCache:
    """The last seen address and how many more checks it may be trusted for."""

    addr: str = ""
    times: int = 0
    times_failed_ip: int = 0

    def check(self, new_addr: str) -> bool:
        """Return True when ``new_addr`` should be compared with the DNS provider."""
        if not new_addr:
            return True
        if self.addr != new_addr or self.times <= 1:
            self.addr = new_addr
            self.times = _cache_times() + 1
            return True
        self.addr = new_addr
        self.times -= 1
        return False