"""Parsing and comparison of semantic versions by major, minor and patch."""

from __future__ import annotations

import re
from dataclasses import dataclass

_SEMVER = re.compile(
    r"v?([0-9]+)(\.[0-9]+)?(\.[0-9]+)?"
    r"(-([0-9A-Za-z\-]+(\.[0-9A-Za-z\-]+)*))?"
    r"(\+([0-9A-Za-z\-]+(\.[0-9A-Za-z\-]+)*))?"
)
_MAX_UINT64 = 2**64 - 1


@dataclass(frozen=True, order=True)
class Version:
    """A semantic version reduced to its numeric X.Y.Z parts."""

    major: int = 0
    minor: int = 0
    patch: int = 0

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def compare(self, other: Version) -> int:
        """Return -1, 0 or 1 as this version is lower, equal or higher than ``other``."""
        mine = (self.major, self.minor, self.patch)
        theirs = (other.major, other.minor, other.patch)
        return (mine > theirs) - (mine < theirs)

    def greater_than(self, other: Version) -> bool:
        """Return True if this version is higher than ``other``."""
        return self.compare(other) > 0

    def greater_than_or_equal(self, other: Version) -> bool:
        """Return True if this version is not lower than ``other``."""
        return self.compare(other) >= 0


def _segment(text: str | None) -> int:
    if not text:
        return 0
    value = int(text.removeprefix("."))
    if value > _MAX_UINT64:
        raise ValueError(f"error parsing version number: {text.removeprefix('.')} is out of range")
    return value


def parse_version(v: str) -> Version:
    """Parse ``v`` (an optional "v", then X[.Y[.Z]] with optional pre-release and build)."""
    match = _SEMVER.fullmatch(v)
    if match is None:
        raise ValueError(f"the {v}, it's not a semantic version")
    return Version(_segment(match.group(1)), _segment(match.group(2)), _segment(match.group(3)))