"""Finding the newest release for this platform and updating to it."""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

import httpx

from .httpclient import HTTPStatusError, create_http_client, get_http_response
from .messages import log
from .selfupdate import (
    CannotDecompressFileError,
    ExecutableNotFoundInArchiveError,
    decompress_and_update,
    generate_additional_arch,
    go_arch,
    go_os,
)
from .versioning import Version, parse_version

logger = logging.getLogger("ddnskit")

REPOSITORY = "jeessy2/ddns-go"
_LATEST_URL = "https://api.github.com/repos/{repo}/releases/latest"


@dataclass
class Asset:
    """A file attached to a release."""

    name: str = ""
    url: str = ""


@dataclass
class Release:
    """A release tag and its assets."""

    tag_name: str = ""
    assets: list[Asset] = field(default_factory=list)


@dataclass
class Latest:
    """The newest release asset for this operating system and architecture."""

    name: str
    url: str
    version: Version


def new_release(data: Mapping[str, Any]) -> Release:
    """Build a Release from the JSON object describing it."""
    assets = [
        Asset(name=item.get("name") or "", url=item.get("browser_download_url") or "")
        for item in data.get("assets") or []
    ]
    return Release(tag_name=data.get("tag_name") or "", assets=assets)


def get_latest(repo: str) -> Release:
    """Fetch the latest release of ``repo`` ("owner/name")."""
    with create_http_client() as client:
        response = client.get(_LATEST_URL.format(repo=repo))
        try:
            result = get_http_response(response)
            if result is None:
                result = {}
            if not isinstance(result, dict):
                raise ValueError("release description is not a JSON object")
        except (HTTPStatusError, ValueError) as exc:
            log("异常信息: %s", exc)
            raise
    return new_release(result)


def asset_match_suffixes(name: str, suffixes: Sequence[str]) -> bool:
    """Return True if ``name`` ends with any of ``suffixes``."""
    return any(name.endswith(suffix) for suffix in suffixes)


def get_suffixes(arch: str) -> list[str]:
    """Return the asset name endings to look for on this platform and ``arch``."""
    return [f"{go_os()}_{arch}{ext}" for ext in (".zip", ".tar.gz")]


def find_asset_from_release(
    rel: Release | None, suffixes: Sequence[str]
) -> tuple[Asset, Version] | None:
    """Return the first asset matching ``suffixes`` and the release version."""
    if rel is None:
        logger.info("There is no source release information")
        return None

    try:
        version = parse_version(rel.tag_name)
    except ValueError:
        logger.info("Cannot parse semantic version: %s", rel.tag_name)
        return None

    for asset in rel.assets:
        if asset_match_suffixes(asset.name, suffixes):
            return asset, version

    logger.info("Can't find suitable asset in release %s", rel.tag_name)
    return None


def find_asset_for_arch(arch: str, rel: Release | None) -> tuple[Asset, Version] | None:
    """Return the asset of ``rel`` built for ``arch``, with the release version."""
    found = find_asset_from_release(rel, get_suffixes(arch))
    if found is None:
        logger.info("Cannot find any release for %s/%s", go_os(), go_arch())
    return found


def find_asset(rel: Release | None) -> tuple[Asset, Version] | None:
    """Return the best asset for this machine, trying specific architectures first."""
    for arch in [*generate_additional_arch(), go_arch()]:
        found = find_asset_for_arch(arch, rel)
        if found is not None:
            return found
    return None


def detect_latest(repo: str) -> Latest | None:
    """Return the newest asset of ``repo`` for this platform, or None if there is none."""
    found = find_asset(get_latest(repo))
    if found is None:
        return None
    asset, version = found
    return Latest(name=asset.name, url=asset.url, version=version)


def download_asset_from_url(url: str) -> bytes:
    """Download and return the asset at ``url``."""
    with create_http_client() as client:
        try:
            response = client.get(url, follow_redirects=True)
        except httpx.HTTPError as exc:
            raise OSError(f"could not download release from {url}: {exc}") from exc
        if response.status_code >= 300:
            response.close()
            raise OSError(
                f"could not download release from {url}. Response code: {response.status_code}"
            )
        return response.content


def update_to(asset_url: str, asset_file_name: str, cmd_path: str | os.PathLike[str]) -> None:
    """Download the asset and replace the executable at ``cmd_path`` with it."""
    decompress_and_update(download_asset_from_url(asset_url), asset_file_name, cmd_path)


def _executable_path() -> str:
    program = sys.argv[0] if sys.argv else ""
    if not program or not os.path.isfile(program):
        raise OSError("cannot determine the path of the running executable")
    return os.path.realpath(program)


def self_update(version: str) -> bool:
    """Update the running program to the newest release; return True if it was updated."""
    try:
        current = parse_version(version)
    except ValueError as exc:
        logger.info("Cannot update because: %s", exc)
        return False

    try:
        latest = detect_latest(REPOSITORY)
    except (httpx.HTTPError, HTTPStatusError, ValueError) as exc:
        logger.info("Error happened when detecting latest version: %s", exc)
        return False
    if latest is None:
        logger.info("Cannot find any release for %s/%s", go_os(), go_arch())
        return False
    if current.greater_than_or_equal(latest.version):
        logger.info("Current version (%s) is the latest", version)
        return False

    try:
        exe = _executable_path()
    except OSError as exc:
        logger.info("Cannot find executable path: %s", exc)
        return False

    try:
        update_to(latest.url, latest.name, exe)
    except (OSError, CannotDecompressFileError, ExecutableNotFoundInArchiveError) as exc:
        logger.info("Error happened when updating binary: %s", exc)
        return False

    logger.info("Success update to v%s", latest.version)
    return True