"""Replacing the running executable with a new one taken from a release archive."""

from __future__ import annotations

import contextlib
import io
import logging
import os
import platform
import re
import subprocess
import sys
import tarfile
import zipfile
import zlib
from collections.abc import Callable
from typing import BinaryIO, Union

logger = logging.getLogger("ddnskit")

MIN_ARM = 5
MAX_ARM = 7

Source = Union[bytes, bytearray, memoryview, BinaryIO]


class CannotDecompressFileError(Exception):
    """The release archive could not be decompressed."""


class ExecutableNotFoundInArchiveError(Exception):
    """The release archive does not contain the executable."""


def _read_all(src: Source) -> bytes:
    if isinstance(src, (bytes, bytearray, memoryview)):
        return bytes(src)
    return src.read()


def apply(update: Source, target_path: str | os.PathLike[str]) -> None:
    """Replace the file at ``target_path`` with the content of ``update``.

    The new content is written next to the target as "<name>.new", the target is
    moved to "<name>.old", the new file is moved into place and the old one removed.
    If the final move fails the old file is moved back.
    """
    new_bytes = _read_all(update)
    target = os.fspath(target_path)
    directory, filename = os.path.split(target)

    new_path = os.path.join(directory, f"{filename}.new")
    fd = os.open(new_path, os.O_CREAT | os.O_WRONLY | os.O_TRUNC, 0o755)
    with os.fdopen(fd, "wb") as fp:
        fp.write(new_bytes)

    old_path = os.path.join(directory, f"{filename}.old")
    with contextlib.suppress(OSError):
        os.remove(old_path)

    os.rename(target, old_path)
    try:
        os.rename(new_path, target)
    except OSError:
        with contextlib.suppress(OSError):
            os.rename(old_path, target)
        raise

    try:
        os.remove(old_path)
    except OSError:
        if go_os() == "windows":
            # A running executable cannot be deleted; remove it once the process has exited.
            subprocess.Popen(["cmd.exe", "/c", "ping 127.0.0.1 -n 2 > NUL & del " + old_path])
            return
        raise


_OS_PREFIXES = (
    ("linux", "linux"),
    ("darwin", "darwin"),
    ("freebsd", "freebsd"),
    ("openbsd", "openbsd"),
    ("netbsd", "netbsd"),
    ("dragonfly", "dragonfly"),
    ("android", "android"),
    ("ios", "ios"),
    ("aix", "aix"),
    ("sunos", "solaris"),
)

_ARCH_ALIASES = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "x64": "amd64",
    "i386": "386",
    "i486": "386",
    "i586": "386",
    "i686": "386",
    "x86": "386",
    "aarch64": "arm64",
    "arm64": "arm64",
    "ppc64le": "ppc64le",
    "ppc64": "ppc64",
    "s390x": "s390x",
    "riscv64": "riscv64",
    "mips": "mips",
    "mipsel": "mipsle",
    "mips64": "mips64",
    "mips64el": "mips64le",
    "loongarch64": "loong64",
}


def go_os() -> str:
    """Return the operating system name as used in release asset names."""
    name = sys.platform
    if name in ("win32", "cygwin", "msys"):
        return "windows"
    for prefix, result in _OS_PREFIXES:
        if name.startswith(prefix):
            return result
    return name


def go_arch() -> str:
    """Return the CPU architecture name as used in release asset names."""
    machine = platform.machine().lower()
    if machine in _ARCH_ALIASES:
        return _ARCH_ALIASES[machine]
    if machine.startswith("arm"):
        return "arm"
    return machine


def _goarm() -> int:
    match = re.match(r"armv(\d+)", platform.machine().lower())
    if match is None:
        return 0
    return min(int(match.group(1)), MAX_ARM)


def generate_additional_arch() -> list[str]:
    """Return more specific architecture names to try before the generic one."""
    arch = go_arch()
    if arch == "arm":
        goarm = _goarm()
        if MIN_ARM <= goarm <= MAX_ARM:
            return [f"armv{v}" for v in range(goarm, MIN_ARM - 1, -1)]
    if arch == "amd64":
        return ["x86_64"]
    return []


def match_executable_name(cmd: str, target: str) -> bool:
    """Return True if ``target`` is the executable ``cmd`` (optionally with ".exe")."""
    return cmd == target or cmd + ".exe" == target


def _unzip(data: bytes, cmd: str) -> bytes:
    try:
        archive = zipfile.ZipFile(io.BytesIO(data))
    except (zipfile.BadZipFile, OSError) as exc:
        raise CannotDecompressFileError(f"failed to decompress zip file: {exc}") from exc

    with archive:
        for info in archive.infolist():
            if info.is_dir() or not match_executable_name(cmd, os.path.basename(info.filename)):
                continue
            try:
                return archive.read(info)
            except (zipfile.BadZipFile, zlib.error, OSError, NotImplementedError) as exc:
                raise CannotDecompressFileError(f"failed to decompress zip file: {exc}") from exc

    raise ExecutableNotFoundInArchiveError(f"executable not found in zip file: {cmd!r}")


def _untar(data: bytes, cmd: str) -> bytes:
    try:
        with tarfile.open(fileobj=io.BytesIO(data), mode="r:gz") as archive:
            for member in archive:
                if match_executable_name(cmd, os.path.basename(member.name)):
                    extracted = archive.extractfile(member)
                    return extracted.read() if extracted is not None else b""
    except (tarfile.TarError, EOFError, zlib.error, OSError) as exc:
        raise CannotDecompressFileError(f"failed to decompress tar.gz file: {exc}") from exc

    raise ExecutableNotFoundInArchiveError(f"executable not found in tar.gz file: {cmd!r}")


_FILE_TYPES: dict[str, Callable[[bytes, str], bytes]] = {
    ".zip": _unzip,
    ".tar.gz": _untar,
}


def decompress_command(src: Source, url: str, cmd: str) -> bytes:
    """Return the content of executable ``cmd`` from ``src``.

    The archive format (".zip" or ".tar.gz") is taken from the end of ``url``;
    anything else is returned as it is.
    """
    data = _read_all(src)
    for extension, decompress in _FILE_TYPES.items():
        if url.endswith(extension):
            return decompress(data, cmd)
    logger.info("It's not a compressed file, skip decompressing")
    return data


def decompress_and_update(src: Source, asset_name: str, cmd_path: str | os.PathLike[str]) -> None:
    """Extract the executable from the asset and install it at ``cmd_path``."""
    cmd = os.path.basename(os.fspath(cmd_path))
    apply(decompress_command(src, asset_name, cmd), cmd_path)