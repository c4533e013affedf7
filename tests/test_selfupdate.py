import io
import tarfile
import zipfile
from unittest import mock

import pytest

from ddnskit.selfupdate import (
    CannotDecompressFileError,
    ExecutableNotFoundInArchiveError,
    apply,
    decompress_and_update,
    decompress_command,
    generate_additional_arch,
    go_arch,
    match_executable_name,
)

OLD_FILE = bytes([0xDE, 0xAD, 0xBE, 0xEF])
NEW_FILE = bytes([0x01, 0x02, 0x03, 0x04, 0x05, 0x06])
BUF = b"abc"


def _zip_bytes(name, content):
    out = io.BytesIO()
    with zipfile.ZipFile(out, "w") as archive:
        archive.writestr("README.md", b"readme")
        archive.writestr(name, content)
    return out.getvalue()


def _tar_gz_bytes(name, content):
    out = io.BytesIO()
    with tarfile.open(fileobj=out, mode="w:gz") as archive:
        info = tarfile.TarInfo(name)
        info.size = len(content)
        archive.addfile(info, io.BytesIO(content))
    return out.getvalue()


def test_apply(tmp_path):
    target = tmp_path / "TestApply"
    target.write_bytes(OLD_FILE)

    apply(io.BytesIO(NEW_FILE), target)

    assert target.read_bytes() == NEW_FILE
    assert not (tmp_path / "TestApply.old").exists()
    assert not (tmp_path / "TestApply.new").exists()


def test_apply_missing_target(tmp_path):
    with pytest.raises(FileNotFoundError):
        apply(NEW_FILE, tmp_path / "missing")


def test_compression_not_required():
    result = decompress_command(
        io.BytesIO(BUF), "https://example.com/releases/download/v1.2.3/foo", "foo"
    )
    assert result == BUF


@pytest.mark.parametrize(
    "cmd, target, found",
    [
        ("gostuff", "gostuff", True),
        ("gostuff", "gostuff_linux_x86_64", False),
        ("gostuff", "gostuff_darwin_amd64", False),
        ("gostuff", "gostuff.exe", True),
        ("gostuff", "gostuff_windows_amd64.exe", False),
    ],
)
def test_match_executable_name(cmd, target, found):
    assert match_executable_name(cmd, target) is found


@pytest.mark.parametrize("extension", ["zip", "tar.gz"])
def test_error_from_reader(extension):
    with pytest.raises(CannotDecompressFileError) as info:
        decompress_command(io.BytesIO(BUF), "foo." + extension, "foo." + extension)
    assert "failed to decompress" in str(info.value)


def test_unzip_finds_executable():
    data = _zip_bytes("ddns/foo", NEW_FILE)
    assert decompress_command(data, "release.zip", "foo") == NEW_FILE


def test_untar_finds_windows_executable():
    data = _tar_gz_bytes("dir/foo.exe", NEW_FILE)
    assert decompress_command(data, "release.tar.gz", "foo") == NEW_FILE


def test_zip_without_executable():
    with pytest.raises(ExecutableNotFoundInArchiveError):
        decompress_command(_zip_bytes("other", NEW_FILE), "release.zip", "foo")


def test_tar_gz_without_executable():
    with pytest.raises(ExecutableNotFoundInArchiveError):
        decompress_command(_tar_gz_bytes("other", NEW_FILE), "release.tar.gz", "foo")


def test_decompress_and_update(tmp_path):
    target = tmp_path / "foo"
    target.write_bytes(OLD_FILE)
    decompress_and_update(_tar_gz_bytes("foo", NEW_FILE), "foo_linux_amd64.tar.gz", target)
    assert target.read_bytes() == NEW_FILE


@pytest.mark.parametrize(
    "machine, expected",
    [("armv7l", ["armv7", "armv6", "armv5"]), ("x86_64", ["x86_64"]), ("aarch64", [])],
)
def test_generate_additional_arch(machine, expected):
    with mock.patch("platform.machine", return_value=machine):
        assert generate_additional_arch() == expected


@pytest.mark.parametrize(
    "machine, expected",
    [("AMD64", "amd64"), ("aarch64", "arm64"), ("armv6l", "arm"), ("i686", "386")],
)
def test_go_arch(machine, expected):
    with mock.patch("platform.machine", return_value=machine):
        assert go_arch() == expected