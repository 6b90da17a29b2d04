"""
Tests for the shell command helpers.
"""

import os
import stat

import pytest
from hypothesis import given
from hypothesis import strategies as st

from pyncat.shell.command import exists_on_path, is_clear_command, normalize_line_endings
from pyncat.shell.platform import Platform, user_home


@pytest.mark.parametrize(
    "data",
    [b"cls", b"clear", b"clear-host", b"CLS\r\n", b"  Clear\n", b"Clear-Host\r\n"],
)
def test_is_clear_command(data):
    """Test that clear-screen commands are recognized."""
    assert is_clear_command(data)


@pytest.mark.parametrize("data", [b"", b"ls -la\n", b"clearance\n", b"echo cls\n", b"\xff\xfe"])
def test_is_not_clear_command(data):
    """Test that other input is not treated as a clear command."""
    assert not is_clear_command(data)


def test_normalize_line_endings_nix():
    """Test that CRLF becomes LF on non-Windows platforms."""
    assert normalize_line_endings(b"whoami\r\nid\r\n", Platform.NIX) == b"whoami\nid\n"
    assert normalize_line_endings(b"lone\rcr\n", Platform.NIX) == b"lone\rcr\n"


@given(st.binary())
def test_normalize_line_endings_idempotent(data):
    """Test that normalizing twice equals normalizing once."""
    once = normalize_line_endings(data, Platform.NIX)
    assert normalize_line_endings(once, Platform.NIX) == once
    assert b"\r\n" not in once


@given(st.binary())
def test_normalize_line_endings_windows_passthrough(data):
    """Test that Windows data passes through unmodified."""
    assert normalize_line_endings(data, Platform.WIN) == data


def test_platform_eol():
    """Test the newline sequence of each platform."""
    assert Platform.NIX.eol == b"\n"
    assert Platform.WIN.eol == b"\r\n"
    assert Platform.current() in (Platform.NIX, Platform.WIN)


def test_user_home():
    """Test that the home directory is an absolute path."""
    assert os.path.isabs(user_home())


def test_exists_on_path_file(tmp_path):
    """Test that an existing file path is returned as an absolute path."""
    exe = tmp_path / "tool.sh"
    exe.write_text("#!/bin/sh\n")
    exe.chmod(exe.stat().st_mode | stat.S_IEXEC)

    assert exists_on_path(str(exe)) == str(exe)


def test_exists_on_path_search(tmp_path, monkeypatch):
    """Test lookup through the PATH environment variable."""
    exe = tmp_path / "pyncat-helper"
    exe.write_text("#!/bin/sh\n")
    exe.chmod(exe.stat().st_mode | stat.S_IEXEC)
    monkeypatch.setenv("PATH", str(tmp_path))

    assert exists_on_path("pyncat-helper") == str(exe)


@pytest.mark.skipif(os.name == "nt", reason="POSIX executable bits")
def test_exists_on_path_extension_fallback(tmp_path, monkeypatch):
    """Test that common executable extensions are tried."""
    exe = tmp_path / "pyncat-script.sh"
    exe.write_text("#!/bin/sh\n")
    exe.chmod(exe.stat().st_mode | stat.S_IEXEC)
    monkeypatch.setenv("PATH", str(tmp_path))

    assert exists_on_path("pyncat-script") == str(exe)


@pytest.mark.parametrize("exe", ["", "pyncat-definitely-missing-binary"])
def test_exists_on_path_missing(exe, tmp_path, monkeypatch):
    """Test that missing executables are reported as None."""
    monkeypatch.setenv("PATH", str(tmp_path))
    assert exists_on_path(exe) is None
