"""
Tests for the configuration module.
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from pyncat.config import (
    CONNECT_TIMEOUT,
    DEFAULT_ADDRESS,
    DEFAULT_PORT,
    POLL_INTERVAL,
    CmdLineArgs,
    PipeType,
    TransferOpt,
    get_config,
    get_env_config,
    get_seconds,
    valid_port,
)
from pyncat.errors import ConfigurationError


def test_cmd_line_args_defaults():
    """Test the default command-line configuration."""
    args = CmdLineArgs()

    assert args.port == DEFAULT_PORT
    assert args.address == DEFAULT_ADDRESS
    assert args.pipe_variant is PipeType.STREAM
    assert args.transfer_opt is TransferOpt.NONE
    assert not args.using_exe
    assert not args.transfer
    assert not args.using_payload
    assert not args.zero_io


def test_cmd_line_args_derived_properties():
    """Test the derived mode properties."""
    args = CmdLineArgs(
        exe_path="/bin/sh",
        transfer_opt=TransferOpt.COLLECT,
        payload="hello",
        pipe_variant=PipeType.STATUS,
    )

    assert args.using_exe
    assert args.transfer
    assert args.using_payload
    assert args.zero_io


def test_cmd_line_args_is_frozen():
    """Test that the configuration cannot be mutated."""
    args = CmdLineArgs()
    with pytest.raises(AttributeError):
        args.port = 1


@given(st.integers(min_value=1, max_value=65535))
def test_valid_port_accepts_range(port):
    """Test that every port from 1 to 65535 is valid."""
    assert valid_port(port)


@given(st.integers().filter(lambda p: p < 1 or p > 65535))
def test_valid_port_rejects_out_of_range(port):
    """Test that every other integer is rejected."""
    assert not valid_port(port)


def test_get_env_config(monkeypatch):
    """Test reading prefixed environment variables."""
    monkeypatch.setenv("PYNCAT_POLL_INTERVAL", "0.25")
    assert get_env_config("poll_interval") == "0.25"

    monkeypatch.delenv("PYNCAT_POLL_INTERVAL")
    assert get_env_config("poll_interval") is None


def test_get_config_hierarchy(monkeypatch):
    """Test that explicit config beats the environment, which beats defaults."""
    monkeypatch.delenv("PYNCAT_CONNECT_TIMEOUT", raising=False)
    assert get_config("connect_timeout") == CONNECT_TIMEOUT

    monkeypatch.setenv("PYNCAT_CONNECT_TIMEOUT", "1.5")
    assert get_config("connect_timeout") == "1.5"

    assert get_config("connect_timeout", {"connect_timeout": 9}) == 9


def test_get_config_unknown_key():
    """Test that a key without a default raises KeyError."""
    with pytest.raises(KeyError):
        get_config("nonexistent")


def test_get_seconds(monkeypatch):
    """Test parsing durations from the hierarchy."""
    monkeypatch.delenv("PYNCAT_POLL_INTERVAL", raising=False)
    assert get_seconds("poll_interval") == POLL_INTERVAL

    monkeypatch.setenv("PYNCAT_POLL_INTERVAL", "0.5")
    assert get_seconds("poll_interval") == 0.5


@pytest.mark.parametrize("value", ["abc", "0", "-1", None])
def test_get_seconds_invalid(value):
    """Test that non-positive and non-numeric durations are rejected."""
    with pytest.raises(ConfigurationError):
        get_seconds("poll_interval", {"poll_interval": value})
