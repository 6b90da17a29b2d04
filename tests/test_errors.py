"""
Tests for the error taxonomy and error reporting.
"""

import pytest

from pyncat.errors import (
    USAGE,
    ConfigurationError,
    ErrorMessage,
    Except,
    NetworkError,
    PyncatError,
    SocketTimeoutError,
    UsageError,
    handle_error,
)
from pyncat.io.output import Level


def test_every_kind_has_single_slot_template():
    """Test that each error kind maps to a template with one slot."""
    for kind in Except:
        assert kind.template.count("%") == 1, kind


def test_templates_are_unique():
    """Test that no two error kinds share a template."""
    templates = [kind.template for kind in Except]
    assert len(templates) == len(set(templates))


def test_error_message_build():
    """Test building a message substitutes the argument once."""
    msg = ErrorMessage("Unable to reach host %")
    assert not msg.built

    assert msg.build("10.0.0.1:44444") == "Unable to reach host 10.0.0.1:44444"
    assert msg.built
    assert msg.message == "Unable to reach host 10.0.0.1:44444"


def test_error_message_brace_slot():
    """Test that the ``{}`` slot is accepted as well."""
    assert ErrorMessage("value: {}").build("x") == "value: x"


def test_error_message_argument_with_percent():
    """Test an argument containing a slot marker is inserted verbatim."""
    msg = ErrorMessage("Invalid payload for argument(s): %")
    assert msg.build("100%") == "Invalid payload for argument(s): 100%"
    assert msg.built


def test_error_message_build_twice_raises():
    """Test that a built message cannot be built again."""
    msg = ErrorMessage("Socket timeout occurred: %")
    msg.build("host:1")

    with pytest.raises(RuntimeError):
        msg.build("host:2")


def test_error_message_none_argument_raises():
    """Test that a None argument is rejected."""
    with pytest.raises(ValueError):
        ErrorMessage("Socket timeout occurred: %").build(None)


def test_error_message_empty_argument_raises():
    """Test that an empty argument is rejected."""
    msg = ErrorMessage("Missing EOL in argument(s): %")

    with pytest.raises(ValueError):
        msg.build("")
    assert not msg.built


@pytest.mark.parametrize("template", ["", "   ", "no slot here"])
def test_error_message_invalid_template(template):
    """Test that blank and slot-less templates are rejected."""
    with pytest.raises(ValueError):
        ErrorMessage(template)


def test_pyncat_error_message():
    """Test that domain errors render their kind's message."""
    exc = NetworkError(Except.CONNECTION_REFUSED, "127.0.0.1:44444")

    assert str(exc) == "Connection was actively refused by 127.0.0.1:44444"
    assert exc.kind is Except.CONNECTION_REFUSED
    assert exc.arg == "127.0.0.1:44444"
    assert exc.level is Level.ERROR
    assert not exc.show_usage


@pytest.mark.parametrize("arg", [None, ""])
def test_pyncat_error_requires_argument(arg):
    """Test that domain errors cannot be raised without an argument."""
    with pytest.raises(ValueError):
        PyncatError(Except.EXE_PATH, arg)

    with pytest.raises(ValueError):
        UsageError(Except.REQUIRED_ARGS, arg)


def test_error_subclasses():
    """Test the defaults of the exception subclasses."""
    usage = UsageError(Except.ARGS_COMBO, "--exec, --text")
    assert usage.show_usage
    assert isinstance(usage, PyncatError)

    timeout = SocketTimeoutError("10.255.255.1:44444")
    assert timeout.kind is Except.TIMED_OUT
    assert timeout.level is Level.WARN
    assert isinstance(timeout, NetworkError)

    config = ConfigurationError("poll_interval='x'")
    assert config.kind is Except.INVALID_ARGS
    assert "poll_interval" in str(config)


def test_handle_error_reports_message(capsys):
    """Test that errors are written to stderr and exit status 1 is returned."""
    code = handle_error(NetworkError(Except.ADDRESS_IN_USE, "0.0.0.0:44444"))

    captured = capsys.readouterr()
    assert code == 1
    assert "[x] The endpoint is already in use: 0.0.0.0:44444" in captured.err
    assert USAGE not in captured.out


def test_handle_error_usage_line(capsys):
    """Test that argument errors print the usage reminder first."""
    handle_error(UsageError(Except.REQUIRED_ARGS, "TARGET"))

    captured = capsys.readouterr()
    assert captured.out.startswith(USAGE)
    assert "[x] Missing required argument(s): TARGET" in captured.err


def test_handle_error_warn_level(capsys):
    """Test that warn-level errors use the warning prefix."""
    handle_error(SocketTimeoutError("10.255.255.1:44444"))

    captured = capsys.readouterr()
    assert "[!] Socket timeout occurred: 10.255.255.1:44444" in captured.err


def test_handle_error_debug_dump(capsys):
    """Test that debug mode dumps the underlying exception."""
    try:
        try:
            raise ConnectionRefusedError(111, "Connection refused")
        except OSError as exc:
            raise NetworkError(Except.CONNECTION_REFUSED, "127.0.0.1:1") from exc
    except NetworkError as exc:
        error = exc

    handle_error(error, debug=True)

    out = capsys.readouterr().out
    assert "----[ builtins.ConnectionRefusedError ]----" in out
    assert "Traceback" in out


def test_handle_error_debug_without_cause(capsys):
    """Test that debug mode without a cause prints no dump."""
    handle_error(PyncatError(Except.UNHANDLED, "boom"), debug=True)

    assert "----[" not in capsys.readouterr().out
