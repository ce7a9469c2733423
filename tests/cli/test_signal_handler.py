"""Unit tests for the signal handler module in keepdir CLI."""

import os
import signal
from unittest.mock import MagicMock, patch

import pytest

from keepdir.cli.signal_handler import SignalHandler, cleanup, setup_signal_handling, signal_handler


@pytest.fixture
def mock_signal():
    """Patch signal.signal so no real handler is installed."""
    with patch("signal.signal", autospec=True) as mock:
        yield mock


@pytest.fixture
def fresh_signal_handler():
    """Create a fresh SignalHandler instance, independent of the singleton."""
    return SignalHandler()


def test_initial_state(fresh_signal_handler):
    assert not fresh_signal_handler.sigpipe_received.is_set()
    assert not fresh_signal_handler.sigint_received.is_set()
    assert fresh_signal_handler.exit_code() is None


def test_handle_sigpipe(fresh_signal_handler, mock_signal):
    fresh_signal_handler.handle_sigpipe(signal.SIGPIPE, MagicMock())

    assert fresh_signal_handler.sigpipe_received.is_set()
    mock_signal.assert_called_once_with(signal.SIGPIPE, fresh_signal_handler.original_sigpipe_handler)
    assert fresh_signal_handler.exit_code() == 141


def test_handle_sigint_raises_keyboard_interrupt(fresh_signal_handler, mock_signal):
    with pytest.raises(KeyboardInterrupt):
        fresh_signal_handler.handle_sigint(signal.SIGINT, MagicMock())

    assert fresh_signal_handler.sigint_received.is_set()
    mock_signal.assert_called_once_with(signal.SIGINT, fresh_signal_handler.original_sigint_handler)
    assert fresh_signal_handler.exit_code() == 130


def test_sigpipe_takes_precedence(fresh_signal_handler):
    fresh_signal_handler.sigint_received.set()
    fresh_signal_handler.sigpipe_received.set()
    assert fresh_signal_handler.exit_code() == 141


def test_setup_signal_handling(mock_signal):
    setup_signal_handling()
    mock_signal.assert_any_call(signal.SIGPIPE, signal_handler.handle_sigpipe)
    mock_signal.assert_any_call(signal.SIGINT, signal_handler.handle_sigint)


def test_cleanup_without_signals_does_nothing():
    with patch("keepdir.cli.signal_handler.signal_handler", SignalHandler()):
        with patch("keepdir.cli.signal_handler.os.dup2") as mock_dup2:
            cleanup()
    mock_dup2.assert_not_called()


def test_cleanup_redirects_stdout_after_signal():
    handler = SignalHandler()
    handler.sigpipe_received.set()
    with patch("keepdir.cli.signal_handler.signal_handler", handler):
        with patch("keepdir.cli.signal_handler.os", autospec=True) as mock_os:
            mock_os.open.return_value = 123
            mock_os.devnull = os.devnull
            mock_os.O_WRONLY = os.O_WRONLY
            with patch("keepdir.cli.signal_handler.sys") as mock_sys:
                mock_sys.stdout.fileno.return_value = 1
                cleanup()

    mock_os.open.assert_called_once_with(os.devnull, os.O_WRONLY)
    mock_os.dup2.assert_called_once_with(123, 1)
