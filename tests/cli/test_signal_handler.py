"""Unit tests for the signal handler module."""

import os
import signal
from unittest.mock import MagicMock, patch

import pytest

from trx.cli.signal_handler import SIGPIPE, SignalHandler, cleanup, setup_signal_handling, signal_handler


@pytest.fixture
def mock_signal():
    """Create a mock for signal.signal."""
    with patch("signal.signal", autospec=True) as mock:
        yield mock


@pytest.fixture
def mock_os():
    """Create a mock for os module functions used in signal handling."""
    with patch("trx.cli.signal_handler.os", autospec=True) as mock:
        mock.open.return_value = 123
        mock.dup2 = MagicMock()
        mock.devnull = "/dev/null"
        mock.O_WRONLY = os.O_WRONLY
        yield mock


@pytest.fixture
def fresh_signal_handler():
    """Create a fresh SignalHandler instance, independent of the singleton."""
    return SignalHandler()


def test_signal_handler_initialization(fresh_signal_handler):
    assert not fresh_signal_handler.sigpipe_received.is_set()
    assert not fresh_signal_handler.sigint_received.is_set()
    assert not fresh_signal_handler.interrupted()
    assert fresh_signal_handler.original_sigint_handler == signal.getsignal(signal.SIGINT)


def test_handle_sigint(fresh_signal_handler, mock_signal):
    fresh_signal_handler.handle_sigint(signal.SIGINT, None)

    assert fresh_signal_handler.sigint_received.is_set()
    assert fresh_signal_handler.interrupted()
    mock_signal.assert_called_once_with(signal.SIGINT, fresh_signal_handler.original_sigint_handler)


@pytest.mark.skipif(SIGPIPE is None, reason="SIGPIPE is not available on this platform")
def test_handle_sigpipe(fresh_signal_handler, mock_signal):
    fresh_signal_handler.handle_sigpipe(SIGPIPE, None)

    assert fresh_signal_handler.sigpipe_received.is_set()
    assert fresh_signal_handler.interrupted()
    mock_signal.assert_called_once_with(SIGPIPE, fresh_signal_handler.original_sigpipe_handler)


def test_setup_signal_handling(mock_signal):
    setup_signal_handling()

    mock_signal.assert_any_call(signal.SIGINT, signal_handler.handle_sigint)
    if SIGPIPE is not None:
        mock_signal.assert_any_call(SIGPIPE, signal_handler.handle_sigpipe)
        assert mock_signal.call_count == 2
    else:
        assert mock_signal.call_count == 1


def test_cleanup_without_interruption(mock_os):
    cleanup()
    mock_os.open.assert_not_called()
    mock_os.dup2.assert_not_called()


def test_cleanup_after_interruption(mock_os):
    signal_handler.sigpipe_received.set()
    with patch("sys.stdout") as mock_stdout:
        mock_stdout.fileno.return_value = 1
        cleanup()

    mock_os.open.assert_called_once_with("/dev/null", os.O_WRONLY)
    mock_os.dup2.assert_called_once_with(123, 1)
