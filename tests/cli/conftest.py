"""Fixtures shared by the CLI tests."""

import pytest

from trx.cli.signal_handler import signal_handler


@pytest.fixture(autouse=True)
def reset_signal_state():
    """Clear the signal events of the shared handler around each test."""
    signal_handler.sigpipe_received.clear()
    signal_handler.sigint_received.clear()
    yield
    signal_handler.sigpipe_received.clear()
    signal_handler.sigint_received.clear()
