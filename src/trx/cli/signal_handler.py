"""Signal handling for the trx command-line interface.

SIGINT interrupts a running scan cooperatively: the handler only sets an event,
which the tree builder checks between sibling entries. SIGPIPE (on platforms
that have it) marks the output as closed so writing stops quietly.
"""

import atexit
import os
import signal
import sys
from threading import Event
from types import FrameType
from typing import Any, Optional

SIGPIPE = getattr(signal, "SIGPIPE", None)


class SignalHandler:
    """Records SIGPIPE and SIGINT so the CLI can stop cleanly.

    Each handler restores the original handler after the first signal, so a
    second Ctrl+C falls back to the default behavior.

    Attributes:
        sigpipe_received: Event set when SIGPIPE is received.
        sigint_received: Event set when SIGINT is received. Also used as the
            tree builder's cancel event.
    """

    def __init__(self) -> None:
        self.sigpipe_received = Event()
        self.sigint_received = Event()
        self.original_sigpipe_handler: Any = signal.getsignal(SIGPIPE) if SIGPIPE is not None else None
        self.original_sigint_handler: Any = signal.getsignal(signal.SIGINT)

    def handle_sigpipe(self, signum: int, frame: Optional[FrameType]) -> None:
        self.sigpipe_received.set()
        if SIGPIPE is not None:
            signal.signal(SIGPIPE, self.original_sigpipe_handler)

    def handle_sigint(self, signum: int, frame: Optional[FrameType]) -> None:
        self.sigint_received.set()
        signal.signal(signal.SIGINT, self.original_sigint_handler)

    def interrupted(self) -> bool:
        """Return True if either signal has been received."""
        return self.sigpipe_received.is_set() or self.sigint_received.is_set()


# Singleton shared by the CLI modules
signal_handler = SignalHandler()


def setup_signal_handling() -> None:
    """Install the SIGPIPE and SIGINT handlers."""
    if SIGPIPE is not None:
        signal.signal(SIGPIPE, signal_handler.handle_sigpipe)
    signal.signal(signal.SIGINT, signal_handler.handle_sigint)


def cleanup() -> None:
    """Silence stdout at exit after an interruption.

    Redirects stdout to the null device so that flushing a closed pipe during
    interpreter shutdown does not print a second error.
    """
    if signal_handler.interrupted():
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())


atexit.register(cleanup)
