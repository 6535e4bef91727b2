"""
Signal handling for the tick loop.

The handler never touches the series store. It only sets a shutdown event,
which the orchestrator checks between ticks and which cuts the inter-tick
sleep short.
"""

import logging
import signal
import threading
from typing import Any, Optional

logger = logging.getLogger(__name__)


class SignalHandler:
    """
    Installs SIGINT/SIGTERM handlers that request a cooperative shutdown.

    Usable as a context manager; the original handlers are restored on exit.
    """

    def __init__(self, shutdown_event: Optional[threading.Event] = None):
        self.shutdown_event = shutdown_event or threading.Event()
        self._original_sigint_handler = None
        self._original_sigterm_handler = None
        self._signal_handlers_set = False

    def setup_signal_handlers(self) -> None:
        """Install handlers, keeping the originals for later restoration."""
        self._original_sigint_handler = signal.signal(signal.SIGINT, self._handle_signal)
        self._original_sigterm_handler = signal.signal(signal.SIGTERM, self._handle_signal)
        self._signal_handlers_set = True
        logger.debug("Signal handlers installed")

    def cleanup_signal_handlers(self) -> None:
        """Restore original signal handlers."""
        if not self._signal_handlers_set:
            return

        try:
            if self._original_sigint_handler is not None:
                signal.signal(signal.SIGINT, self._original_sigint_handler)
            if self._original_sigterm_handler is not None:
                signal.signal(signal.SIGTERM, self._original_sigterm_handler)
            logger.debug("Signal handlers restored")
        finally:
            self._signal_handlers_set = False

    def _handle_signal(self, signum: int, frame: Any) -> None:
        if self.shutdown_event.is_set():
            logger.warning("Shutdown already in progress. Please be patient.")
            return
        logger.info(
            f"Signal {signal.Signals(signum).name} received. "
            "Stopping after the current tick..."
        )
        self.shutdown_event.set()

    def __enter__(self) -> "SignalHandler":
        self.setup_signal_handlers()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup_signal_handlers()
