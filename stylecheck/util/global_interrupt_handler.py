"""Ctrl-C coordination between the main thread and scan workers.

Workers poll ``is_interrupted()`` between files. The main thread turns a set
flag into ``KeyboardInterrupt`` and ``main`` exits with status 130. A second
Ctrl-C while the scan is winding down exits the process at once.
"""

import _thread
import logging
import os
import signal
import threading
from typing import Optional


logger = logging.getLogger(__name__)

INTERRUPTED_EXIT_CODE = 130


class ScanInterrupt:
    """Process-wide stop flag for one scan."""

    def __init__(self) -> None:
        self._stop = threading.Event()
        self._requests = 0
        self._requests_lock = threading.Lock()
        self._installed = False

    def is_set(self) -> bool:
        return self._stop.is_set()

    def request_stop(self, source: Optional[str] = None) -> None:
        with self._requests_lock:
            self._requests += 1
            requests = self._requests
        if requests == 1:
            self._stop.set()
            where = f" ({source})" if source else ""
            logger.warning("Interrupted%s, stopping the scan", where)
        else:
            logger.warning("Interrupted again, exiting immediately")
            os._exit(INTERRUPTED_EXIT_CODE)

    def stop_from_worker(self) -> None:
        """Record a KeyboardInterrupt seen in a worker thread and forward it to the main thread."""
        if not self.is_set():
            self.request_stop(source=threading.current_thread().name)
        _thread.interrupt_main()

    def install(self) -> None:
        # signal.signal only works on the main thread
        if self._installed or threading.current_thread() is not threading.main_thread():
            return

        def on_sigint(signum: int, frame: object) -> None:
            self.request_stop()
            raise KeyboardInterrupt()

        signal.signal(signal.SIGINT, on_sigint)
        self._installed = True

    def clear(self) -> None:
        with self._requests_lock:
            self._requests = 0
        self._stop.clear()


_scan_interrupt = ScanInterrupt()


def is_interrupted() -> bool:
    return _scan_interrupt.is_set()


def signal_interrupt() -> None:
    _scan_interrupt.request_stop()


def notify_main_thread() -> None:
    _scan_interrupt.stop_from_worker()


def install_signal_handler() -> None:
    _scan_interrupt.install()


def reset_interrupt() -> None:
    _scan_interrupt.clear()
