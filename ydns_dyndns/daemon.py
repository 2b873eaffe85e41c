#!/usr/bin/env python3
"""
Daemon Management Module

Runs the DDNS update task on a background thread at a fixed interval. A failed
cycle is logged and never stops the loop; only stop() ends it.

Created: 2025-10-27
Author: Manuel Ziel
License: MIT

This program is free software: you can redistribute it and/or modify
"""

################################################################################
# IMPORTS & DEPENDENCIES
################################################################################

# Standard library imports
import logging
import signal
import threading
from typing import Optional, Callable, Dict, Any

# Internal imports
from .exceptions import DynDNSException

DEFAULT_INTERVAL = 60 * 30

################################################################################
# SCHEDULER CLASS - Background Update Loop
################################################################################

class Scheduler:
    """Fixed-interval background loop with a stop signal and a joinable worker thread."""

    def __init__(self, task: Callable[[], None], interval: float = DEFAULT_INTERVAL,
                 logger: Optional[Any] = None, wait: Optional[Callable[[float], bool]] = None,
                 name: str = "DDNSUpdateLoop") -> None:
        """Initialize scheduler.

        Args:
            task: Callable executed once per cycle
            interval: Seconds between two cycles, independent of the cycle outcome
            logger: Logger instance
            wait: Sleep function returning True when the loop should end; defaults
                to waiting on the internal stop event
            name: Worker thread name
        """
        self.task = task
        self.interval = interval
        self.logger = logger if logger else logging.getLogger(__name__)
        self.name = name

        self.running = False
        self.cycles = 0
        self._stop_event = threading.Event()
        self._wait = wait if wait else self._stop_event.wait
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()

    ################################################################################
    # PUBLIC INTERFACE - Lifecycle Management
    ################################################################################

    def start(self) -> bool:
        """Start the loop in a background thread. Returns False if it is already running."""
        with self._lock:
            if self.running:
                self.logger.warning("DDNS update loop is already running")
                return False

            self.running = True
            self._stop_event.clear()

            self._thread = threading.Thread(target=self._daemon_loop, name=self.name, daemon=True)
            self._thread.start()

        self.logger.info(f"DDNS update loop started (interval: {self.interval}s)")
        return True

    def stop(self, timeout: Optional[float] = 30) -> bool:
        """Request shutdown and wait for the worker thread. Returns True once the thread has ended."""
        with self._lock:
            if not self.running:
                self.logger.warning("DDNS update loop is not running")
                return False

            self.logger.info("Stopping DDNS update loop...")
            self._stop_event.set()
            thread = self._thread

        if thread and thread.is_alive() and thread is not threading.current_thread():
            thread.join(timeout=timeout)

            if thread.is_alive():
                self.logger.warning("DDNS update loop did not stop within timeout")
                return False

        self.logger.info("DDNS update loop stopped")
        return True

    def join(self, timeout: Optional[float] = None) -> None:
        """Block until the worker thread ends or timeout elapses."""
        if self._thread:
            self._thread.join(timeout=timeout)

    ################################################################################
    # PUBLIC INTERFACE - Status and Information
    ################################################################################

    def is_running(self) -> bool:
        """Check if the loop is currently running."""
        return self.running and not self._stop_event.is_set()

    def get_status(self) -> Dict[str, Any]:
        """Get current loop status information."""
        return {
            'running': self.running,
            'stop_requested': self._stop_event.is_set(),
            'thread_alive': self._thread.is_alive() if self._thread else False,
            'interval': self.interval,
            'cycles': self.cycles,
        }

    ################################################################################
    # PRIVATE METHODS - Internal Implementation
    ################################################################################

    def run_cycle(self) -> bool:
        """Run the task once, logging any failure. Returns True on success."""
        try:
            self.task()
            return True
        except DynDNSException as e:
            self.logger.error(f"Dynamic DNS update error: {type(e).__name__}: {e}")
            return False
        except Exception as e:
            self.logger.error(f"Unexpected error in DDNS update cycle: {type(e).__name__}: {e}", exc_info=True)
            return False
        finally:
            self.cycles += 1

    def _daemon_loop(self) -> None:
        """Run a cycle, sleep the fixed interval, repeat until stop is requested."""
        self.logger.debug(f"Update loop started (interval: {self.interval}s)")

        try:
            while not self._stop_event.is_set():
                self.run_cycle()

                if self._wait(self.interval):
                    break
        finally:
            self.running = False
            self.logger.debug("Update loop finished")

################################################################################
# SIGNAL HANDLING - Graceful Shutdown of the Host Process
################################################################################

def install_signal_handlers(scheduler: Scheduler, logger: Any) -> None:
    """Stop the scheduler on SIGTERM/SIGINT. Must be called from the main thread."""
    def signal_handler(signum: int, frame: Any) -> None:
        logger.info(f"Received signal {signum}, initiating shutdown...")
        scheduler.stop()

    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)
