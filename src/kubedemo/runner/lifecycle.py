#!/usr/bin/env python3
"""
lifecycle.py
- Running -> Draining -> Terminated state machine for the demo resources.
- SIGINT / SIGTERM move it out of Running; nothing else does, apart from an
  observer failure, which aborts without cleanup.
- The first signal restores the default handlers, so a second one terminates
  the process even while a create or delete call is hanging.
- Draining stops the observer, then deletes the Deployment, then the Service.
  The first failed delete raises and the remaining one is never attempted.
"""

import signal
import threading
from enum import Enum

from loguru import logger

from kubedemo.core.constants import OBSERVER_JOIN_TIMEOUT
from kubedemo.lib.resources import delete_service, delete_workload

SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)

# Slice length for the otherwise unbounded wait, so signal handlers get to run promptly.
_WAIT_SLICE = 0.5


class LifecycleState(Enum):
    RUNNING = "running"
    DRAINING = "draining"
    TERMINATED = "terminated"


class LifecycleController:
    def __init__(self, join_timeout=OBSERVER_JOIN_TIMEOUT):
        self.state = LifecycleState.RUNNING
        self.join_timeout = join_timeout
        self.reason = None
        self.failure = None
        self.observer = None
        self.deleted = []
        self._wake = threading.Event()

    # --- Signals ---
    def install_signal_handlers(self):
        if threading.current_thread() is not threading.main_thread():
            logger.warning("[lifecycle] Not on the main thread, signal handlers not installed.")
            return
        for sig in SHUTDOWN_SIGNALS:
            signal.signal(sig, self._handle_signal)

    def _handle_signal(self, signum, frame):
        # No logging here: the main thread may be inside a log call when the signal lands.
        if self.state is LifecycleState.RUNNING:
            self.request_shutdown(signal.Signals(signum).name)
        # A second signal falls through to the default action and kills a hung call.
        for sig in SHUTDOWN_SIGNALS:
            signal.signal(sig, signal.SIG_DFL)

    def request_shutdown(self, reason):
        if self._wake.is_set():
            return
        self.reason = reason
        self._wake.set()

    def abort(self, failure):
        """Wake the main flow with a fatal failure instead of a shutdown request."""
        self.failure = failure
        self.request_shutdown("failure")

    # --- Observer ---
    def watch(self, observer):
        """Start observer and make its failures abort this controller."""
        observer.on_failure = self.abort
        self.observer = observer
        observer.start()

    def _stop_observer(self):
        if self.observer is None:
            return
        self.observer.stop()
        if not self.observer.join(self.join_timeout):
            logger.warning(f"[lifecycle] Observer did not stop within {self.join_timeout}s, continuing.")

    # --- Transitions ---
    def wait(self):
        """
        Block until a shutdown signal arrives.

        Returns:
            str: Name of the signal that ended the Running state.

        Raises:
            ObserverFailure: If the observer aborted first.
        """
        logger.info("Waiting for Kill Signal...")
        while not self._wake.wait(_WAIT_SLICE):
            pass
        if self.failure is not None:
            raise self.failure
        logger.info(f"📴 Received {self.reason}, draining...")
        return self.reason

    def drain(self, handle, workload_ref, service_ref):
        if self.state is not LifecycleState.RUNNING:
            raise RuntimeError(f"Cannot drain from state {self.state.value}")
        self.state = LifecycleState.DRAINING
        self._stop_observer()

        logger.info(f"[lifecycle] Delete Deployment {workload_ref}")
        delete_workload(handle, workload_ref)
        self.deleted.append(workload_ref)

        logger.info(f"[lifecycle] Delete Service {service_ref}")
        delete_service(handle, service_ref)
        self.deleted.append(service_ref)

        self.state = LifecycleState.TERMINATED
        logger.info("[lifecycle] All resources deleted.")
