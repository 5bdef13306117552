#!/usr/bin/env python3
"""
observer.py
- Background loop that re-reads the declared Deployment on a fixed interval.
- Runs on a daemon thread; shares the ClientHandle and ResourceRef read-only.
- Stops when asked (stop event) or on the first failed read, which it reports
  through the on_failure callback so the main flow can abort.
"""

import threading

from loguru import logger

from kubedemo.core.constants import DEFAULT_POLL_INTERVAL
from kubedemo.core.errors import ObserverFailure
from kubedemo.lib.resources import get_workload


class WorkloadObserver:
    def __init__(self, handle, ref, interval=DEFAULT_POLL_INTERVAL, on_failure=None):
        self.handle = handle
        self.ref = ref
        self.interval = interval
        self.on_failure = on_failure
        self.reads = 0
        self.error = None
        self._stop = threading.Event()
        self._thread = None

    @property
    def is_running(self):
        return self._thread is not None and self._thread.is_alive()

    def start(self):
        if self.is_running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="workload-observer", daemon=True)
        self._thread.start()
        logger.debug(f"[observer] Polling Deployment {self.ref} every {self.interval}s")

    def stop(self):
        self._stop.set()

    def join(self, timeout=None):
        """Wait for the loop to exit. Returns True if it has stopped."""
        if self._thread is None:
            return True
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def poll_once(self):
        read = get_workload(self.handle, self.ref)
        self.reads += 1
        logger.info(f"[observer] Read Deployment {self.ref.namespace}/{read.metadata.name}")
        return read

    def _run(self):
        while not self._stop.is_set():
            try:
                self.poll_once()
                self._stop.wait(self.interval)
            except Exception as e:
                self.error = ObserverFailure(f"Observer stopped reading Deployment {self.ref}: {e}")
                self.error.__cause__ = e
                logger.error(f"[observer] {self.error}")
                if self.on_failure:
                    self.on_failure(self.error)
                return
        logger.debug("[observer] Stop requested, exiting loop.")
