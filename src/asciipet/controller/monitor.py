"""
System Monitor (Threading)
==========================
Samples CPU and memory usage in the background.

Why is this file needed?
------------------------
1. Responsiveness: psutil calls are cheap but not free; doing them on the
   frame timer at 60 ticks/s would be wasteful. A background thread samples
   every couple of seconds instead.
2. Decoupling: The frame loop only ever reads the latest snapshot through
   a plain callable, so it can be tested without threads or psutil.

Classes:
    SnapshotCache: Latest-value holder, also the snapshot provider.
    MonitorWorker: QThread that keeps the cache fresh.
"""
import logging

import psutil
from PySide6.QtCore import QThread, Signal

from asciipet.config import MONITOR_INTERVAL_S
from asciipet.model.entity import MonitorSnapshot

logger = logging.getLogger(__name__)


def sample() -> MonitorSnapshot:
    """
    One reading of system-wide CPU and memory usage, rounded to 0.1 %.

    cpu_percent(interval=None) compares against the previous call, so the
    very first reading of a process is 0.0.
    """
    cpu = psutil.cpu_percent(interval=None)
    mem = psutil.virtual_memory().percent
    return MonitorSnapshot(cpu_percent=round(cpu, 1), mem_percent=round(mem, 1))


class SnapshotCache:
    """
    Holds the most recent MonitorSnapshot.

    Written by the worker thread, read by the frame loop. Snapshots are
    immutable and replaced by reference, so readers never see a half update.
    """
    def __init__(self, initial: MonitorSnapshot | None = None) -> None:
        self._latest: MonitorSnapshot = initial or MonitorSnapshot()

    def update(self, snapshot: MonitorSnapshot) -> None:
        self._latest = snapshot

    def latest(self) -> MonitorSnapshot:
        return self._latest

    def __call__(self) -> MonitorSnapshot:
        return self._latest


class MonitorWorker(QThread):
    snapshot_updated = Signal(object)  # MonitorSnapshot

    def __init__(self, cache: SnapshotCache, interval_s: float = MONITOR_INTERVAL_S, sampler=sample):
        super().__init__()
        self.cache = cache
        self.interval_ms = int(interval_s * 1000)
        self.sampler = sampler
        self.is_running = True

    def run(self):
        logger.info(f"System monitor started (every {self.interval_ms} ms).")
        while self.is_running:
            try:
                snapshot = self.sampler()
            except (psutil.Error, OSError) as e:
                # Keep the previous reading; staleness is acceptable here
                logger.debug(f"Monitor sample failed: {e}")
            else:
                self.cache.update(snapshot)
                self.snapshot_updated.emit(snapshot)

            # Sleep in short slices so stop() takes effect quickly
            waited = 0
            while self.is_running and waited < self.interval_ms:
                self.msleep(100)
                waited += 100
        logger.info("System monitor stopped.")

    def stop(self) -> None:
        self.is_running = False
