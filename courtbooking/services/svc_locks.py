import threading
from contextlib import contextmanager
from typing import Dict, Iterable, Iterator, List
from courtbooking.configuration.monitor import log_event

class ResourceLockManager:
    """
    One lock per resource key ("court:<id>", "coach:<id>", "equipment:<id>").

    Booking creation holds the locks of every resource it touches across the
    availability check and the insert, so two overlapping requests for a
    shared resource are serialized. Keys are always taken in sorted order,
    which rules out lock-order deadlocks between requests.

    Locks live in process memory: every API worker that writes bookings must
    share one instance.
    """

    def __init__(self):
        self._guard = threading.Lock()
        # Never pruned: one entry per court, coach and equipment id, bounded by the catalog
        self._locks: Dict[str, threading.Lock] = {}

    def _lock_for(self, key: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._locks[key] = lock
            return lock

    @contextmanager
    def hold(self, keys: Iterable[str]) -> Iterator[List[str]]:
        ordered = sorted(set(keys))
        acquired: List[threading.Lock] = []
        try:
            for key in ordered:
                lock = self._lock_for(key)
                lock.acquire()
                acquired.append(lock)
            log_event("Resource locks acquired", {"keys": ",".join(ordered)})
            yield ordered
        finally:
            for lock in reversed(acquired):
                lock.release()

def resource_keys(court_id: str, coach_id, equipment_ids: Iterable[str]) -> List[str]:
    keys = [f"court:{court_id}"]
    if coach_id:
        keys.append(f"coach:{coach_id}")
    keys.extend(f"equipment:{equipment_id}" for equipment_id in equipment_ids)
    return keys
