import logging
from typing import Dict, Iterable, List

from pitlights.adapters.abstract import LightsAdapter
from pitlights.events import DriverUpdate, Instant, TimestampedUpdate

def group_by_timestamp(updates: Iterable[TimestampedUpdate]) -> Dict[Instant, List[DriverUpdate]]:
    """
    Sorts updates by time and collapses them into one list per distinct instant.
    If a driver shows up more than once at the same instant, the first row wins.
    Keys come out in ascending order.
    """
    groups: Dict[Instant, List[DriverUpdate]] = dict()
    # sorted() is stable, so file order decides between rows with the same instant
    for entry in sorted(updates, key=lambda u: u.instant):
        drivers = groups.setdefault(entry.instant, [])
        if not any(d.driver_number == entry.update.driver_number for d in drivers):
            drivers.append(entry.update)
    return groups

class Timeline:
    """Collects every update an adapter produces so they can be grouped once the stream ends"""

    _adapter: LightsAdapter
    updates: List[TimestampedUpdate]

    def __init__(self, adapter: LightsAdapter):
        self._adapter = adapter
        self._adapter.on_message(self._on_update)
        self.updates = list()
        self._log = logging.getLogger(__name__)

    def _on_update(self, update: TimestampedUpdate):
        self.updates.append(update)

    def groups(self) -> Dict[Instant, List[DriverUpdate]]:
        groups = group_by_timestamp(self.updates)
        dropped = len(self.updates) - sum(len(x) for x in groups.values())
        if dropped > 0:
            self._log.info("Dropped %d duplicate driver updates", dropped)
        self._log.info("Grouped %d updates into %d timestamps", len(self.updates), len(groups))
        return groups
