from dataclasses import dataclass
from typing import Iterable, List, Tuple

from pitlights.errors import CapacityMismatch
from pitlights.events.drivers import DriverUpdate

@dataclass(frozen=True)
class Frame:
    """One time slice of the animation: a fixed number of slots, each empty or holding one driver"""

    slots: Tuple[DriverUpdate | None, ...]

    def __post_init__(self):
        seen = set()
        for update in self.slots:
            if update is None:
                continue
            if update.driver_number in seen:
                raise ValueError(f"Driver {update.driver_number} appears twice in one frame")
            seen.add(update.driver_number)

    @classmethod
    def empty(cls, slot_count: int) -> "Frame":
        return cls((None,) * slot_count)

    @classmethod
    def from_updates(cls, updates: Iterable[DriverUpdate], slot_count: int) -> "Frame":
        """Fills slots in order from the given updates; anything past slot_count is dropped"""
        slots: List[DriverUpdate | None] = [None] * slot_count
        for i, update in enumerate(updates):
            if i == slot_count:
                break
            slots[i] = update
        return cls(tuple(slots))

    @property
    def drivers(self) -> List[DriverUpdate]:
        return [x for x in self.slots if x is not None]

    def is_empty(self) -> bool:
        return all(x is None for x in self.slots)

@dataclass(frozen=True)
class VisualizationBuffer:
    update_interval_ms: int
    frames: Tuple[Frame, ...]

    @classmethod
    def build(cls, update_interval_ms: int, frames: Iterable[Frame], frame_count: int, slot_count: int) -> "VisualizationBuffer":
        frames = tuple(frames)
        if len(frames) != frame_count:
            raise CapacityMismatch(f"Expected {frame_count} frames, got {len(frames)}")

        for i, frame in enumerate(frames):
            if len(frame.slots) != slot_count:
                raise CapacityMismatch(f"Frame {i} has {len(frame.slots)} slots, expected {slot_count}")

        return cls(update_interval_ms, frames)

    @property
    def slot_count(self) -> int:
        return len(self.frames[0].slots) if self.frames else 0
