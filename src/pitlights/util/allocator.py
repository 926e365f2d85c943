import logging
from datetime import timedelta
from typing import Dict, List, Tuple

from pitlights.events import DriverUpdate, Frame, Instant

_log = logging.getLogger(__name__)

MICROSECOND = timedelta(microseconds=1)

def elapsed_ns(instant: Instant, base: Instant) -> int:
    """Nanoseconds from base to instant, clamped at zero"""
    (ts, ns) = instant
    (base_ts, base_ns) = base
    return max(((ts - base_ts) // MICROSECOND) * 1000 + ns - base_ns, 0)

def allocate_frames(groups: Dict[Instant, List[DriverUpdate]],
                    frame_count: int,
                    slot_count: int,
                    slot_order: str = "first-seen") -> List[Tuple[int, Frame]]:
    """
    Turns each instant into a frame, paired with its offset in nanoseconds from the earliest instant.
    Stops after frame_count frames; later instants are dropped.
    """
    frames: List[Tuple[int, Frame]] = list()
    if len(groups) == 0:
        return frames

    base = min(groups.keys())
    for (instant, drivers) in groups.items():
        if slot_order == "driver":
            drivers = sorted(drivers, key=lambda d: d.driver_number)
        if len(drivers) > slot_count:
            _log.debug("%s has %d drivers, keeping %d", instant[0].isoformat(), len(drivers), slot_count)

        frames.append((elapsed_ns(instant, base), Frame.from_updates(drivers, slot_count)))
        if len(frames) == frame_count:
            break

    if len(groups) > frame_count:
        _log.warning("Only room for %d frames, dropped %d timestamps", frame_count, len(groups) - frame_count)

    return frames

def fill_frames(frames: List[Tuple[int, Frame]], frame_count: int, slot_count: int) -> List[Frame]:
    """Pads with empty zero-offset frames up to frame_count, then orders everything by offset"""
    frames = list(frames)
    padding = frame_count - len(frames)
    if padding > 0:
        _log.debug("Padding with %d empty frames", padding)
        frames.extend((0, Frame.empty(slot_count)) for _ in range(padding))

    # stable, so fillers land right after the frames that share offset zero
    frames.sort(key=lambda x: x[0])
    return [frame for (_, frame) in frames]
