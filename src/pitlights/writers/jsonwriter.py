from typing import Any, Dict, List

import orjson

from pitlights.errors import MalformedBuffer
from pitlights.events import DriverUpdate, Frame, VisualizationBuffer
from pitlights.writers.output import write_atomically

def to_document(buffer: VisualizationBuffer) -> Dict[str, Any]:
    """Empty slots become null, occupied ones [driver_number, led_position]"""
    return {
        "update_interval_ms": buffer.update_interval_ms,
        "frame_count": len(buffer.frames),
        "slot_count": buffer.slot_count,
        "frames": [[None if x is None else [x.driver_number, x.led_position] for x in frame.slots]
                   for frame in buffer.frames],
    }

def from_document(document: Any) -> VisualizationBuffer:
    if not isinstance(document, dict):
        raise MalformedBuffer("Expected a JSON object")

    try:
        interval = document["update_interval_ms"]
        frame_count = document["frame_count"]
        slot_count = document["slot_count"]
        raw_frames: List[Any] = document["frames"]
    except KeyError as e:
        raise MalformedBuffer(f"Missing key {e}") from e

    for (key, value) in (("update_interval_ms", interval), ("frame_count", frame_count), ("slot_count", slot_count)):
        if type(value) is not int:
            raise MalformedBuffer(f"{key} must be an integer, got {value!r}")

    if not isinstance(raw_frames, list):
        raise MalformedBuffer("frames must be a list")

    frames = list()
    for (i, raw_frame) in enumerate(raw_frames):
        if not isinstance(raw_frame, list):
            raise MalformedBuffer(f"Frame {i} must be a list")

        slots: List[DriverUpdate | None] = list()
        for slot in raw_frame:
            if slot is None:
                slots.append(None)
            elif isinstance(slot, list) and len(slot) == 2 and all(type(x) is int for x in slot):
                slots.append(DriverUpdate(slot[0], slot[1]))
            else:
                raise MalformedBuffer(f"Frame {i} has an invalid slot {slot!r}")

        try:
            frames.append(Frame(tuple(slots)))
        except ValueError as e:
            raise MalformedBuffer(f"Frame {i}: {e}") from e

    return VisualizationBuffer.build(interval, frames, frame_count, slot_count)

def dumps(buffer: VisualizationBuffer) -> bytes:
    return orjson.dumps(to_document(buffer))

def loads(data: bytes | str) -> VisualizationBuffer:
    try:
        document = orjson.loads(data)
    except orjson.JSONDecodeError as e:
        raise MalformedBuffer(f"Not valid JSON: {e}") from e
    return from_document(document)

def write_json(buffer: VisualizationBuffer, path: str) -> None:
    write_atomically(path, dumps(buffer))

def read_json(path: str) -> VisualizationBuffer:
    with open(path, "rb") as in_file:
        return loads(in_file.read())
