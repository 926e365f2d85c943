from pitlights.events import DriverUpdate, VisualizationBuffer
from pitlights.writers.output import write_atomically

# The LED firmware compiles the buffer in as a constant of these types
CONST_NAME = "VISUALIZATION_DATA"

def _slot(update: DriverUpdate | None) -> str:
    if update is None:
        return "None"
    return f"Some(DriverData {{ driver_number: {update.driver_number}, led_num: {update.led_position} }})"

def dumps(buffer: VisualizationBuffer) -> str:
    frames = ", ".join("UpdateFrame { drivers: [" + ", ".join(_slot(x) for x in frame.slots) + "] }"
                       for frame in buffer.frames)
    return (f"pub const {CONST_NAME}: VisualizationData = "
            f"VisualizationData {{ update_rate_ms: {buffer.update_interval_ms}, frames: [{frames}] }};")

def write_const(buffer: VisualizationBuffer, path: str) -> None:
    write_atomically(path, dumps(buffer).encode("utf-8"))
