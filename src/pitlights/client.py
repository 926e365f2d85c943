import logging
from enum import Enum

from pitlights.adapters.abstract import LightsAdapter
from pitlights.config import LightsConfig
from pitlights.events import VisualizationBuffer
from pitlights.util import Timeline, allocate_frames, fill_frames
from pitlights.writers import write_const, write_json

class Stage(Enum):
    PARSING = "parsing"
    GROUPING = "grouping"
    ALLOCATING = "allocating"
    FILLING = "filling"
    ENCODING = "encoding"
    DONE = "done"

class LightsClient:
    """Runs an adapter's updates through grouping, frame allocation and gap filling, then writes the buffer"""

    adapter: LightsAdapter
    config: LightsConfig
    stage: Stage | None

    def __init__(self, adapter: LightsAdapter, config: LightsConfig):
        config.validate()
        self.adapter = adapter
        self.config = config
        self.timeline = Timeline(adapter)
        self.stage = None
        self._log = logging.getLogger(__name__)

    def _enter(self, stage: Stage) -> None:
        self._log.debug("%s -> %s", self.stage.value if self.stage else "start", stage.value)
        self.stage = stage

    def build(self) -> VisualizationBuffer:
        self._enter(Stage.PARSING)
        self.adapter.run()

        self._enter(Stage.GROUPING)
        groups = self.timeline.groups()

        self._enter(Stage.ALLOCATING)
        frames = allocate_frames(groups, self.config.frame_count, self.config.slot_count, self.config.slot_order)
        self._log.info("Allocated %d frames", len(frames))

        self._enter(Stage.FILLING)
        ordered = fill_frames(frames, self.config.frame_count, self.config.slot_count)
        return VisualizationBuffer.build(self.config.update_interval_ms, ordered,
                                         self.config.frame_count, self.config.slot_count)

    def write(self, buffer: VisualizationBuffer) -> None:
        self._enter(Stage.ENCODING)
        if self.config.output_format == "const":
            write_const(buffer, self.config.output_path)
        else:
            write_json(buffer, self.config.output_path)
        self._enter(Stage.DONE)

    def go(self) -> VisualizationBuffer:
        buffer = self.build()
        self.write(buffer)
        return buffer
