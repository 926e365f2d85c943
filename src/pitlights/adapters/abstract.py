from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import List

from pitlights.events import TimestampedUpdate

class LightsAdapter(ABC):
    """Source of driver position updates. Subclasses read a stream and hand each update to the callbacks."""

    message_callbacks: List[Callable[[TimestampedUpdate], None]]

    def __init__(self):
        self.message_callbacks = list()

    @abstractmethod
    def run(self) -> int:
        """Reads the whole stream and returns the number of updates delivered"""
        ...

    def on_message(self, callback: Callable[[TimestampedUpdate], None]) -> None:
        self.message_callbacks.append(callback)

    def _message(self, update: TimestampedUpdate):
        for callback in self.message_callbacks:
            callback(update)
