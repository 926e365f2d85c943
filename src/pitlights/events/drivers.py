from dataclasses import dataclass
from datetime import datetime
from typing import Tuple

Instant = Tuple[datetime, int]

@dataclass(frozen=True)
class DriverUpdate:
    driver_number: int
    led_position: int
    """Index of the LED on the track strip where the driver is drawn"""

@dataclass(frozen=True)
class TimestampedUpdate:
    timestamp: datetime
    """Always timezone-aware, in UTC"""
    update: DriverUpdate
    nanosecond: int = 0
    """Nanoseconds past timestamp's microsecond, 0-999"""

    @property
    def instant(self) -> Instant:
        """Full-precision key; updates are only grouped together if these are equal"""
        return (self.timestamp, self.nanosecond)
