class PitLightsError(Exception):
    """Base class for everything that aborts a buffer build"""
    pass

class MalformedRecord(PitLightsError):
    """Raised when a telemetry row can't be parsed"""

    line_number: int
    line: str
    reason: str

    def __init__(self, line_number: int, line: str, reason: str):
        super().__init__(f"line {line_number}: {reason} ({line!r})")
        self.line_number = line_number
        self.line = line
        self.reason = reason

class CapacityMismatch(PitLightsError):
    """Raised when a finished buffer doesn't hold exactly the configured number of frames or slots"""
    pass

class MalformedBuffer(PitLightsError):
    """Raised when a serialized buffer doesn't have the expected shape"""
    pass
