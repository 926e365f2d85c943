from dataclasses import dataclass

OUTPUT_FORMATS = ("json", "const")
SLOT_ORDERS = ("first-seen", "driver")

@dataclass
class LightsConfig:
    input_path: str = "track_data_short_sample_all_timestamps.csv"
    output_path: str = "output.json"
    frame_count: int = 1548
    slot_count: int = 20
    """Maximum number of drivers drawn in a single frame"""
    update_interval_ms: int = 1000
    output_format: str = "json"
    slot_order: str = "first-seen"
    """
    Which drivers survive when a timestamp has more updates than slots:
    - first-seen: the earliest rows in the file
    - driver: the lowest driver numbers
    """
    skip_malformed: bool = False
    """Drop unparseable rows with a warning instead of aborting the run"""

    def validate(self) -> None:
        if self.frame_count <= 0:
            raise ValueError(f"frame_count must be positive, got {self.frame_count}")
        if self.slot_count <= 0:
            raise ValueError(f"slot_count must be positive, got {self.slot_count}")
        if self.update_interval_ms <= 0:
            raise ValueError(f"update_interval_ms must be positive, got {self.update_interval_ms}")
        if self.output_format not in OUTPUT_FORMATS:
            raise ValueError(f"Unknown output format {self.output_format!r}")
        if self.slot_order not in SLOT_ORDERS:
            raise ValueError(f"Unknown slot order {self.slot_order!r}")
