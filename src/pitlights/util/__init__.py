from .timeline import Timeline as Timeline, group_by_timestamp as group_by_timestamp
from .allocator import allocate_frames as allocate_frames, fill_frames as fill_frames
