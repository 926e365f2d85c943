from .client import LightsClient as LightsClient, Stage as Stage
from .config import LightsConfig as LightsConfig
from .errors import PitLightsError as PitLightsError, MalformedRecord as MalformedRecord, \
    CapacityMismatch as CapacityMismatch, MalformedBuffer as MalformedBuffer
