from .drivers import DriverUpdate as DriverUpdate, TimestampedUpdate as TimestampedUpdate, Instant as Instant
from .frames import Frame as Frame, VisualizationBuffer as VisualizationBuffer
