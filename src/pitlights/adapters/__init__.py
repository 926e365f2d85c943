from .abstract import LightsAdapter as LightsAdapter
from .csvadapter import CsvAdapter as CsvAdapter
