"""Output writers for published nodes and output values."""

from .csv_writer import CSVWriter
from .kafka_writer import KafkaWriter
from .manager import OutputManager
from .protocols import OutputWriter

__all__ = ["CSVWriter", "KafkaWriter", "OutputManager", "OutputWriter"]
