"""Output manager that routes published data to enabled writers."""

import logging
from typing import Sequence

from ..config import CSVConfig, KafkaConfig
from ..schemas import HistoryValue, Node, Output
from .csv_writer import CSVWriter
from .kafka_writer import KafkaWriter
from .protocols import OutputWriter

logger = logging.getLogger(__name__)


class OutputManager:
    """Manages multiple output writers (CSV, Kafka).

    Routes write calls to all enabled outputs.
    """

    def __init__(
        self,
        csv_config: CSVConfig | None = None,
        kafka_config: KafkaConfig | None = None,
        writers: Sequence[OutputWriter] | None = None,
    ) -> None:
        """Initialize output manager.

        Args:
            csv_config: CSV configuration (creates CSVWriter if enabled).
            kafka_config: Kafka configuration (creates KafkaWriter if enabled).
            writers: Optional list of writers for testing (overrides configs).
        """
        self._writers: list[OutputWriter] = []

        if writers is not None:
            self._writers = list(writers)
        else:
            if csv_config and csv_config.enabled:
                self._writers.append(CSVWriter(csv_config))
                logger.info("CSV output enabled: %s", csv_config.output_dir)

            if kafka_config and kafka_config.enabled:
                self._writers.append(KafkaWriter(kafka_config))
                logger.info("Kafka output enabled: %s", kafka_config.bootstrap_servers)

        if not self._writers:
            logger.warning("No output writers enabled")

    @property
    def writers(self) -> list[OutputWriter]:
        """Get list of active writers."""
        return self._writers

    def write_node(self, node: Node) -> None:
        for writer in self._writers:
            writer.write_node(node)

    def write_output_value(self, output: Output, value: HistoryValue) -> None:
        """Write output value to all enabled outputs.

        Args:
            output: Output the value belongs to.
            value: Timestamped value.
        """
        for writer in self._writers:
            writer.write_output_value(output, value)

    def write_forecast(self, output: Output, forecast: list[HistoryValue]) -> None:
        for writer in self._writers:
            writer.write_forecast(output, forecast)

    def flush(self) -> None:
        """Flush all output buffers."""
        for writer in self._writers:
            writer.flush()

    def close(self) -> None:
        """Close all writers."""
        for writer in self._writers:
            writer.close()
