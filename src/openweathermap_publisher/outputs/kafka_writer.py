"""Kafka writer for published nodes and output values."""

import logging
from typing import Callable, Protocol

from confluent_kafka import KafkaError, Message, Producer

from ..config import KafkaConfig
from ..schemas import ForecastMessage, HistoryValue, Node, Output, OutputValueMessage

logger = logging.getLogger(__name__)

# Type alias for delivery callback
DeliveryCallback = Callable[[KafkaError | None, Message], None]


class KafkaProducerProtocol(Protocol):
    """Protocol for Kafka producer to allow mocking."""

    def produce(
        self,
        topic: str,
        key: str | bytes | None = None,
        value: str | bytes | None = None,
        callback: DeliveryCallback | None = None,
    ) -> None:
        """Produce a message to a topic."""
        ...

    def flush(self, timeout: float = -1) -> int:
        """Flush pending messages."""
        ...

    def poll(self, timeout: float = 0) -> int:
        """Poll for delivery callbacks."""
        ...


class KafkaWriter:
    """Publishes nodes, output values and forecasts to Kafka topics.

    Messages are keyed by the node or output address so that all updates of
    one output land on the same partition.
    """

    def __init__(
        self,
        config: KafkaConfig,
        producer: KafkaProducerProtocol | None = None,
    ) -> None:
        """Initialize Kafka writer.

        Args:
            config: Kafka configuration settings.
            producer: Optional Kafka producer for testing.
        """
        self.config = config
        self._producer: KafkaProducerProtocol | None = producer

    @property
    def producer(self) -> KafkaProducerProtocol:
        """Lazy-initialize Kafka producer."""
        if self._producer is None:
            self._producer = Producer(  # type: ignore[assignment]
                {
                    "bootstrap.servers": self.config.bootstrap_servers,
                }
            )
        assert self._producer is not None
        return self._producer

    def _delivery_callback(self, err: KafkaError | None, msg: Message) -> None:
        """Callback for Kafka delivery reports."""
        if err is not None:
            logger.error("Kafka delivery failed: %s", err)
        else:
            logger.debug("Delivered to %s [%s]", msg.topic(), msg.partition())

    def _produce(self, topic: str, key: str, value: str) -> None:
        self.producer.produce(
            topic=topic,
            key=key,
            value=value,
            callback=self._delivery_callback,
        )
        self.producer.poll(0)

    def write_node(self, node: Node) -> None:
        """Publish node to Kafka topic.

        Args:
            node: Node to publish.
        """
        self._produce(self.config.node_topic, node.address, node.model_dump_json())

    def write_output_value(self, output: Output, value: HistoryValue) -> None:
        """Publish output value to Kafka topic.

        Args:
            output: Output the value belongs to.
            value: Timestamped value.
        """
        message = OutputValueMessage(
            address=output.address,
            node_id=output.node_id,
            output_type=output.output_type,
            instance=output.instance,
            timestamp=value.timestamp,
            value=value.value,
        )
        self._produce(self.config.value_topic, output.address, message.model_dump_json())

    def write_forecast(self, output: Output, forecast: list[HistoryValue]) -> None:
        """Publish output forecast to Kafka topic.

        Args:
            output: Output the forecast belongs to.
            forecast: Timestamped forecast values.
        """
        message = ForecastMessage(
            address=output.address,
            node_id=output.node_id,
            output_type=output.output_type,
            instance=output.instance,
            forecast=forecast,
        )
        self._produce(self.config.forecast_topic, output.address, message.model_dump_json())

    def flush(self, timeout: float = 10.0) -> None:
        """Flush pending Kafka messages.

        Args:
            timeout: Maximum time to wait in seconds.
        """
        remaining = self.producer.flush(timeout)
        if remaining > 0:
            logger.warning("Failed to flush %d Kafka messages", remaining)

    def close(self) -> None:
        """Clean up Kafka producer."""
        self.flush()
