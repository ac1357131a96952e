"""Publisher state: nodes, outputs, values and forecasts of one publisher."""

import logging

from ..outputs import OutputManager
from ..schemas import PUBLISHER_NODE_ID, HistoryValue, IOType, Node
from .history import OutputHistory
from .registry import NodeRegistry, OutputRegistry

logger = logging.getLogger(__name__)


class PublisherState:
    """Registry and publication handle passed to the weather app.

    A node with the reserved ID `$publisher` represents the publisher itself
    and is created together with the state.
    """

    def __init__(
        self,
        zone: str,
        publisher_id: str,
        output_manager: OutputManager | None = None,
        max_history: int = 24,
    ) -> None:
        """Initialize publisher state.

        Args:
            zone: Zone the publisher's nodes live in.
            publisher_id: ID of this publisher.
            output_manager: Where node and output updates are published.
            max_history: Number of values kept per output.
        """
        self.zone = zone
        self.publisher_id = publisher_id
        self.output_manager = output_manager or OutputManager()
        self.nodes = NodeRegistry()
        self.outputs = OutputRegistry()
        self.output_history = OutputHistory(self.outputs, self.output_manager, max_history)
        self._forecasts: dict[str, list[HistoryValue]] = {}

        self.publisher_node = self.nodes.update_node(
            Node(zone=zone, publisher_id=publisher_id, node_id=PUBLISHER_NODE_ID)
        )

    def start(self) -> None:
        """Publish all known nodes."""
        logger.info("Starting publisher %s/%s", self.zone, self.publisher_id)
        for node in self.nodes.get_all_nodes():
            self.output_manager.write_node(node)
        self.output_manager.flush()

    def stop(self) -> None:
        """Flush and close all output writers."""
        logger.info("Stopping publisher %s/%s", self.zone, self.publisher_id)
        self.output_manager.close()

    def set_error_status(self, node: Node, message: str) -> None:
        """Set the error status of a node and publish the node."""
        logger.warning("Node %s: %s", node.node_id, message)
        node.status["error"] = message
        self.output_manager.write_node(node)
        self.output_manager.flush()

    def clear_error_status(self, node: Node) -> bool:
        """Clear the error status of a node and publish the node if it had one.

        Returns:
            True if an error status was cleared.
        """
        if node.status.pop("error", None) is None:
            return False
        logger.info("Node %s recovered", node.node_id)
        self.output_manager.write_node(node)
        self.output_manager.flush()
        return True

    def update_forecast(
        self,
        node: Node,
        output_type: IOType,
        instance: str,
        forecast: list[HistoryValue],
    ) -> bool:
        """Replace and publish the forecast of an output.

        Returns:
            False if the node has no such output.
        """
        output = self.outputs.get_output(node, output_type, instance)
        if output is None:
            logger.warning(
                "No output %s/%s on node %s, forecast ignored",
                output_type.value,
                instance,
                node.node_id,
            )
            return False

        self._forecasts[output.address] = list(forecast)
        self.output_manager.write_forecast(output, forecast)
        return True

    def get_forecast(self, node: Node, output_type: IOType, instance: str) -> list[HistoryValue]:
        output = self.outputs.get_output(node, output_type, instance)
        if output is None:
            return []
        return list(self._forecasts.get(output.address, []))
