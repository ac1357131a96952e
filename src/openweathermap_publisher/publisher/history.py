"""Output value history with change detection."""

import logging
from datetime import datetime, timezone

from ..outputs import OutputManager
from ..schemas import HistoryValue, IOType, Node
from .registry import OutputRegistry

logger = logging.getLogger(__name__)


class OutputHistory:
    """Keeps the recent values of each output and publishes changes.

    History is kept latest first and bounded to `max_history` entries per
    output.
    """

    def __init__(
        self,
        outputs: OutputRegistry,
        output_manager: OutputManager,
        max_history: int = 24,
    ) -> None:
        self.outputs = outputs
        self.output_manager = output_manager
        self.max_history = max(1, max_history)
        self._history: dict[str, list[HistoryValue]] = {}

    def update_output_value(
        self,
        node: Node,
        output_type: IOType,
        instance: str,
        value: str,
    ) -> bool:
        """Record a new output value and publish it when it changed.

        Args:
            node: Node owning the output.
            output_type: Output type.
            instance: Output instance.
            value: New value.

        Returns:
            True if the value changed and was published.
        """
        output = self.outputs.get_output(node, output_type, instance)
        if output is None:
            logger.warning(
                "No output %s/%s on node %s, value ignored",
                output_type.value,
                instance,
                node.node_id,
            )
            return False

        history = self._history.setdefault(output.address, [])
        if history and history[0].value == value:
            return False

        entry = HistoryValue(timestamp=datetime.now(timezone.utc), value=value)
        history.insert(0, entry)
        del history[self.max_history :]

        logger.debug("%s = %s", output.address, value)
        self.output_manager.write_output_value(output, entry)
        return True

    def get_history(self, node: Node, output_type: IOType, instance: str) -> list[HistoryValue]:
        """Get the value history of an output, latest first."""
        output = self.outputs.get_output(node, output_type, instance)
        if output is None:
            return []
        return list(self._history.get(output.address, []))

    def get_latest(self, node: Node, output_type: IOType, instance: str) -> HistoryValue | None:
        history = self.get_history(node, output_type, instance)
        if not history:
            return None
        return history[0]
