"""Node and output registries kept in insertion order."""

import logging
from typing import Callable

from ..schemas import ConfigAttr, IOType, Node, Output

logger = logging.getLogger(__name__)

# Called with the node and the requested config values. Returns the values to
# apply, or None to apply nothing.
NodeConfigHandler = Callable[[Node, dict[str, str]], dict[str, str] | None]


class NodeRegistry:
    """Registry of nodes keyed by node ID."""

    def __init__(self) -> None:
        self._nodes: dict[str, Node] = {}
        self._config_handler: NodeConfigHandler | None = None

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def update_node(self, node: Node) -> Node:
        """Add a node, or refresh an existing node with the same ID.

        Configuration and status of an existing node are kept.

        Returns:
            The registered node.
        """
        existing = self._nodes.get(node.node_id)
        if existing is None:
            self._nodes[node.node_id] = node
            logger.debug("Added node %s", node.address)
            return node

        existing.zone = node.zone
        existing.publisher_id = node.publisher_id
        for name, attr in node.config.items():
            existing.config.setdefault(name, attr)
        return existing

    def update_node_config(self, node: Node, attr: ConfigAttr) -> ConfigAttr:
        """Add or replace a config attribute on a registered node.

        A value already set on the node survives the update, so repeated
        provisioning never resets a configured value to its default.

        Returns:
            The attribute stored on the node.
        """
        registered = self._nodes.get(node.node_id)
        if registered is None:
            raise KeyError(f"Unknown node: {node.node_id}")

        previous = registered.config.get(attr.name)
        if previous is not None and previous.value is not None:
            attr = attr.model_copy(update={"value": previous.value})
        registered.config[attr.name] = attr
        return attr

    def get_node_by_id(self, node_id: str) -> Node | None:
        return self._nodes.get(node_id)

    def get_all_nodes(self) -> list[Node]:
        """Get all nodes in the order they were added."""
        return list(self._nodes.values())

    def set_node_config_handler(self, handler: NodeConfigHandler | None) -> None:
        """Register the callback invoked on external node config updates."""
        self._config_handler = handler

    def set_node_config(self, node_id: str, params: dict[str, str]) -> dict[str, str]:
        """Handle an external request to update a node's configuration.

        With a handler registered, only the values the handler returns are
        applied. Without one, values for known attributes are applied as is.

        Args:
            node_id: ID of the node to configure.
            params: Requested config values by attribute name.

        Returns:
            The config values that were applied.
        """
        node = self._nodes.get(node_id)
        if node is None:
            logger.warning("Config update for unknown node %s ignored", node_id)
            return {}

        if self._config_handler is not None:
            accepted = self._config_handler(node, params) or {}
        else:
            accepted = params

        applied: dict[str, str] = {}
        for name, value in accepted.items():
            attr = node.config.get(name)
            if attr is None:
                logger.warning("Node %s has no config %s", node_id, name)
                continue
            attr.value = value
            applied[name] = value

        if applied:
            logger.info("Updated config of node %s: %s", node_id, applied)
        return applied


class OutputRegistry:
    """Registry of outputs keyed by (node ID, type, instance)."""

    def __init__(self) -> None:
        self._outputs: dict[tuple[str, IOType, str], Output] = {}

    def __len__(self) -> int:
        return len(self._outputs)

    def new_output(self, node: Node, output_type: IOType, instance: str) -> Output:
        """Create an output on a node, or return the existing one."""
        key = (node.node_id, output_type, instance)
        output = self._outputs.get(key)
        if output is None:
            output = Output(
                zone=node.zone,
                publisher_id=node.publisher_id,
                node_id=node.node_id,
                output_type=output_type,
                instance=instance,
            )
            self._outputs[key] = output
            logger.debug("Added output %s", output.address)
        return output

    def get_output(self, node: Node, output_type: IOType, instance: str) -> Output | None:
        return self._outputs.get((node.node_id, output_type, instance))

    def get_node_outputs(self, node: Node) -> list[Output]:
        """Get all outputs of a node in creation order."""
        return [o for o in self._outputs.values() if o.node_id == node.node_id]

    def get_all_outputs(self) -> list[Output]:
        return list(self._outputs.values())
