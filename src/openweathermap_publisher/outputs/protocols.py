"""Protocols for output writers."""

from typing import Protocol

from ..schemas import HistoryValue, Node, Output


class OutputWriter(Protocol):
    """Protocol for output writers."""

    def write_node(self, node: Node) -> None:
        """Write a node and its status to the output."""
        ...

    def write_output_value(self, output: Output, value: HistoryValue) -> None:
        """Write an updated output value to the output."""
        ...

    def write_forecast(self, output: Output, forecast: list[HistoryValue]) -> None:
        """Write an output forecast to the output."""
        ...

    def flush(self) -> None:
        """Flush any buffered data."""
        ...

    def close(self) -> None:
        """Close the writer and clean up resources."""
        ...
