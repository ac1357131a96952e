"""In-process node/output publisher."""

from .history import OutputHistory
from .registry import NodeConfigHandler, NodeRegistry, OutputRegistry
from .state import PublisherState

__all__ = [
    "NodeConfigHandler",
    "NodeRegistry",
    "OutputHistory",
    "OutputRegistry",
    "PublisherState",
]
