"""Node, output and history schemas for the publisher."""

from datetime import datetime, timezone

from pydantic import BaseModel, Field, field_validator

from .enums import DataType, IOType


class ConfigAttr(BaseModel):
    """Configuration attribute of a node, e.g. the reporting language."""

    name: str
    datatype: DataType = DataType.STRING
    description: str = ""
    default: str = ""
    value: str | None = None

    @property
    def effective_value(self) -> str:
        """The configured value, or the default when none was set."""
        if self.value is None:
            return self.default
        return self.value


class Node(BaseModel):
    """A named entity owning a set of outputs and configuration.

    Address format: `{zone}/{publisher_id}/{node_id}`
    """

    zone: str
    publisher_id: str
    node_id: str = Field(min_length=1)
    config: dict[str, ConfigAttr] = {}
    status: dict[str, str] = {}

    @property
    def address(self) -> str:
        return f"{self.zone}/{self.publisher_id}/{self.node_id}"

    def get_config_value(self, name: str, default: str = "") -> str:
        """Get the effective value of a config attribute."""
        attr = self.config.get(name)
        if attr is None:
            return default
        return attr.effective_value


class Output(BaseModel):
    """A (type, instance) addressable value slot on a node.

    Address format: `{zone}/{publisher_id}/{node_id}/{output_type}/{instance}`
    """

    zone: str
    publisher_id: str
    node_id: str
    output_type: IOType
    instance: str

    @property
    def address(self) -> str:
        return (
            f"{self.zone}/{self.publisher_id}/{self.node_id}"
            f"/{self.output_type.value}/{self.instance}"
        )


class HistoryValue(BaseModel):
    """Timestamped output value."""

    timestamp: datetime
    value: str

    @field_validator("timestamp")
    @classmethod
    def validate_utc_timezone(cls, v: datetime) -> datetime:
        """Ensure timestamp has UTC timezone."""
        if v.tzinfo is None:
            raise ValueError("timestamp must have UTC timezone")
        if v.utcoffset() != timezone.utc.utcoffset(None):
            raise ValueError("timestamp must be in UTC timezone")
        return v


class OutputValueMessage(BaseModel):
    """Published payload for an updated output value."""

    address: str
    node_id: str
    output_type: IOType
    instance: str
    timestamp: datetime
    value: str


class ForecastMessage(BaseModel):
    """Published payload for an output forecast."""

    address: str
    node_id: str
    output_type: IOType
    instance: str
    forecast: list[HistoryValue]
