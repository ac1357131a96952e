"""CSV writer for published output values with daily file rotation."""

import csv
import logging
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, TextIO

from ..config import CSVConfig
from ..schemas import HistoryValue, Node, Output

logger = logging.getLogger(__name__)


class CSVWriter:
    """Writes output values, forecasts and node status to daily rotating CSV files."""

    VALUE_COLUMNS: list[str] = [
        "address",
        "node_id",
        "output_type",
        "instance",
        "timestamp",
        "value",
    ]

    # One row per forecast entry
    FORECAST_COLUMNS: list[str] = [
        "published_at",
        "address",
        "node_id",
        "output_type",
        "instance",
        "timestamp",
        "value",
    ]

    NODE_COLUMNS: list[str] = [
        "published_at",
        "address",
        "node_id",
        "error",
    ]

    def __init__(self, config: CSVConfig) -> None:
        """Initialize CSV writer.

        Args:
            config: CSV configuration settings.
        """
        self.config = config
        self._output_dir = Path(config.output_dir)
        self._output_dir.mkdir(parents=True, exist_ok=True)

        self._current_date: date | None = None
        self._files: dict[str, TextIO] = {}
        self._writers: dict[str, csv.DictWriter[str]] = {}
        self._buffer_count = 0

    def _file_specs(self) -> dict[str, tuple[str, list[str]]]:
        return {
            "values": (self.config.value_file_prefix, self.VALUE_COLUMNS),
            "forecasts": (self.config.forecast_file_prefix, self.FORECAST_COLUMNS),
            "nodes": (self.config.node_file_prefix, self.NODE_COLUMNS),
        }

    def _get_date_str(self) -> str:
        """Get current date string for filename."""
        return datetime.now(timezone.utc).strftime("%Y-%m-%d")

    def _rotate_if_needed(self) -> None:
        """Rotate files if date has changed."""
        today = datetime.now(timezone.utc).date()
        if self._current_date != today:
            self._close_files()
            self._current_date = today
            self._open_files()

    def _open_files(self) -> None:
        """Open CSV files for current date."""
        date_str = self._get_date_str()

        for kind, (prefix, columns) in self._file_specs().items():
            path = self._output_dir / f"{prefix}-{date_str}.csv"
            is_new = not path.exists()
            self._files[kind] = open(path, "a", newline="", encoding="utf-8")
            self._writers[kind] = csv.DictWriter(
                self._files[kind],
                fieldnames=columns,
                extrasaction="ignore",
            )
            if is_new:
                self._writers[kind].writeheader()
                logger.info("Created new %s file: %s", kind, path)

    def _close_files(self) -> None:
        """Close current CSV files."""
        for f in self._files.values():
            f.close()
        self._files.clear()
        self._writers.clear()

    def _writerow(self, kind: str, row: dict[str, Any]) -> None:
        self._rotate_if_needed()
        writer = self._writers.get(kind)
        if writer:
            writer.writerow(row)

    def write_node(self, node: Node) -> None:
        """Write node status to CSV file.

        Args:
            node: Node to write.
        """
        self._writerow(
            "nodes",
            {
                "published_at": datetime.now(timezone.utc).isoformat(),
                "address": node.address,
                "node_id": node.node_id,
                "error": node.status.get("error", ""),
            },
        )

    def write_output_value(self, output: Output, value: HistoryValue) -> None:
        """Write output value to CSV file.

        Args:
            output: Output the value belongs to.
            value: Timestamped value.
        """
        self._writerow(
            "values",
            {
                "address": output.address,
                "node_id": output.node_id,
                "output_type": output.output_type.value,
                "instance": output.instance,
                "timestamp": value.timestamp.isoformat(),
                "value": value.value,
            },
        )
        self._buffer_count += 1
        if self._buffer_count >= self.config.buffer_size:
            self.flush()

    def write_forecast(self, output: Output, forecast: list[HistoryValue]) -> None:
        """Write forecast entries to CSV file.

        Args:
            output: Output the forecast belongs to.
            forecast: Timestamped forecast values.
        """
        published_at = datetime.now(timezone.utc).isoformat()
        for entry in forecast:
            self._writerow(
                "forecasts",
                {
                    "published_at": published_at,
                    "address": output.address,
                    "node_id": output.node_id,
                    "output_type": output.output_type.value,
                    "instance": output.instance,
                    "timestamp": entry.timestamp.isoformat(),
                    "value": entry.value,
                },
            )

    def flush(self) -> None:
        """Flush buffers to disk."""
        for f in self._files.values():
            f.flush()
        self._buffer_count = 0

    def close(self) -> None:
        """Close all files."""
        self.flush()
        self._close_files()
