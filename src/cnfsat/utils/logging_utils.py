"""
Logging utilities for cnfsat.

This module provides a StructuredLogger that records search events (decisions,
backtracks, results) as JSON Lines or CSV, root logging setup for the CLI, and
a NumpyJSONEncoder for numpy values in event data.
"""

import csv
import json
import logging
import os
import time
from datetime import datetime
from typing import Any

import numpy as np

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class NumpyJSONEncoder(json.JSONEncoder):
    """JSON encoder that can handle NumPy arrays and scalars."""

    def default(self, obj):
        """Convert numpy objects to standard Python types."""
        if isinstance(obj, np.integer):
            return int(obj)
        elif isinstance(obj, np.floating):
            return float(obj)
        elif isinstance(obj, np.ndarray):
            return obj.tolist()
        return super().default(obj)


def configure_logging(
    level: str | int = "WARNING",
    fmt: str = DEFAULT_FORMAT,
    log_file: str | None = None,
) -> None:
    """
    Configure root logging.

    The ``LOGLEVEL`` environment variable, when set, overrides ``level``.

    Args:
        level: Logging level name or number
        fmt: Format string for log records
        log_file: Optional file to log to instead of stderr
    """
    level = os.environ.get("LOGLEVEL", level)
    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(format=fmt, level=level, filename=log_file, force=True)


class StructuredLogger:
    """
    A logger for structured search events.

    Each event type goes to its own file, named
    ``<run_name>_<event_type>.jsonl`` (or ``.csv``).
    """

    FORMAT_JSON = "json"
    FORMAT_CSV = "csv"

    def __init__(
        self,
        output_dir: str,
        run_name: str,
        format_type: str = "json",
        visualize_ready: bool = False,
    ):
        """
        Initialize the structured logger.

        Args:
            output_dir: Directory to save log files in
            run_name: Name of the run (used in filenames)
            format_type: Format to save logs in ("json" or "csv")
            visualize_ready: Whether to write a metadata file on finalize
        """
        if format_type not in (self.FORMAT_JSON, self.FORMAT_CSV):
            raise ValueError(f"Unsupported log format: {format_type}")

        self.output_dir = output_dir
        self.run_name = run_name
        self.format_type = format_type
        self.visualize_ready = visualize_ready

        os.makedirs(output_dir, exist_ok=True)

        self.files = {}
        self.write_counts = {}

        self.metadata = {
            "run_name": run_name,
            "start_time": datetime.now().isoformat(),
            "log_files": {},
        }

    def _get_file(self, event_type: str) -> tuple:
        """
        Get the file handle for a given event type.

        Args:
            event_type: Type of event (used in filename)

        Returns:
            Tuple of (file_handle, is_new)
        """
        if event_type not in self.files:
            ext = ".jsonl" if self.format_type == self.FORMAT_JSON else ".csv"
            filepath = os.path.join(self.output_dir, f"{self.run_name}_{event_type}{ext}")

            self.metadata["log_files"][event_type] = filepath

            file = open(
                filepath,
                "w",
                newline="" if self.format_type == self.FORMAT_CSV else None,
            )
            self.files[event_type] = file
            self.write_counts[event_type] = 0
            return file, True

        return self.files[event_type], False

    def _write_event(self, event_type: str, data: dict[str, Any]):
        file, is_new = self._get_file(event_type)

        if self.format_type == self.FORMAT_JSON:
            file.write(json.dumps(data, cls=NumpyJSONEncoder) + "\n")
        else:
            writer = csv.DictWriter(file, fieldnames=list(data.keys()))
            if is_new:
                writer.writeheader()
            writer.writerow(data)
        file.flush()

        self.write_counts[event_type] += 1

    def log_decision(self, depth: int, literal: str, value: bool, forced: bool, remaining: int):
        """
        Log a variable binding made by the search.

        Args:
            depth: Number of bindings on the current branch before this one
            literal: Literal assumed true
            value: Value bound to the literal's variable
            forced: True for unit propagation, False for a branching decision
            remaining: Clauses left before substitution
        """
        data = {
            "depth": depth,
            "literal": literal,
            "value": value,
            "forced": forced,
            "remaining_clauses": remaining,
            "timestamp": time.time(),
        }
        self._write_event("decision", data)

    def log_backtrack(self, depth: int, backtracks: int):
        """
        Log a failed branch.

        Args:
            depth: Depth of the branch that failed
            backtracks: Total backtracks so far
        """
        data = {"depth": depth, "backtracks": backtracks, "timestamp": time.time()}
        self._write_event("backtrack", data)

    def log_result(self, status: str, runtime: float, statistics: dict[str, Any]):
        """
        Log the outcome of a solve call.

        Args:
            status: Solver status value
            runtime: Runtime in seconds
            statistics: Search statistics
        """
        data = {"status": status, "runtime": runtime, "timestamp": time.time()}
        data.update(statistics)
        self._write_event("result", data)

    def log_exception(self, exception_type: str, exception_message: str, stack_trace: str):
        data = {
            "exception_type": exception_type,
            "exception_message": exception_message,
            "stack_trace": stack_trace,
            "timestamp": time.time(),
        }
        self._write_event("exception", data)

    def close(self):
        """Close all open file handles."""
        for file in self.files.values():
            file.close()
        self.files = {}

    def finalize(self) -> str:
        """
        Finalize logging and write metadata file if visualization is enabled.

        Returns:
            Path to metadata file if visualization is enabled, empty string otherwise
        """
        self.close()

        if self.visualize_ready:
            self.metadata["end_time"] = datetime.now().isoformat()
            self.metadata["record_counts"] = self.write_counts

            metadata_path = os.path.join(self.output_dir, f"{self.run_name}_metadata.json")
            with open(metadata_path, "w") as f:
                json.dump(self.metadata, f, indent=2)

            return metadata_path

        return ""


def create_logger(
    run_name: str,
    output_dir: str = "logs",
    format_type: str = "json",
    visualize_ready: bool = False,
) -> StructuredLogger:
    """
    Create a structured logger with default settings.

    Args:
        run_name: Name of the run
        output_dir: Directory to save logs in
        format_type: Format to save logs in ("json" or "csv")
        visualize_ready: Whether to write a metadata file on finalize

    Returns:
        StructuredLogger instance
    """
    return StructuredLogger(
        output_dir=output_dir,
        run_name=run_name,
        format_type=format_type,
        visualize_ready=visualize_ready,
    )
