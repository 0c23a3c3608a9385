"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/report_logger.py
Append-only text log with one timestamped summary line per completed batch:

    [2024-12-10 18:04:31] Temporary file cleanup: 3 files deleted, 1.50KB freed (1536 bytes)
"""
import logging
import time
from pathlib import Path
from typing import Optional

from ecoclean.utils.convert_utils import ConvertUtils

logger = logging.getLogger(__name__)


class ReportLogger:
    """Writes summary lines to a persistent log file."""

    def __init__(self, log_path: str):
        self.log_path = Path(log_path)

    def append_summary(self, message: str, timestamp: Optional[float] = None) -> str:
        """
        Appends `[YYYY-MM-DD HH:MM:SS] message` to the log file and returns the line.
        Parent directories are created on first use.
        """
        when = time.time() if timestamp is None else timestamp
        single_line = " ".join(message.splitlines())
        line = f"[{ConvertUtils.timestamp_to_human(when)}] {single_line}"

        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.log_path, "a", encoding="utf-8") as f:
            f.write(line + "\n")

        logger.debug(f"Report written to {self.log_path}: {line}")
        return line


class NullReportLogger:
    """Used when no log file is configured. Keeps the line for the caller only."""

    def append_summary(self, message: str, timestamp: Optional[float] = None) -> str:
        when = time.time() if timestamp is None else timestamp
        return f"[{ConvertUtils.timestamp_to_human(when)}] {message}"
