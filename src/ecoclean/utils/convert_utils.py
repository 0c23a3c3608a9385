"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

utils/convert_utils.py
"""
import time


class ConvertUtils:
    @staticmethod
    def bytes_to_human(size_bytes: int) -> str:
        """
        Convert bytes to human-readable string (e.g., 1.50KB, 3.20MB).
        """
        if size_bytes < 0:
            return "0B"

        if size_bytes < 1024:
            return f"{size_bytes}B"

        size = float(size_bytes)
        for unit in ["KB", "MB", "GB", "TB", "PB"]:
            size /= 1024
            if size < 1024:
                return f"{size:.2f}{unit}"
        return f"{size / 1024:.2f}EB"

    @staticmethod
    def timestamp_to_human(timestamp: float, fmt: str = "%Y-%m-%d %H:%M:%S") -> str:
        """
        Convert a Unix timestamp to a human-readable string.
        Uses local time by default.
        """
        try:
            return time.strftime(fmt, time.localtime(timestamp))
        except (OverflowError, OSError, ValueError):
            return "Invalid timestamp"

    @staticmethod
    def pluralize(count: int, word: str) -> str:
        """`1 file`, `2 files`."""
        return f"{count} {word}" if count == 1 else f"{count} {word}s"
