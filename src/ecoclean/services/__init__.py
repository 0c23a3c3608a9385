"""File removal and report logging services."""

from .file_service import FileService
from .report_logger import ReportLogger, NullReportLogger

__all__ = ["FileService", "ReportLogger", "NullReportLogger"]
