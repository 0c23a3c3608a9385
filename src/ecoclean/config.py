"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

config.py
Loads the flat key-value configuration file (ecoclean.conf).

Format (shell style, one assignment per line, '#' starts a comment):

    TEMP_EXTENSIONS="*.tmp *.log *.bak"
    CLEAN_DIRS="~/Downloads /tmp/build"
    LOG_FILE="~/.ecoclean/ecoclean.log"

A missing file is not an error: documented defaults are used instead.
"""
import logging
import os
import shlex
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from ecoclean.core.models import DEFAULT_PATTERNS

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "ecoclean.conf"
DEFAULT_LOG_FILE = str(Path.home() / ".ecoclean" / "ecoclean.log")


@dataclass
class CleanupConfig:
    """Values supplied by the configuration file, or defaults."""
    extensions: List[str] = field(default_factory=lambda: list(DEFAULT_PATTERNS))
    directories: List[str] = field(default_factory=lambda: [os.getcwd()])
    log_file: str = DEFAULT_LOG_FILE
    source: Optional[str] = None


def find_config_file(explicit_path: Optional[str] = None) -> Optional[Path]:
    """Explicit path if given, otherwise ./ecoclean.conf when present."""
    if explicit_path:
        return Path(explicit_path).expanduser()
    candidate = Path.cwd() / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def load_config(path: Optional[str] = None) -> CleanupConfig:
    """
    Reads the configuration file.
    Raises FileNotFoundError only when an explicitly requested file is missing.
    """
    config_path = find_config_file(path)
    if config_path is None:
        logger.debug("No configuration file found, using defaults")
        return CleanupConfig()

    if not config_path.is_file():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        config = parse_config(f.read())
    config.source = str(config_path)
    logger.debug(f"Configuration loaded from {config_path}")
    return config


def parse_config(text: str) -> CleanupConfig:
    """Parses configuration text. Malformed lines are skipped with a warning."""
    config = CleanupConfig()

    for line_no, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue

        try:
            tokens = shlex.split(line, comments=True)
        except ValueError as e:
            logger.warning(f"Configuration line {line_no} skipped: {e}")
            continue

        # `export KEY=value` is accepted like in a sourced shell file
        if tokens and tokens[0] == "export":
            tokens = tokens[1:]
        if len(tokens) != 1 or "=" not in tokens[0]:
            logger.warning(f"Configuration line {line_no} skipped: expected KEY=\"value\"")
            continue

        key, _, value = tokens[0].partition("=")
        key = key.strip().upper()
        values = value.split()

        if key == "TEMP_EXTENSIONS":
            if values:
                config.extensions = values
        elif key == "CLEAN_DIRS":
            if values:
                config.directories = [os.path.expanduser(v) for v in values]
        elif key == "LOG_FILE":
            if value.strip():
                config.log_file = os.path.expanduser(value.strip())
        else:
            logger.debug(f"Unknown configuration key ignored: {key}")

    return config
