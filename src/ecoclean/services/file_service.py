"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
Removal backends used by the Deleter.
Permanent deletion is the default; moving to the system trash (send2trash) is opt-in.
"""
import os
from pathlib import Path
from typing import Callable
from send2trash import send2trash


class FileService:
    """
    Cross-platform file removal.
    Both backends raise FileNotFoundError for a missing file so callers can tell
    a vanished file apart from a real failure.
    """

    @staticmethod
    def delete_permanently(file_path: str) -> None:
        """Unlinks a file. Irreversible."""
        os.remove(file_path)

    @staticmethod
    def move_to_trash(file_path: str) -> None:
        """Moves a file to the system trash."""
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        try:
            send2trash(str(path))
        except OSError:
            raise
        except Exception as e:
            raise RuntimeError(f"Failed to move to trash: {e}") from e

    @classmethod
    def get_remover(cls, use_trash: bool = False) -> Callable[[str], None]:
        """Returns the removal backend selected at startup."""
        return cls.move_to_trash if use_trash else cls.delete_permanently
