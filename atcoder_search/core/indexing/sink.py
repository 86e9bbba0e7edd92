"""
File output sink for generated documents.

Each unit is one JSON array file named ``<prefix>-<sequence>.json``. The
files are the exact payloads later posted to the search engine.

Dependencies: json, pathlib (stdlib)
System role: Durable output of the generation pipeline
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Protocol

from atcoder_search.core.exceptions import SinkWriteError

logger = logging.getLogger(__name__)


class OutputSink(Protocol):
    """Destination for chunked output units."""

    def write_unit(self, sequence: int, documents: list[dict[str, Any]]) -> Any:
        """Persist one unit. Called from a worker thread."""
        ...


class FileSink:
    """
    Writes units as JSON files into a directory.

    Attributes:
        save_dir: Directory receiving unit files
        prefix: File name prefix
    """

    def __init__(self, save_dir: Path | str, prefix: str = "doc") -> None:
        self.save_dir = Path(save_dir)
        self.prefix = prefix

    def path_for(self, sequence: int) -> Path:
        """Path of the unit with the given sequence number."""
        return self.save_dir / f"{self.prefix}-{sequence}.json"

    def write_unit(self, sequence: int, documents: list[dict[str, Any]]) -> Path:
        """
        Write one unit.

        The file is written under a temporary name and renamed into place so
        a reader never sees a partial unit.

        Args:
            sequence: Unit sequence number, starting at 1
            documents: Documents of the unit

        Returns:
            Path: Written file

        Raises:
            SinkWriteError: If serialization or the filesystem fails
        """
        path = self.path_for(sequence)
        tmp_path = path.with_name(f".{path.name}.tmp")
        try:
            self.save_dir.mkdir(parents=True, exist_ok=True)
            with tmp_path.open("w", encoding="utf-8") as f:
                json.dump(documents, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, path)
        except (OSError, TypeError, ValueError) as e:
            tmp_path.unlink(missing_ok=True)
            raise SinkWriteError(
                f"failed to write unit: {e}", sequence=sequence, path=str(path)
            ) from e

        logger.info(
            f"{__name__}:write_unit - Wrote {len(documents)} documents",
            extra={"sequence": sequence, "path": str(path)},
        )
        return path

    def units(self) -> list[Path]:
        """Existing unit files ordered by sequence number."""
        if not self.save_dir.is_dir():
            return []
        found = []
        for path in self.save_dir.glob(f"{self.prefix}-*.json"):
            tail = path.stem[len(self.prefix) + 1:]
            if tail.isdigit():
                found.append((int(tail), path))
        return [path for _, path in sorted(found)]

    def clean(self) -> int:
        """
        Delete existing units, creating the directory when missing.

        Returns:
            int: Number of files removed
        """
        self.save_dir.mkdir(parents=True, exist_ok=True)
        removed = 0
        for path in self.units():
            path.unlink()
            removed += 1
        logger.info(
            f"{__name__}:clean - Removed {removed} existing units",
            extra={"save_dir": str(self.save_dir)},
        )
        return removed
