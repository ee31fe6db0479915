"""Audit log that appends one JSON document per line to a file."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

from pydantic import ValidationError

from roster_consensus.logging_config import get_logger
from roster_consensus.models.consensus import AuditRecord
from roster_consensus.storage.exceptions import StorageError

__all__ = ["JsonlAuditLog"]

logger = get_logger(__name__)


class JsonlAuditLog:
    """AuditSink writing JSON lines.

    Writes are serialized through a lock so concurrent evaluations never
    interleave partial lines.

    Attributes:
        path: File the records are appended to.

    """

    def __init__(self, path: Path) -> None:
        """Initialize the log.

        Args:
            path: File to append to; parent directories are created on write.

        """
        self.path = path
        self._lock = asyncio.Lock()

    async def write(self, record: AuditRecord) -> str:
        """Append a record.

        Args:
            record: The audit record.

        Returns:
            The record id.

        Raises:
            StorageError: If the file cannot be written.

        """
        line = json.dumps(record.model_dump(mode="json"), default=str)
        async with self._lock:
            try:
                await asyncio.to_thread(self._append, line)
            except OSError as e:
                raise StorageError(
                    f"Failed to write audit record to {self.path}: {e}"
                ) from e

        logger.debug("audit_record_written", audit_id=record.id, path=str(self.path))
        return record.id

    def read_all(self) -> list[AuditRecord]:
        """Load every record in the file.

        Returns:
            Records in file order; empty when the file does not exist.

        Raises:
            StorageError: If the file cannot be read or a line is malformed.

        """
        if not self.path.exists():
            return []
        try:
            with self.path.open("r", encoding="utf-8") as f:
                return [
                    AuditRecord.model_validate(json.loads(line))
                    for line in f
                    if line.strip()
                ]
        except json.JSONDecodeError as e:
            raise StorageError(f"Failed to parse audit log {self.path}: {e}") from e
        except ValidationError as e:
            raise StorageError(f"Invalid audit record in {self.path}: {e}") from e
        except OSError as e:
            raise StorageError(f"Failed to read audit log {self.path}: {e}") from e

    def _append(self, line: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as f:
            f.write(line + "\n")
