"""JSON load/save for the store document.

The whole snapshot is one human-readable JSON file, rewritten in full on
every mutation. Atomic writes use tempfile + fsync + os.replace().
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from circle.errors import StoreUnavailable
from circle.store.types import Snapshot

logger = logging.getLogger(__name__)


class StorePersistence:
    """Load/persist a Snapshot to a single JSON document."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.exists()

    def stamp(self) -> tuple[int, int] | None:
        """``(mtime_ns, size)`` of the document, or None when it is absent."""
        try:
            st = self._path.stat()
        except FileNotFoundError:
            return None
        return st.st_mtime_ns, st.st_size

    def load(self) -> Snapshot:
        """Read and hydrate the document.

        A missing document is a first run and yields an empty snapshot.

        Raises:
            StoreUnavailable: The document is unreadable or malformed.
        """
        if not self._path.exists():
            return Snapshot()
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            raise StoreUnavailable(f"Cannot read store {self._path}: {e}") from e
        except json.JSONDecodeError as e:
            raise StoreUnavailable(f"Malformed store {self._path}: {e}") from e
        return hydrate_snapshot(raw, self._path)

    def persist(self, snapshot: Snapshot) -> None:
        """Rewrite the whole document atomically.

        Raises:
            StoreUnavailable: The write failed; the previous document is intact.
        """
        data = snapshot.to_dict()
        try:
            _write_json_atomic(self._path, data)
        except (OSError, TypeError, ValueError) as e:
            logger.error(
                "store_persist_failed",
                extra={"file.path": str(self._path), "error.message": str(e)},
            )
            raise StoreUnavailable(f"Cannot write store {self._path}: {e}") from e

    def quarantine(self) -> Path | None:
        """Move an unreadable document aside so a fresh one can be written."""
        if not self._path.exists():
            return None
        stamp = datetime.now(UTC).strftime("%Y%m%dT%H%M%S")
        target = self._path.with_name(f"{self._path.name}.corrupt-{stamp}")
        self._path.replace(target)
        return target


def hydrate_snapshot(raw: Any, path: Path | None = None) -> Snapshot:
    """Build a Snapshot from a decoded JSON document."""
    try:
        return Snapshot.from_dict(raw)
    except (KeyError, TypeError, ValueError) as e:
        raise StoreUnavailable(f"Malformed store {path or ''}: {e}".strip()) from e


def _write_json_atomic(path: Path, data: dict[str, Any]) -> None:
    """Write JSON atomically via tempfile + fsync + os.replace()."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(json.dumps(data, indent=2, ensure_ascii=False))
            f.write("\n")
            f.flush()
            os.fsync(f.fileno())
        Path(tmp).replace(path)
    except BaseException:
        try:
            Path(tmp).unlink()
        except OSError:
            pass
        raise
