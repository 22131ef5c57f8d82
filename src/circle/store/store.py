"""Serialized access to the store document.

Every mutation runs load -> apply -> persist inside one critical section:
an ``asyncio.Lock`` for coroutines in this process plus an advisory
``fcntl`` lock on a sidecar file for other processes sharing the document.
Readers get the last committed snapshot, which is only replaced after a
successful persist, or reloaded when another process changed the file
(detected by mtime and size).
"""

from __future__ import annotations

import asyncio
import fcntl
import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TypeVar

from circle.errors import StoreUnavailable
from circle.store.persistence import StorePersistence
from circle.store.types import Snapshot

logger = logging.getLogger(__name__)

_T = TypeVar("_T")


class SocialStore:
    """Single shared store with a global write critical section."""

    def __init__(self, path: Path) -> None:
        self._persistence = StorePersistence(path)
        self._lock = asyncio.Lock()
        self._lock_file = path.with_name(f".{path.name}.lock")
        self._committed: Snapshot | None = None
        self._stamp: tuple[int, int] | None = None

    @property
    def path(self) -> Path:
        return self._persistence.path

    async def open(self) -> Snapshot:
        """Load the document, initialising an empty one on first run.

        A malformed document is moved aside and replaced by an empty one.
        """
        async with self._lock:
            return await asyncio.to_thread(self._open_sync)

    @property
    def is_open(self) -> bool:
        return self._committed is not None

    async def read(self) -> Snapshot:
        """Return the committed snapshot. Callers must not mutate it.

        If another process rewrote the document since our last load or
        persist, it is reloaded first.
        """
        if self._committed is None:
            return await self.open()
        if self._persistence.stamp() != self._stamp:
            async with self._lock:
                if self._persistence.stamp() != self._stamp:
                    await asyncio.to_thread(self._reload_sync)
        return self._committed

    async def mutate(self, apply: Callable[[Snapshot], _T]) -> _T:
        """Apply ``apply`` to a freshly loaded snapshot and persist it.

        If ``apply`` raises, nothing is written and the committed snapshot is
        unchanged. Persist failures surface as StoreUnavailable.
        """
        async with self._lock:
            return await asyncio.to_thread(self._mutate_sync, apply)

    # ------------------------------------------------------------------
    # Internal helpers (run in a worker thread under self._lock)
    # ------------------------------------------------------------------

    @contextmanager
    def _file_lock(self) -> Iterator[None]:
        try:
            self._lock_file.parent.mkdir(parents=True, exist_ok=True)
            lockf = self._lock_file.open("a+")
        except OSError as e:
            raise StoreUnavailable(f"Cannot lock store {self.path}: {e}") from e
        with lockf:
            try:
                fcntl.flock(lockf.fileno(), fcntl.LOCK_EX)
                yield
            finally:
                fcntl.flock(lockf.fileno(), fcntl.LOCK_UN)

    def _open_sync(self) -> Snapshot:
        with self._file_lock():
            try:
                snapshot = self._persistence.load()
            except StoreUnavailable as e:
                moved = self._persistence.quarantine()
                logger.warning(
                    "corrupt_store_file",
                    extra={
                        "file.path": str(self.path),
                        "file.moved_to": str(moved) if moved else None,
                        "error.message": str(e),
                    },
                )
                snapshot = Snapshot()

            if not self._persistence.exists():
                self._persistence.persist(snapshot)
                logger.info("store_initialized", extra={"file.path": str(self.path)})
            self._stamp = self._persistence.stamp()

        self._committed = snapshot
        return snapshot

    def _reload_sync(self) -> None:
        with self._file_lock():
            snapshot = self._persistence.load()
            self._stamp = self._persistence.stamp()
        logger.debug("store_reloaded", extra={"file.path": str(self.path)})
        self._committed = snapshot

    def _mutate_sync(self, apply: Callable[[Snapshot], _T]) -> _T:
        with self._file_lock():
            snapshot = self._persistence.load()
            result = apply(snapshot)
            self._persistence.persist(snapshot)
            self._stamp = self._persistence.stamp()
        self._committed = snapshot
        return result
