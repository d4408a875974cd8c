"""Heartbeat session tracking."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import threading
import time
import uuid
from typing import Callable, Dict, Optional, Tuple

logger = logging.getLogger(__name__)


class OnlineSessions:
    """Tracks the last heartbeat of each client session.

    A background task started through `start` drops sessions that have been
    silent for longer than ``timeout_seconds``.
    """

    def __init__(
        self,
        *,
        timeout_seconds: float,
        interval_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.timeout_seconds = timeout_seconds
        self.interval_seconds = interval_seconds
        self._clock = clock
        self._last_seen: Dict[str, float] = {}
        self._lock = threading.Lock()
        self._task: Optional[asyncio.Task] = None

    def touch(self, session_id: Optional[str]) -> Tuple[str, bool]:
        """Record activity and return the effective session id and whether it was issued now.

        Unknown or missing ids are replaced with a freshly generated one.
        """

        with self._lock:
            if session_id and session_id in self._last_seen:
                self._last_seen[session_id] = self._clock()
                return session_id, False

            new_id = str(uuid.uuid4())
            self._last_seen[new_id] = self._clock()

        if session_id:
            logger.warning("Unknown session %s; issued %s", session_id, new_id)
        else:
            logger.debug("Issued session %s", new_id)
        return new_id, True

    @property
    def online_count(self) -> int:
        with self._lock:
            return len(self._last_seen)

    def prune(self) -> int:
        now = self._clock()
        with self._lock:
            expired = [sid for sid, seen in self._last_seen.items() if now - seen >= self.timeout_seconds]
            for sid in expired:
                del self._last_seen[sid]
        if expired:
            logger.debug("Pruned %d idle session(s)", len(expired))
        return len(expired)

    async def start(self) -> None:
        if self._task is None:
            self._task = asyncio.create_task(self._prune_forever())
            logger.info("Session pruning started (timeout=%ss)", self.timeout_seconds)

    async def stop(self) -> None:
        if self._task:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None

    async def _prune_forever(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            self.prune()
