"""Cross-field group validity tracking.

Fields push ``(group, field_id, is_valid)`` on every validity change and
``remove`` on teardown. Both calls are fire-and-forget and idempotent; a group
is valid when every field registered in it is valid.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Protocol

from core.config.models import EngineSettings

logger = logging.getLogger("maskfield.groups")

Clock = Callable[[], float]
FlushListener = Callable[[frozenset[str]], None]


class GroupAggregator(Protocol):
    """Narrow contract field sessions depend on."""

    def update(self, group: str, field_id: str, is_valid: bool) -> None: ...

    def remove(self, group: str, field_id: str) -> None: ...


@dataclass(frozen=True)
class _FieldEntry:
    is_valid: bool
    updated_at: float


class GroupValidityAggregator:
    """Thread-safe group validity map with a debounced flush.

    Changed group names are queued and handed to ``on_flush`` once no update has
    arrived for ``batch_delay_seconds``. Entries not refreshed within
    ``stale_after_seconds`` are dropped, checked at most once per
    ``cleanup_interval_seconds``.
    """

    def __init__(
        self,
        *,
        batch_delay_seconds: float = 0.1,
        stale_after_seconds: float = 300.0,
        cleanup_interval_seconds: float = 30.0,
        on_flush: FlushListener | None = None,
        clock: Clock = time.monotonic,
    ) -> None:
        self._batch_delay = batch_delay_seconds
        self._stale_after = stale_after_seconds
        self._cleanup_interval = cleanup_interval_seconds
        self._on_flush = on_flush
        self._clock = clock

        self._lock = threading.RLock()
        self._groups: dict[str, dict[str, _FieldEntry]] = {}
        self._pending: set[str] = set()
        self._timer: threading.Timer | None = None
        self._last_cleanup = clock()
        self._active = True

    @classmethod
    def from_settings(
        cls,
        settings: EngineSettings,
        *,
        on_flush: FlushListener | None = None,
        clock: Clock = time.monotonic,
    ) -> GroupValidityAggregator:
        return cls(
            batch_delay_seconds=settings.group_batch_delay_seconds,
            stale_after_seconds=settings.group_stale_after_seconds,
            cleanup_interval_seconds=settings.group_cleanup_interval_seconds,
            on_flush=on_flush,
            clock=clock,
        )

    @property
    def active(self) -> bool:
        return self._active

    def update(self, group: str, field_id: str, is_valid: bool) -> None:
        with self._lock:
            if not self._active:
                return
            self._groups.setdefault(group, {})[field_id] = _FieldEntry(
                is_valid=is_valid, updated_at=self._clock()
            )
            self._pending.add(group)
            self._schedule_flush()
            self._cleanup_stale()

    def remove(self, group: str, field_id: str) -> None:
        with self._lock:
            if not self._active:
                return
            fields = self._groups.get(group)
            if fields is not None:
                fields.pop(field_id, None)
                if not fields:
                    del self._groups[group]
            self._pending.add(group)
            self._schedule_flush()

    def verify_group(self, group: str) -> bool:
        """Return whether every field in ``group`` is valid; unknown groups are valid."""

        with self._lock:
            if not self._active:
                return True
            fields = self._groups.get(group)
            if not fields:
                return True
            return all(entry.is_valid for entry in fields.values())

    def group_count(self, group: str) -> int:
        with self._lock:
            if not self._active:
                return 0
            return len(self._groups.get(group, {}))

    def all_groups_valid(self, groups: Iterable[str]) -> bool:
        return all(self.verify_group(group) for group in groups)

    def group_names(self) -> list[str]:
        with self._lock:
            return sorted(self._groups)

    def pending_groups(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._pending)

    def flush(self) -> frozenset[str]:
        """Hand queued group names to the listener now and clear the queue."""

        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            if not self._active:
                return frozenset()
            groups = frozenset(self._pending)
            self._pending.clear()

        if groups:
            logger.debug("flushing group updates: %s", sorted(groups))
            if self._on_flush is not None:
                self._on_flush(groups)
        return groups

    def close(self) -> None:
        """Cancel the pending flush and ignore every later call."""

        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self._groups.clear()
            self._pending.clear()
            self._active = False

    def _schedule_flush(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
        timer = threading.Timer(self._batch_delay, self.flush)
        timer.daemon = True
        self._timer = timer
        timer.start()

    def _cleanup_stale(self) -> None:
        now = self._clock()
        if now - self._last_cleanup <= self._cleanup_interval:
            return
        self._last_cleanup = now

        removed = 0
        for group in list(self._groups):
            fields = self._groups[group]
            stale = [
                field_id
                for field_id, entry in fields.items()
                if now - entry.updated_at > self._stale_after
            ]
            for field_id in stale:
                del fields[field_id]
            if stale:
                removed += len(stale)
                self._pending.add(group)
            if not fields:
                del self._groups[group]

        if removed:
            logger.info("dropped %d stale field registration(s)", removed)
            self._schedule_flush()
