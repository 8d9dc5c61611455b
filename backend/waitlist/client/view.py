"""
Client-side view of the queue.

A ``QueueView`` is an immutable snapshot of the last fetched list. Derived
lists are recomputed from that snapshot; nothing is mutated locally.
"""

from dataclasses import dataclass, replace
from typing import Any, Iterable, Optional

from waitlist.models import EntryStatus
from waitlist.schemas.queue import QueueEntryResponse
from waitlist.utils.timezone import format_local_time


@dataclass(frozen=True)
class QueueView:
    entries: tuple[QueueEntryResponse, ...] = ()
    my_id: Optional[int] = None

    @classmethod
    def from_payload(cls, payload: Iterable[dict[str, Any]], my_id: Optional[int] = None) -> "QueueView":
        """Build a view from the JSON list returned by GET /api/queue."""
        return cls(
            entries=tuple(QueueEntryResponse.model_validate(item) for item in payload),
            my_id=my_id,
        )

    def with_entries(self, entries: Iterable[QueueEntryResponse]) -> "QueueView":
        return replace(self, entries=tuple(entries))

    def for_customer(self, my_id: Optional[int]) -> "QueueView":
        return replace(self, my_id=my_id)

    @property
    def waiting(self) -> list[QueueEntryResponse]:
        return [e for e in self.entries if e.status == EntryStatus.WAITING.value]

    @property
    def called(self) -> list[QueueEntryResponse]:
        return [e for e in self.entries if e.status == EntryStatus.CALLED.value]

    @property
    def my_position(self) -> Optional[int]:
        """
        1-based place of ``my_id`` among waiting entries.

        None when no id is set or the entry is no longer waiting.
        """
        if self.my_id is None:
            return None
        for index, entry in enumerate(self.waiting):
            if entry.id == self.my_id:
                return index + 1
        return None

    def render(self, timezone: str = "UTC") -> str:
        """Plain-text board, e.g. for a terminal display."""
        lines = [f"Waiting ({len(self.waiting)})"]
        for index, entry in enumerate(self.waiting, start=1):
            marker = " <- you" if entry.id == self.my_id else ""
            joined = format_local_time(entry.created_at, timezone)
            lines.append(f"  {index:>3}. {entry.name} (#{entry.id}, {joined}){marker}")
        lines.append(f"Called ({len(self.called)})")
        for entry in self.called:
            lines.append(f"       {entry.name} (#{entry.id})")
        return "\n".join(lines)
