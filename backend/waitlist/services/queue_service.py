"""
Queue service - the only place that reads and changes queue entries.

Each mutating operation runs a single statement, commits it, and returns a
``MutationResult`` holding the value and a ``QueueChanged`` event. Publishing
the event to connected clients is left to the caller, after the commit.
"""

from dataclasses import dataclass
from typing import Any, Optional

from sqlalchemy import and_, delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from waitlist.errors import InvalidTransitionError, NotFoundError, ValidationError
from waitlist.models import ALLOWED_TRANSITIONS, MAX_ENTRY_ID, EntryStatus, QueueEntry
from waitlist.utils.timezone import utc_now


@dataclass(frozen=True)
class QueueChanged:
    """Something in the queue changed; clients should refetch."""
    action: str  # join, call, cancel, clear
    entry_id: Optional[int] = None


@dataclass(frozen=True)
class MutationResult:
    """Outcome of a committed mutation plus the event to broadcast."""
    value: Any
    event: QueueChanged


FIFO_ORDER = (QueueEntry.created_at.asc(), QueueEntry.id.asc())


def is_storable_id(entry_id: int) -> bool:
    """Ids outside the store's integer range can never match a row."""
    return 1 <= entry_id <= MAX_ENTRY_ID


class QueueService:
    """
    Queue operations over one database session.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_active(self) -> list[QueueEntry]:
        """All entries that are not cancelled, oldest first."""
        result = await self.session.execute(
            select(QueueEntry)
            .where(QueueEntry.status != EntryStatus.CANCELLED.value)
            .order_by(*FIFO_ORDER)
        )
        return list(result.scalars().all())

    async def get(self, entry_id: int) -> QueueEntry:
        if not is_storable_id(entry_id):
            raise NotFoundError(f"Queue entry {entry_id} not found")

        entry = await self.session.get(QueueEntry, entry_id)
        if entry is None:
            raise NotFoundError(f"Queue entry {entry_id} not found")
        return entry

    async def join(self, name: Optional[str], phone: Optional[str] = None) -> MutationResult:
        """
        Add a customer to the end of the queue.

        Raises:
            ValidationError: if name is missing or blank
        """
        if name is None or not name.strip():
            raise ValidationError("Name is required")

        entry = QueueEntry(
            name=name,
            phone=phone.strip() if phone and phone.strip() else None,
            status=EntryStatus.WAITING.value,
            created_at=utc_now(),
        )
        self.session.add(entry)
        await self.session.commit()
        await self.session.refresh(entry)

        print(f"Queue: #{entry.id} {entry.name} joined", flush=True)
        return MutationResult(entry, QueueChanged("join", entry.id))

    async def position_of(self, entry_id: int) -> Optional[int]:
        """
        1-based position among waiting entries.

        Returns None when the entry is no longer waiting.
        """
        return await self.position_for(await self.get(entry_id))

    async def position_for(self, entry: QueueEntry) -> Optional[int]:
        """Same as ``position_of`` for an entry that is already loaded."""
        if entry.status != EntryStatus.WAITING.value:
            return None

        result = await self.session.execute(
            select(func.count())
            .select_from(QueueEntry)
            .where(
                QueueEntry.status == EntryStatus.WAITING.value,
                or_(
                    QueueEntry.created_at < entry.created_at,
                    and_(
                        QueueEntry.created_at == entry.created_at,
                        QueueEntry.id < entry.id,
                    ),
                ),
            )
        )
        return result.scalar_one() + 1

    async def call(self, entry_id: int) -> MutationResult:
        """Summon a waiting entry."""
        await self._transition(entry_id, EntryStatus.CALLED)
        return MutationResult(True, QueueChanged("call", entry_id))

    async def cancel(self, entry_id: int) -> MutationResult:
        """Cancel a waiting or called entry. The row is kept."""
        await self._transition(entry_id, EntryStatus.CANCELLED)
        return MutationResult(True, QueueChanged("cancel", entry_id))

    async def clear(self) -> MutationResult:
        """Delete every entry regardless of status."""
        result = await self.session.execute(delete(QueueEntry))
        await self.session.commit()

        removed = result.rowcount or 0
        print(f"Queue: cleared {removed} entries", flush=True)
        return MutationResult(removed, QueueChanged("clear"))

    async def _transition(self, entry_id: int, target: EntryStatus) -> None:
        if not is_storable_id(entry_id):
            raise NotFoundError(f"Queue entry {entry_id} not found")

        allowed = [s.value for s in ALLOWED_TRANSITIONS[target]]
        result = await self.session.execute(
            update(QueueEntry)
            .where(QueueEntry.id == entry_id, QueueEntry.status.in_(allowed))
            .values(status=target.value)
        )
        await self.session.commit()

        if result.rowcount == 0:
            entry = await self.get(entry_id)
            raise InvalidTransitionError(
                f"Cannot mark a {entry.status} entry as {target.value}"
            )

        print(f"Queue: #{entry_id} -> {target.value}", flush=True)
