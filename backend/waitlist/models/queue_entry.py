"""QueueEntry model - one customer's place in the waitlist."""

from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from waitlist.database import Base
from waitlist.utils.timezone import utc_now


class EntryStatus(str, Enum):
    """Lifecycle states of a queue entry."""
    WAITING = "waiting"      # Eligible to be called
    CALLED = "called"        # Summoned to service
    CANCELLED = "cancelled"  # Removed, row kept for audit


# Largest value a SQLite INTEGER primary key can hold
MAX_ENTRY_ID = 2**63 - 1

# Allowed source states for each target state
ALLOWED_TRANSITIONS: dict[EntryStatus, frozenset[EntryStatus]] = {
    EntryStatus.CALLED: frozenset({EntryStatus.WAITING, EntryStatus.CALLED}),
    EntryStatus.CANCELLED: frozenset(
        {EntryStatus.WAITING, EntryStatus.CALLED, EntryStatus.CANCELLED}
    ),
}


class QueueEntry(Base):
    """
    A customer's queue record.

    Entries are created on join and only changed afterwards by admin
    actions. FIFO order among waiting entries is ``created_at`` then ``id``.
    """

    __tablename__ = "queue"
    # AUTOINCREMENT keeps SQLite from reusing ids of deleted rows
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    phone: Mapped[str | None] = mapped_column(Text)
    status: Mapped[str] = mapped_column(
        String(20),
        default=EntryStatus.WAITING.value,
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=utc_now,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<QueueEntry #{self.id} {self.name} ({self.status})>"
