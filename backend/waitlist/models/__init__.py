# Database models
from waitlist.models.queue_entry import (
    ALLOWED_TRANSITIONS,
    MAX_ENTRY_ID,
    EntryStatus,
    QueueEntry,
)

__all__ = [
    "ALLOWED_TRANSITIONS",
    "MAX_ENTRY_ID",
    "EntryStatus",
    "QueueEntry",
]
