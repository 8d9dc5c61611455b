"""
Queue API endpoints.

Joining and reading the queue are public; calling, cancelling and clearing
require an admin token. Every successful mutation is broadcast to connected
clients after it is committed.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from waitlist.auth.dependencies import verify_admin_token
from waitlist.database import get_db
from waitlist.schemas.queue import (
    EntryIdRequest,
    JoinRequest,
    PositionResponse,
    QueueEntryResponse,
    SuccessResponse,
)
from waitlist.services.notifier import QueueNotifier, get_notifier
from waitlist.services.queue_service import QueueService

router = APIRouter()


def get_queue_service(db: AsyncSession = Depends(get_db)) -> QueueService:
    """Dependency that provides a queue service bound to the request session."""
    return QueueService(db)


# =============================================================================
# Public Endpoints
# =============================================================================

@router.get("", response_model=list[QueueEntryResponse])
async def list_queue(
    service: QueueService = Depends(get_queue_service),
):
    """
    List active entries (waiting and called), oldest first.
    """
    return await service.list_active()


@router.post("/join", response_model=QueueEntryResponse)
async def join_queue(
    data: JoinRequest,
    service: QueueService = Depends(get_queue_service),
    notifier: QueueNotifier = Depends(get_notifier),
):
    """
    Take a number.

    Returns the created entry; its id identifies the customer afterwards.
    """
    outcome = await service.join(data.name, data.phone)
    await notifier.publish(outcome.event)
    return outcome.value


@router.get("/{entry_id}/position", response_model=PositionResponse)
async def get_position(
    entry_id: int,
    service: QueueService = Depends(get_queue_service),
):
    """Current position of an entry among waiting customers."""
    entry = await service.get(entry_id)
    position = await service.position_for(entry)
    return PositionResponse(id=entry.id, status=entry.status, position=position)


# =============================================================================
# Admin Endpoints
# =============================================================================

@router.post(
    "/call",
    response_model=SuccessResponse,
    dependencies=[Depends(verify_admin_token)],
)
async def call_entry(
    data: EntryIdRequest,
    service: QueueService = Depends(get_queue_service),
    notifier: QueueNotifier = Depends(get_notifier),
):
    """Call a waiting customer."""
    outcome = await service.call(data.id)
    await notifier.publish(outcome.event)
    return SuccessResponse()


@router.post(
    "/cancel",
    response_model=SuccessResponse,
    dependencies=[Depends(verify_admin_token)],
)
async def cancel_entry(
    data: EntryIdRequest,
    service: QueueService = Depends(get_queue_service),
    notifier: QueueNotifier = Depends(get_notifier),
):
    """Cancel a waiting or called entry."""
    outcome = await service.cancel(data.id)
    await notifier.publish(outcome.event)
    return SuccessResponse()


@router.post(
    "/clear",
    response_model=SuccessResponse,
    dependencies=[Depends(verify_admin_token)],
)
async def clear_queue(
    service: QueueService = Depends(get_queue_service),
    notifier: QueueNotifier = Depends(get_notifier),
):
    """
    Delete every entry.

    Irreversible: cancelled rows kept for audit are removed too.
    """
    outcome = await service.clear()
    await notifier.publish(outcome.event)
    return SuccessResponse()
