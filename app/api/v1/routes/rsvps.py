"""
RSVP endpoints, mounted under the events base path.

Every JSON response uses the ``{success, data, message}`` envelope; domain
errors are turned into that envelope by the handlers in ``app.api.errors``.
"""
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import PlainTextResponse
from typing import Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.config import settings
from app.core.exceptions import AppError, EventNotFoundError, UserNotFoundError
from app.core.logging import logger
from app.core.rate_limit import limiter
from app.db.session import get_session
from app.schemas import APIResponse, RSVPCreate, RSVPOut, RSVPUpdate
from app.services.resolver import EntityResolver
from app.services.rsvp_manager import RSVPManager

router = APIRouter(prefix="/events", tags=["rsvps"])

def get_rsvp_manager(session: AsyncSession = Depends(get_session)) -> RSVPManager:
    return RSVPManager(session)

@router.post("/{event_id}/rsvp/checkin/{user_id}", response_model=APIResponse[RSVPOut])
async def check_in_user(
    event_id: UUID,
    user_id: UUID,
    manager: RSVPManager = Depends(get_rsvp_manager)
):
    await manager.check_in_user(event_id, user_id)
    return {"success": True, "data": [], "message": "User successfully checked in"}

@router.post("/{event_id}/rsvp/{user_id}", response_model=APIResponse[RSVPOut], status_code=status.HTTP_201_CREATED)
async def create_rsvp(
    event_id: UUID,
    user_id: UUID,
    payload: Optional[RSVPCreate] = None,
    manager: RSVPManager = Depends(get_rsvp_manager)
):
    """
    RSVP a user to an event.
    
    The body is optional; status defaults to ATTENDING and role to PARTICIPANT.
    Conflicts (existing RSVP, full event, overlapping event) answer 400.
    """
    rsvp = await manager.create_rsvp(event_id, user_id, payload)
    return {"success": True, "data": [rsvp]}

@router.patch("/{event_id}/rsvp/{user_id}", response_model=APIResponse[RSVPOut])
async def update_rsvp(
    event_id: UUID,
    user_id: UUID,
    payload: RSVPUpdate,
    manager: RSVPManager = Depends(get_rsvp_manager)
):
    rsvp = await manager.update_rsvp(event_id, user_id, payload)
    return {"success": True, "data": [rsvp]}

@router.delete("/{event_id}/rsvp/cancel/{user_id}", response_model=APIResponse[RSVPOut])
async def cancel_rsvp(
    event_id: UUID,
    user_id: UUID,
    manager: RSVPManager = Depends(get_rsvp_manager)
):
    await manager.cancel_rsvp(event_id, user_id)
    return {"success": True, "data": [], "message": "RSVP successfully cancelled"}

@router.get("/{event_id}/attendees", response_model=APIResponse[RSVPOut])
async def get_attendees(
    event_id: UUID,
    manager: RSVPManager = Depends(get_rsvp_manager)
):
    roster = await manager.get_attendee_roster(event_id)
    return {"success": True, "data": roster}

@router.get("/rsvp/user/{user_id}", response_model=APIResponse[RSVPOut])
async def get_all_rsvps_for_user(
    user_id: UUID,
    manager: RSVPManager = Depends(get_rsvp_manager)
):
    """All RSVPs of a user, earliest event first."""
    rsvps = await manager.get_all_rsvps_by_user(user_id)
    return {"success": True, "data": rsvps}

@router.get("/rsvp/user/{user_id}/checkedin", response_model=APIResponse[RSVPOut])
async def get_checked_in_rsvps_for_user(
    user_id: UUID,
    manager: RSVPManager = Depends(get_rsvp_manager)
):
    """Checked-in RSVPs of a user, earliest event first."""
    rsvps = await manager.get_checked_in_rsvps_by_user(user_id)
    return {"success": True, "data": rsvps}

@router.get("/1c/{user_id}/{event_id}", response_class=PlainTextResponse)
@limiter.limit(settings.ONE_CLICK_RATE_LIMIT)
async def one_click_rsvp(
    request: Request,
    user_id: UUID,
    event_id: UUID,
    session: AsyncSession = Depends(get_session)
):
    """
    Accept an invitation from a link.
    
    Answers plain text: 200 on success, 400 with the reason otherwise.
    """
    resolver = EntityResolver(session)
    try:
        event = await resolver.event(event_id)
    except EventNotFoundError:
        return PlainTextResponse("Event does not exist.", status_code=status.HTTP_400_BAD_REQUEST)
    try:
        user = await resolver.user(user_id)
    except UserNotFoundError:
        return PlainTextResponse("User does not exist.", status_code=status.HTTP_400_BAD_REQUEST)

    event_name = event.name
    try:
        await RSVPManager(session).one_click_rsvp(user.id, event.id)
    except AppError as e:
        logger.info(f"One-click RSVP failed for user {user_id} at event {event_id}: {e.message}")
        return PlainTextResponse(f"Failed to create RSVP: {e.message}", status_code=status.HTTP_400_BAD_REQUEST)

    return PlainTextResponse(f"Successfully accepted invitation to event: {event_name}")
