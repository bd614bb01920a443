"""
RSVP lifecycle management.

The manager owns every rule about RSVPs: one RSVP per (user, event),
capacity, overlapping commitments, status/role changes and check-in. It
resolves users and events through ``EntityResolver`` and persists through
``RSVPRepository``; errors are raised from ``app.core.exceptions`` and left
for the API layer to translate.
"""
from datetime import datetime, timedelta, timezone
from typing import List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from app.cache.redis_client import cache, roster_key
from app.core.config import settings
from app.core.exceptions import EventFullError, RSVPExistsError, RSVPOverlapError
from app.core.logging import logger
from app.db.models.event import Event
from app.db.models.rsvp import RSVP, RSVPStatus, EventRole
from app.db.models.user import User
from app.db.repositories import RSVPRepository
from app.db.retry import retry_on_contention
from app.schemas import RSVPCreate, RSVPUpdate, RSVPOut
from app.services.resolver import EntityResolver
from app.services.validation import event_window, events_overlap, has_capacity, parse_role, parse_status
import uuid


class RSVPManager:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.resolve = EntityResolver(session)
        self.rsvps = RSVPRepository(session)

    @retry_on_contention
    async def create_rsvp(self, event_id: uuid.UUID, user_id: uuid.UUID, rsvp_in: Optional[RSVPCreate] = None) -> RSVP:
        """
        Create an RSVP for a user to an event.

        The event and user rows are locked for the rest of the transaction,
        so the existence, capacity and overlap checks and the insert are
        seen atomically by concurrent requests.

        Raises:
            EventNotFoundError, UserNotFoundError: If either lookup fails
            InvalidStatusError, InvalidRoleError: If the payload has unknown values
            RSVPExistsError: If the user already has an RSVP for the event
            EventFullError: If the event has no ATTENDING places left
            RSVPOverlapError: If the user attends another event at the same time
        """
        rsvp_in = rsvp_in or RSVPCreate()
        event, user = await self.resolve.event_and_user(event_id, user_id, lock=True)
        status = parse_status(rsvp_in.status)
        role = parse_role(rsvp_in.event_role)

        if await self.rsvps.exists(user.id, event.id):
            raise RSVPExistsError("RSVP Already Exists")

        if status == RSVPStatus.ATTENDING:
            await self._ensure_capacity(event)
            await self._ensure_no_overlap(user, event)

        rsvp = RSVP(event=event, user=user, status=status, event_role=role, checked_in=False, checked_in_at=None)
        try:
            await self.rsvps.add(rsvp)
        except IntegrityError:
            # Lost the race against a concurrent insert for the same pair
            await self.session.rollback()
            logger.info(f"Concurrent RSVP insert rejected for user {user_id} at event {event_id}")
            raise RSVPExistsError("RSVP Already Exists")

        self._sync_participation(event, user, status)
        await self.session.commit()
        await cache.delete(roster_key(event.id))
        logger.info(f"User {user.id} RSVP'd {status.value} as {role.value} to event {event.id}")
        return rsvp

    async def get_attendees_by_event(self, event_id: uuid.UUID) -> List[RSVP]:
        event = await self.resolve.event(event_id)
        return await self.rsvps.find_by_event(event.id)

    async def get_attendee_roster(self, event_id: uuid.UUID) -> List[dict]:
        """JSON-ready attendee list for an event, read through the roster cache."""
        event = await self.resolve.event(event_id)
        key = roster_key(event.id)
        cached = await cache.get(key)
        if cached is not None:
            logger.debug(f"Roster cache hit for event {event.id}")
            return cached

        rsvps = await self.rsvps.find_by_event(event.id)
        roster = [RSVPOut.model_validate(r).model_dump(mode="json", by_alias=True) for r in rsvps]
        await cache.set(key, roster, expire=settings.ROSTER_CACHE_TTL)
        return roster

    @retry_on_contention
    async def cancel_rsvp(self, event_id: uuid.UUID, user_id: uuid.UUID) -> None:
        """Delete the user's RSVP for the event. There is no undo."""
        event, user, rsvp = await self.resolve.rsvp(event_id, user_id, lock=True)
        await self.rsvps.delete(rsvp)
        event.participants.discard(user)
        await self.session.commit()
        await cache.delete(roster_key(event.id))
        logger.info(f"User {user.id} cancelled RSVP to event {event.id}")

    @retry_on_contention
    async def update_rsvp(self, event_id: uuid.UUID, user_id: uuid.UUID, changes: RSVPUpdate) -> RSVP:
        """
        Apply a partial update to an RSVP.

        Only ``status`` and ``event_role`` present in ``changes`` are applied;
        both are validated before anything is modified. Moving into ATTENDING
        takes a place at the event, so it passes the same capacity and
        overlap checks as creating an ATTENDING RSVP.
        """
        fields = changes.model_dump(exclude_unset=True)
        status_given = fields.get("status") is not None
        event, user, rsvp = await self.resolve.rsvp(event_id, user_id, lock=status_given)
        status = parse_status(fields["status"]) if status_given else rsvp.status
        role = parse_role(fields["event_role"]) if fields.get("event_role") is not None else rsvp.event_role

        if status == RSVPStatus.ATTENDING and rsvp.status != RSVPStatus.ATTENDING:
            await self._ensure_capacity(event)
            await self._ensure_no_overlap(user, event)

        rsvp.status = status
        rsvp.event_role = role
        self._sync_participation(event, user, status)
        await self.session.commit()
        await cache.delete(roster_key(event.id))
        logger.info(f"Updated RSVP {rsvp.id}: status={status.value}, role={role.value}")
        return rsvp

    @retry_on_contention
    async def check_in_user(self, event_id: uuid.UUID, user_id: uuid.UUID) -> RSVP:
        """Mark the RSVP checked in. Checking in twice keeps the first timestamp."""
        event, user, rsvp = await self.resolve.rsvp(event_id, user_id)
        if rsvp.checked_in:
            logger.debug(f"User {user.id} already checked in to event {event.id}")
            return rsvp

        rsvp.checked_in = True
        rsvp.checked_in_at = datetime.now(timezone.utc)
        await self.session.commit()
        await cache.delete(roster_key(event.id))
        logger.info(f"User {user.id} checked in to event {event.id}")
        return rsvp

    async def get_all_rsvps_by_user(self, user_id: uuid.UUID) -> List[RSVP]:
        user = await self.resolve.user(user_id)
        return await self.rsvps.find_by_user(user.id)

    async def get_checked_in_rsvps_by_user(self, user_id: uuid.UUID) -> List[RSVP]:
        user = await self.resolve.user(user_id)
        return await self.rsvps.find_by_user(user.id, checked_in_only=True)

    async def one_click_rsvp(self, user_id: uuid.UUID, event_id: uuid.UUID) -> RSVP:
        """Accept an invitation as an attending participant."""
        rsvp_in = RSVPCreate(status=RSVPStatus.ATTENDING.value, event_role=EventRole.PARTICIPANT.value)
        return await self.create_rsvp(event_id, user_id, rsvp_in)

    async def _ensure_capacity(self, event: Event) -> None:
        attending = await self.rsvps.count_attending(event.id)
        if not has_capacity(event, attending):
            raise EventFullError(f"Event is at full capacity ({event.capacity} attendees)")

    async def _ensure_no_overlap(self, user: User, event: Event) -> None:
        start, end = event_window(event)
        # An event from the previous day can still be running at this one's start
        candidates = await self.rsvps.find_attending_between(
            user.id, start.date() - timedelta(days=1), end.date()
        )
        for other in candidates:
            if other.event_id != event.id and events_overlap(other.event, event):
                raise RSVPOverlapError(
                    f"User is already attending '{other.event.name}' at an overlapping time"
                )

    @staticmethod
    def _sync_participation(event: Event, user: User, status: RSVPStatus) -> None:
        if status == RSVPStatus.ATTENDING:
            event.participants.add(user)
        else:
            event.participants.discard(user)
