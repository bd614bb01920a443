"""
RSVP persistence.

Lookups by (user, event) pair, by event and by user, plus the counting
queries the capacity and overlap rules rely on. Uniqueness of the pair is
enforced by the ``uq_user_event_rsvp`` constraint, so a racing insert
surfaces as an IntegrityError from ``add``.
"""
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from app.db.models.event import Event
from app.db.models.rsvp import RSVP, RSVPStatus
from typing import List, Optional
from datetime import date
import uuid


class RSVPRepository:

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_user_and_event(self, user_id: uuid.UUID, event_id: uuid.UUID) -> Optional[RSVP]:
        """
        Get a user's RSVP for a specific event.
        
        Args:
            user_id: User's UUID
            event_id: Event's UUID
            
        Returns:
            RSVP object if found, None otherwise
        """
        q = select(RSVP).where(
            RSVP.user_id == user_id,
            RSVP.event_id == event_id
        )
        res = await self.session.execute(q)
        return res.scalars().first()

    async def exists(self, user_id: uuid.UUID, event_id: uuid.UUID) -> bool:
        q = select(func.count(RSVP.id)).where(
            RSVP.user_id == user_id,
            RSVP.event_id == event_id
        )
        res = await self.session.execute(q)
        return (res.scalar() or 0) > 0

    async def find_by_event(self, event_id: uuid.UUID) -> List[RSVP]:
        """All RSVPs for an event in the order they were made."""
        q = select(RSVP).where(RSVP.event_id == event_id).order_by(RSVP.created_at, RSVP.id)
        res = await self.session.execute(q)
        return list(res.scalars().all())

    async def find_by_user(self, user_id: uuid.UUID, checked_in_only: bool = False) -> List[RSVP]:
        """
        RSVPs held by a user, sorted by event date then time; all-day events
        (no time) come first within their day.
        
        Args:
            user_id: User's UUID
            checked_in_only: Restrict to RSVPs that have been checked in
            
        Returns:
            List of RSVP objects
        """
        q = (
            select(RSVP)
            .join(Event, RSVP.event_id == Event.id)
            .where(RSVP.user_id == user_id)
            .order_by(Event.date, Event.time.asc().nulls_first(), RSVP.created_at)
        )
        if checked_in_only:
            q = q.where(RSVP.checked_in.is_(True))
        res = await self.session.execute(q)
        return list(res.scalars().all())

    async def count_attending(self, event_id: uuid.UUID) -> int:
        """Get the count of ATTENDING RSVPs for an event."""
        q = select(func.count(RSVP.id)).where(
            RSVP.event_id == event_id,
            RSVP.status == RSVPStatus.ATTENDING
        )
        res = await self.session.execute(q)
        return res.scalar() or 0

    async def find_attending_between(self, user_id: uuid.UUID, start: date, end: date) -> List[RSVP]:
        """ATTENDING RSVPs of a user for events dated within [start, end]."""
        q = (
            select(RSVP)
            .join(Event, RSVP.event_id == Event.id)
            .where(
                RSVP.user_id == user_id,
                RSVP.status == RSVPStatus.ATTENDING,
                Event.date >= start,
                Event.date <= end,
            )
        )
        res = await self.session.execute(q)
        return list(res.scalars().all())

    async def add(self, rsvp: RSVP) -> RSVP:
        """Stage and flush a new RSVP so constraint violations surface here."""
        self.session.add(rsvp)
        await self.session.flush()
        return rsvp

    async def delete(self, rsvp: RSVP) -> None:
        await self.session.delete(rsvp)
        await self.session.flush()
