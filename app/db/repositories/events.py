from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from app.db.models.event import Event
from app.db.models.user import User
from app.schemas import EventCreate, EventUpdate
from typing import List, Optional
from datetime import date
import uuid

# Fields an update may never touch
_IMMUTABLE_FIELDS = {"id", "host", "host_id", "created_at"}


class EventRepository:
    """Event store: events with their host, participants and tasks."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, event_id: uuid.UUID, for_update: bool = False) -> Optional[Event]:
        """
        Retrieve event by ID.
        
        Args:
            event_id: Event's UUID
            for_update: Lock the row so capacity checks and inserts for this
                event run one transaction at a time
            
        Returns:
            Event object if found, None otherwise
        """
        q = select(Event).where(Event.id == event_id)
        if for_update:
            q = q.with_for_update().execution_options(populate_existing=True)
        res = await self.session.execute(q)
        return res.scalars().first()

    async def create(self, payload: EventCreate, host: User) -> Event:
        """
        Create a new event hosted by the given user.
        
        Args:
            payload: Event creation data
            host: User creating the event
            
        Returns:
            Created Event object
        """
        ev = Event(**payload.model_dump(), host=host, participants=set(), tasks=[])
        self.session.add(ev)
        await self.session.commit()
        return ev

    async def update(self, event: Event, changes: EventUpdate) -> Event:
        """Apply the fields present in ``changes``; the host is never reassigned."""
        for field, value in changes.model_dump(exclude_unset=True).items():
            if field in _IMMUTABLE_FIELDS:
                continue
            setattr(event, field, value)
        await self.session.commit()
        return event

    async def delete(self, event: Event) -> None:
        await self.session.delete(event)
        await self.session.commit()

    async def find_by_date_between(self, start: date, end: date) -> List[Event]:
        """Events whose date falls within [start, end], earliest first."""
        q = (
            select(Event)
            .where(Event.date >= start, Event.date <= end)
            .order_by(Event.date, Event.time)
        )
        res = await self.session.execute(q)
        return list(res.scalars().all())
