from sqlalchemy.ext.asyncio import AsyncSession
from app.db.models.event import Event
from app.db.models.rsvp import RSVP
from app.db.models.user import User
from app.db.repositories import EventRepository, UserRepository, RSVPRepository
from app.core.exceptions import EventNotFoundError, UserNotFoundError, RSVPNotFoundError
from typing import Tuple
import uuid


class EntityResolver:
    """
    Single place where ids become entities or a NotFound error.
    
    Resolution always runs event first, then user, then RSVP, so callers
    report whichever lookup fails first and take row locks in a fixed order.
    """

    def __init__(self, session: AsyncSession):
        self.events = EventRepository(session)
        self.users = UserRepository(session)
        self.rsvps = RSVPRepository(session)

    async def event(self, event_id: uuid.UUID, lock: bool = False) -> Event:
        event = await self.events.get(event_id, for_update=lock)
        if event is None:
            raise EventNotFoundError()
        return event

    async def user(self, user_id: uuid.UUID, lock: bool = False) -> User:
        user = await self.users.get(user_id, for_update=lock)
        if user is None:
            raise UserNotFoundError()
        return user

    async def event_and_user(self, event_id: uuid.UUID, user_id: uuid.UUID, lock: bool = False) -> Tuple[Event, User]:
        event = await self.event(event_id, lock=lock)
        user = await self.user(user_id, lock=lock)
        return event, user

    async def rsvp(self, event_id: uuid.UUID, user_id: uuid.UUID, lock: bool = False) -> Tuple[Event, User, RSVP]:
        event, user = await self.event_and_user(event_id, user_id, lock=lock)
        rsvp = await self.rsvps.find_by_user_and_event(user.id, event.id)
        if rsvp is None:
            raise RSVPNotFoundError()
        return event, user, rsvp
