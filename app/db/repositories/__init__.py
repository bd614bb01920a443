"""
Repository layer for database operations.

One repository per entity, each wrapping an AsyncSession. Repositories
return ``None`` for missing rows; turning that into a NotFound error is the
service layer's job.
"""
from app.db.repositories.users import UserRepository
from app.db.repositories.events import EventRepository
from app.db.repositories.rsvps import RSVPRepository
from app.db.repositories.tasks import TaskRepository

__all__ = ["UserRepository", "EventRepository", "RSVPRepository", "TaskRepository"]
