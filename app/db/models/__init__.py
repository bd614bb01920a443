"""Database models package."""
from app.db.models.user import User
from app.db.models.event import Event, event_participants
from app.db.models.rsvp import RSVP, RSVPStatus, EventRole
from app.db.models.task import Task, TaskStatus

__all__ = ["User", "Event", "event_participants", "RSVP", "RSVPStatus", "EventRole", "Task", "TaskStatus"]
