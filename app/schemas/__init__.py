from pydantic import BaseModel, EmailStr, Field
from pydantic.alias_generators import to_camel
from typing import Generic, List, Optional, TypeVar
from uuid import UUID
from datetime import date as Date, datetime, time as Time
from app.db.models.rsvp import RSVPStatus, EventRole

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base for API payloads: camelCase on the wire, snake_case in Python."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class APIResponse(BaseModel, Generic[T]):
    """Envelope shared by every RSVP endpoint."""
    success: bool = True
    data: List[T] = []
    message: Optional[str] = None


class UserCreate(BaseModel):
    first_name: str
    last_name: str
    email: EmailStr


class UserRef(CamelModel):
    id: UUID
    first_name: str
    last_name: str
    email: EmailStr


class EventCreate(BaseModel):
    name: str
    description: Optional[str] = None
    location: Optional[str] = None
    date: Date
    time: Optional[Time] = None
    duration_minutes: int = Field(default=60, gt=0)
    capacity: Optional[int] = Field(default=None, ge=0)
    budget: int = 0


class EventUpdate(BaseModel):
    """Partial event update. The host is deliberately absent."""
    name: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    date: Optional[Date] = None
    time: Optional[Time] = None
    duration_minutes: Optional[int] = Field(default=None, gt=0)
    capacity: Optional[int] = Field(default=None, ge=0)
    budget: Optional[int] = None


class EventRef(CamelModel):
    id: UUID
    name: str
    date: Date
    time: Optional[Time] = None
    location: Optional[str] = None
    capacity: Optional[int] = None


class TaskCreate(BaseModel):
    name: str
    description: Optional[str] = None
    status: str = "PENDING"
    due_date: Optional[Date] = None


class RSVPCreate(CamelModel):
    # Plain strings so invalid values reach the service and become a 400
    status: str = "ATTENDING"
    event_role: str = "PARTICIPANT"


class RSVPUpdate(CamelModel):
    status: Optional[str] = None
    event_role: Optional[str] = None


class RSVPOut(CamelModel):
    id: UUID
    status: RSVPStatus
    event_role: EventRole
    checked_in: bool
    checked_in_at: Optional[datetime] = None
    event: EventRef
    user: UserRef


class HealthOut(BaseModel):
    status: str
    database: str
