from sqlalchemy import Column, Boolean, DateTime, ForeignKey, Enum, Index, UniqueConstraint, Uuid
import uuid
from sqlalchemy.orm import relationship
from app.db.session import Base, utcnow
import enum

class RSVPStatus(str, enum.Enum):
    ATTENDING = "ATTENDING"
    MAYBE = "MAYBE"
    DECLINED = "DECLINED"

class EventRole(str, enum.Enum):
    PARTICIPANT = "PARTICIPANT"
    ORGANIZER = "ORGANIZER"

class RSVP(Base):
    __tablename__ = "rsvps"
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False)
    event_id = Column(Uuid(as_uuid=True), ForeignKey("events.id", ondelete="CASCADE"), nullable=False)
    status = Column(Enum(RSVPStatus), default=RSVPStatus.ATTENDING, nullable=False)
    event_role = Column(Enum(EventRole), default=EventRole.PARTICIPANT, nullable=False)
    checked_in = Column(Boolean, default=False, nullable=False)
    checked_in_at = Column(DateTime(timezone=True), nullable=True)
    # Client-side default keeps insertion order at microsecond resolution
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    user = relationship("User", lazy="selectin")
    event = relationship("Event", lazy="selectin")
    
    # Unique constraint to prevent duplicate RSVPs
    # Indexes for foreign keys
    __table_args__ = (
        UniqueConstraint('user_id', 'event_id', name='uq_user_event_rsvp'),
        Index('idx_rsvp_user', 'user_id'),
        Index('idx_rsvp_event', 'event_id'),
    )
