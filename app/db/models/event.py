from sqlalchemy import Column, Integer, String, Text, Date, Time, DateTime, ForeignKey, Table, Uuid, Index, CheckConstraint
import uuid
from sqlalchemy.orm import relationship
from app.db.session import Base, utcnow

# Users attending an event; kept in step with ATTENDING RSVPs
event_participants = Table(
    "event_participants",
    Base.metadata,
    Column("event_id", Uuid(as_uuid=True), ForeignKey("events.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)

class Event(Base):
    __tablename__ = "events"
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    location = Column(String(255), nullable=True)
    date = Column(Date, nullable=False)
    time = Column(Time, nullable=True)
    duration_minutes = Column(Integer, nullable=False, default=60)
    capacity = Column(Integer, nullable=True)
    budget = Column(Integer, nullable=False, default=0)
    host_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    host = relationship("User", lazy="selectin")
    participants = relationship("User", secondary=event_participants, collection_class=set, lazy="selectin")
    tasks = relationship("Task", back_populates="event", cascade="all, delete-orphan", lazy="selectin")
    
    # Indexes for frequently queried fields
    __table_args__ = (
        Index('idx_event_date', 'date'),
        Index('idx_event_host', 'host_id'),
        CheckConstraint("duration_minutes > 0", name="ck_event_duration_positive"),
        CheckConstraint("capacity IS NULL OR capacity >= 0", name="ck_event_capacity_non_negative"),
    )

    def __repr__(self):
        return f"<Event {self.id} {self.name!r} on {self.date}>"
