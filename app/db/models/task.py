from sqlalchemy import Column, String, Text, Date, DateTime, ForeignKey, Enum, Index, Uuid
import uuid
from sqlalchemy.orm import relationship
from app.db.session import Base, utcnow
import enum

class TaskStatus(str, enum.Enum):
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"

class Task(Base):
    __tablename__ = "tasks"
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    event_id = Column(Uuid(as_uuid=True), ForeignKey("events.id", ondelete="CASCADE"), nullable=False)
    assignee_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(Enum(TaskStatus), default=TaskStatus.PENDING, nullable=False)
    due_date = Column(Date, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    event = relationship("Event", back_populates="tasks", lazy="selectin")
    assignee = relationship("User", lazy="selectin")

    __table_args__ = (
        Index('idx_task_event', 'event_id'),
        Index('idx_task_assignee', 'assignee_id'),
    )
