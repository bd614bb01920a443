from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from app.db.models.event import Event
from app.db.models.task import Task, TaskStatus
from app.db.models.user import User
from app.schemas import TaskCreate
from typing import List, Optional
import uuid


class TaskRepository:
    """Tasks are owned by their event and weakly reference an assignee."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, task_id: uuid.UUID) -> Optional[Task]:
        q = select(Task).where(Task.id == task_id)
        res = await self.session.execute(q)
        return res.scalars().first()

    async def find_by_event(self, event_id: uuid.UUID) -> List[Task]:
        q = select(Task).where(Task.event_id == event_id).order_by(Task.due_date, Task.name)
        res = await self.session.execute(q)
        return list(res.scalars().all())

    async def create(self, event: Event, payload: TaskCreate, assignee: Optional[User] = None) -> Task:
        """
        Create a task under an event.
        
        Raises:
            ValueError: If the task status is not a known TaskStatus
        """
        task = Task(
            name=payload.name,
            description=payload.description,
            status=TaskStatus(payload.status.upper()),
            due_date=payload.due_date,
            assignee=assignee,
        )
        event.tasks.append(task)
        await self.session.commit()
        return task

    async def delete(self, task: Task) -> None:
        # delete-orphan cascade removes the row once detached from its event
        task.event.tasks.remove(task)
        await self.session.commit()
