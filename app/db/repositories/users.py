from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from app.db.models.user import User
from app.schemas import UserCreate
from typing import Optional
import uuid


class UserRepository:
    """Identity store: user records referenced by events and RSVPs."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, user_id: uuid.UUID, for_update: bool = False) -> Optional[User]:
        """
        Retrieve user by ID.
        
        Args:
            user_id: User's UUID
            for_update: Lock the row until the surrounding transaction ends
            
        Returns:
            User object if found, None otherwise
        """
        q = select(User).where(User.id == user_id)
        if for_update:
            q = q.with_for_update().execution_options(populate_existing=True)
        res = await self.session.execute(q)
        return res.scalars().first()

    async def get_by_email(self, email: str) -> Optional[User]:
        q = select(User).where(User.email == email)
        res = await self.session.execute(q)
        return res.scalars().first()

    async def create(self, user_in: UserCreate) -> User:
        user = User(first_name=user_in.first_name, last_name=user_in.last_name, email=user_in.email)
        self.session.add(user)
        await self.session.commit()
        return user
