from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException
from evenup.models.user import User
from evenup.schemas.user import UserCreate
from evenup.services.user_queries import get_user_by_email

async def create_user(db: AsyncSession, data: UserCreate):
    existing = await get_user_by_email(db, data.email)
    if existing:
        raise HTTPException(400, "User already exists")

    user = User(email=data.email, name=data.name)

    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user
