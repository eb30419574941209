from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from fastapi import HTTPException
from evenup.core.dependencies import get_group_or_404, check_group_membership
from evenup.models.group import Group
from evenup.models.group_member import GroupMember
from evenup.services.user_queries import get_user_by_id

async def create_group(db: AsyncSession, name: str, creator_id: int):
    group = Group(name=name, created_by=creator_id)
    db.add(group)
    await db.flush()

    member = GroupMember(group_id=group.id, user_id=creator_id, role="admin")
    db.add(member)

    await db.commit()
    return await get_group_or_404(db, group.id)

async def add_member(db: AsyncSession, group_id: int, user_id: int, role: str, added_by: int):
    await check_group_membership(db, group_id, added_by)

    if not await get_user_by_id(db, user_id):
        raise HTTPException(404, "User does not exist")

    q = select(GroupMember).where(
        GroupMember.group_id == group_id,
        GroupMember.user_id == user_id
    )
    if await db.scalar(q):
        raise HTTPException(400, "User is already a member of this group")

    member = GroupMember(group_id=group_id, user_id=user_id, role=role)
    db.add(member)
    await db.commit()
    await db.refresh(member)
    return member

async def list_group_for_user(db: AsyncSession, user_id: int):
    q = (
        select(Group)
        .join(GroupMember)
        .where(GroupMember.user_id == user_id)
        .order_by(Group.id)
    )
    result = await db.execute(q)
    return result.scalars().all()
