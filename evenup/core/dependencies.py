from fastapi import Depends, Header, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from evenup.db.session import get_db
from evenup.models.group import Group
from evenup.models.group_member import GroupMember
from evenup.services.user_queries import get_user_by_id

async def get_current_user(
    x_user_id: int | None = Header(default=None),
    db: AsyncSession = Depends(get_db),
):
    # identity is resolved upstream, the gateway forwards the user id
    if x_user_id is None:
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")

    user = await get_user_by_id(db, x_user_id)

    if user is None:
        raise HTTPException(status_code=401, detail="User not found")

    return user

async def get_group_or_404(db: AsyncSession, group_id: int) -> Group:
    q = select(Group).where(Group.id == group_id).execution_options(populate_existing=True)
    res = await db.execute(q)
    group = res.scalar_one_or_none()

    if not group:
        raise HTTPException(404, "Group does not exist")

    return group

async def check_group_membership(db: AsyncSession, group_id: int, user_id: int):
    await get_group_or_404(db, group_id)

    q_member = select(GroupMember).where(
        GroupMember.group_id == group_id,
        GroupMember.user_id == user_id
    )

    res_member = await db.execute(q_member)
    member = res_member.scalar_one_or_none()

    if not member:
        raise HTTPException(403, "You are not a member of this group")

    return member

async def fetch_member_ids(db: AsyncSession, group_id: int) -> set[int]:
    res = await db.execute(
        select(GroupMember.user_id).where(GroupMember.group_id == group_id)
    )
    return {row[0] for row in res.all()}
