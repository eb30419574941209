import logging
from decimal import Decimal
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from fastapi import HTTPException
from evenup.core.dependencies import check_group_membership, fetch_member_ids
from evenup.core.utils import EPSILON
from evenup.models.expense import Expense
from evenup.models.expense_split import ExpenseSplit
from evenup.schemas.expense import ExpenseCreate

logger = logging.getLogger(__name__)

async def create_expense(db: AsyncSession, data: ExpenseCreate, paid_by: int, group_id: int):
    await check_group_membership(db, group_id, paid_by)

    # -----------------------------------
    # 1. Validate split users
    # -----------------------------------
    user_ids = [s.user_id for s in data.splits]

    if not user_ids:
        raise HTTPException(400, "An expense needs at least one split")

    if len(user_ids) != len(set(user_ids)):
        raise HTTPException(400, "Duplicate users found in splits")

    # -----------------------------------
    # 2. Validate amounts
    # -----------------------------------
    total_split = sum((s.amount for s in data.splits), Decimal("0"))
    if abs(total_split - data.amount) >= EPSILON:
        raise HTTPException(
            400,
            f"Split total ({total_split}) must equal expense amount ({data.amount})"
        )

    # -----------------------------------
    # 3. Validate ALL split users are group members
    # -----------------------------------
    member_ids = await fetch_member_ids(db, group_id)

    if not set(user_ids) <= member_ids:
        raise HTTPException(
            400,
            "One or more users in splits are not members of the group"
        )

    # -----------------------------------
    # 4. Create expense and splits
    # -----------------------------------
    expense = Expense(
        group_id=group_id,
        paid_by=paid_by,
        title=data.title,
        amount=data.amount,
        currency=data.currency,
        category=data.category,
    )

    db.add(expense)
    await db.flush()  # generates expense.id

    db.add_all([
        ExpenseSplit(
            expense_id=expense.id,
            user_id=s.user_id,
            amount=s.amount,
            # the payer's own share is never owed to anyone
            paid=s.user_id == paid_by
        )
        for s in data.splits
    ])

    await db.commit()

    logger.info("expense %s created in group %s by user %s", expense.id, group_id, paid_by)
    return await get_expense_or_404(db, expense.id)

async def get_expense_or_404(db: AsyncSession, expense_id: int) -> Expense:
    # populate_existing reloads the splits collection after a write
    q = select(Expense).where(Expense.id == expense_id).execution_options(populate_existing=True)
    res = await db.execute(q)
    expense = res.scalar_one_or_none()

    if not expense:
        raise HTTPException(404, "Expense not found")

    return expense

async def get_expenses_by_group(db: AsyncSession, group_id: int, user_id: int):
    await check_group_membership(db, group_id, user_id)

    q = (
        select(Expense)
        .where(Expense.group_id == group_id)
        .order_by(Expense.created_at.desc(), Expense.id.desc())
    )

    res = await db.execute(q)
    return res.scalars().all()

async def mark_split_paid(db: AsyncSession, expense_id: int, user_id: int):
    expense = await get_expense_or_404(db, expense_id)

    split = next((s for s in expense.splits if s.user_id == user_id), None)

    if not split:
        raise HTTPException(404, "Split not found")

    split.paid = True
    await db.commit()

    logger.info("user %s marked their split of expense %s as paid", user_id, expense_id)
    return await get_expense_or_404(db, expense_id)
