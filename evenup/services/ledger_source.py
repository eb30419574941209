"""
Read side of the ledger: loads expense, payment and group snapshots and
converts the rows into the strict models the balance engine consumes.
"""
import logging
from typing import List

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from evenup.core.config import settings
from evenup.models.expense import Expense
from evenup.models.expense_split import ExpenseSplit
from evenup.models.group import Group
from evenup.models.group_member import GroupMember
from evenup.models.payment import Payment
from evenup.schemas import ledger

logger = logging.getLogger(__name__)

HISTORY_LIMIT = settings.HISTORY_LIMIT


def to_ledger_expense(row: Expense) -> ledger.Expense:
    return ledger.Expense(
        id=row.id,
        group_id=row.group_id,
        payer_id=row.paid_by,
        amount=row.amount,
        currency=row.currency,
        category=row.category,
        title=row.title,
        splits=[
            ledger.Split(user_id=s.user_id, amount=s.amount, paid=s.paid)
            for s in row.splits
        ],
    )


def to_ledger_payment(row: Payment) -> ledger.Payment:
    return ledger.Payment(
        id=row.id,
        from_user_id=row.from_user,
        to_user_id=row.to_user,
        group_id=row.group_id,
        amount=row.amount,
        currency=row.currency,
        status=row.status,
    )


def to_ledger_group(row: Group) -> ledger.Group:
    return ledger.Group(
        id=row.id,
        name=row.name,
        members=[
            ledger.GroupMember(user_id=m.user_id, role=m.role)
            for m in row.members
        ],
    )


async def list_expenses_for_user(
    db: AsyncSession,
    user_id: int,
    limit: int | None = None,
) -> List[ledger.Expense]:
    """
    Most recent expenses the user paid for or has a split in, across every
    group they belong to. The cap applies after that filter, so expenses
    between other members never push the user's own out of the window.
    """
    groups_q = select(GroupMember.group_id).where(GroupMember.user_id == user_id)
    has_split = exists().where(
        ExpenseSplit.expense_id == Expense.id,
        ExpenseSplit.user_id == user_id,
    )

    q = (
        select(Expense)
        .where(
            Expense.group_id.in_(groups_q),
            (Expense.paid_by == user_id) | has_split,
        )
        .order_by(Expense.created_at.desc(), Expense.id.desc())
        .limit(limit or HISTORY_LIMIT)
    )

    res = await db.execute(q)
    rows = res.scalars().all()

    logger.debug("loaded %d expenses for user %s", len(rows), user_id)
    return [to_ledger_expense(r) for r in rows]


async def list_completed_payments_for_user(
    db: AsyncSession,
    user_id: int,
    limit: int | None = None,
) -> List[ledger.Payment]:
    """
    Most recent completed payments sent or received by the user, in any group
    or none.
    """
    q = (
        select(Payment)
        .where(
            (Payment.from_user == user_id) | (Payment.to_user == user_id),
            Payment.status == "completed",
            Payment.from_user != Payment.to_user,
        )
        .order_by(Payment.created_at.desc(), Payment.id.desc())
        .limit(limit or HISTORY_LIMIT)
    )

    res = await db.execute(q)
    rows = res.scalars().all()

    logger.debug("loaded %d completed payments for user %s", len(rows), user_id)
    return [to_ledger_payment(r) for r in rows]


async def get_group(db: AsyncSession, group_id: int) -> ledger.Group | None:
    res = await db.execute(select(Group).where(Group.id == group_id))
    row = res.scalar_one_or_none()
    return to_ledger_group(row) if row else None


async def list_group_expenses(db: AsyncSession, group_id: int) -> List[ledger.Expense]:
    q = (
        select(Expense)
        .where(Expense.group_id == group_id)
        .order_by(Expense.created_at.desc(), Expense.id.desc())
    )

    res = await db.execute(q)
    return [to_ledger_expense(r) for r in res.scalars().all()]


async def list_group_completed_payments(db: AsyncSession, group_id: int) -> List[ledger.Payment]:
    q = (
        select(Payment)
        .where(
            Payment.group_id == group_id,
            Payment.status == "completed",
            Payment.from_user != Payment.to_user,
        )
        .order_by(Payment.created_at.desc(), Payment.id.desc())
    )

    res = await db.execute(q)
    return [to_ledger_payment(r) for r in res.scalars().all()]
