import logging
from sqlalchemy.ext.asyncio import AsyncSession
from evenup.core.balances import compute_user_balances, net_balances
from evenup.core.dependencies import check_group_membership
from evenup.core.settlements import apply_settlements, compute_group_settlements
from evenup.core.utils import ZERO, is_settled
from evenup.schemas.balances import GroupBalanceOut
from evenup.schemas.ledger import BalanceSummary, MemberBalance
from evenup.services import ledger_source

logger = logging.getLogger(__name__)

async def get_user_balances(db: AsyncSession, user_id: int) -> BalanceSummary:
    """
    Global view: every group the user is in plus direct payments.
    """
    expenses = await ledger_source.list_expenses_for_user(db, user_id)
    payments = await ledger_source.list_completed_payments_for_user(db, user_id)

    return compute_user_balances(user_id, expenses, payments)

async def get_group_member_balances(db: AsyncSession, group_id: int):
    group = await ledger_source.get_group(db, group_id)
    expenses = await ledger_source.list_group_expenses(db, group_id)
    payments = await ledger_source.list_group_completed_payments(db, group_id)

    net = net_balances(expenses, payments, group.member_ids)
    members = [MemberBalance(id=uid, balance=amt) for uid, amt in sorted(net.items())]

    return members, expenses, payments

async def get_group_balances(db: AsyncSession, group_id: int, user_id: int) -> GroupBalanceOut:
    await check_group_membership(db, group_id, user_id)

    members, expenses, payments = await get_group_member_balances(db, group_id)

    settlements = compute_group_settlements(members)
    me = compute_user_balances(user_id, expenses, payments)

    residual = apply_settlements(members, settlements)
    unresolved = sum((abs(r) for r in residual.values()), ZERO)
    if not is_settled(unresolved):
        logger.warning("group %s balances drift by %s", group_id, unresolved)

    return GroupBalanceOut(
        group_id=group_id,
        members=members,
        me=me,
        settlements=settlements,
        unresolved=unresolved,
    )

async def get_group_settlements(db: AsyncSession, group_id: int, user_id: int):
    await check_group_membership(db, group_id, user_id)

    members, _, _ = await get_group_member_balances(db, group_id)
    return compute_group_settlements(members)
