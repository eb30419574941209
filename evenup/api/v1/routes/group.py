from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from evenup.db.session import get_db
from evenup.core.dependencies import get_current_user
from evenup.schemas.balances import GroupBalanceOut
from evenup.schemas.expense import ExpenseCreate, ExpenseOut
from evenup.schemas.group import GroupCreate, GroupMemberAdd, GroupMemberOut, GroupOut
from evenup.schemas.ledger import SettlementTransaction
from evenup.schemas.payment import PaymentOut
from evenup.services.balance_services import get_group_balances, get_group_settlements
from evenup.services.expense_services import create_expense, get_expenses_by_group
from evenup.services.group_services import create_group, add_member, list_group_for_user
from evenup.services.payment_services import get_group_payments

router = APIRouter()

@router.post("/", response_model=GroupOut, status_code=201)
async def create_new_group(
    data: GroupCreate,
    db: AsyncSession = Depends(get_db),
    user = Depends(get_current_user)
):
    return await create_group(db, data.name, user.id)

@router.get("/my-groups", response_model=list[GroupOut])
async def my_groups(db: AsyncSession = Depends(get_db), user = Depends(get_current_user)):
    return await list_group_for_user(db, user.id)

@router.post("/{group_id}/members", response_model=GroupMemberOut, status_code=201)
async def add_user_to_group(
    group_id: int,
    data: GroupMemberAdd,
    db: AsyncSession = Depends(get_db),
    user = Depends(get_current_user)
):
    return await add_member(db, group_id, data.user_id, data.role, added_by=user.id)

@router.post("/{group_id}/expenses", response_model=ExpenseOut, status_code=201)
async def add_expense(
    group_id: int,
    data: ExpenseCreate,
    db: AsyncSession = Depends(get_db),
    user = Depends(get_current_user)
):
    return await create_expense(db, data, user.id, group_id)

@router.get("/{group_id}/expenses", response_model=list[ExpenseOut])
async def group_expenses(group_id: int, db: AsyncSession = Depends(get_db), user = Depends(get_current_user)):
    return await get_expenses_by_group(db, group_id, user.id)

@router.get("/{group_id}/payments", response_model=list[PaymentOut])
async def group_payments(group_id: int, db: AsyncSession = Depends(get_db), user = Depends(get_current_user)):
    return await get_group_payments(db, group_id, user.id)

@router.get("/{group_id}/balances", response_model=GroupBalanceOut)
async def group_balances(group_id: int, db: AsyncSession = Depends(get_db), user = Depends(get_current_user)):
    return await get_group_balances(db, group_id, user.id)

@router.get("/{group_id}/settlements", response_model=list[SettlementTransaction])
async def group_settlements(group_id: int, db: AsyncSession = Depends(get_db), user = Depends(get_current_user)):
    return await get_group_settlements(db, group_id, user.id)
