from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from evenup.db.session import get_db
from evenup.core.dependencies import get_current_user
from evenup.schemas.expense import ExpenseOut
from evenup.services.expense_services import mark_split_paid

router = APIRouter()

@router.post("/{expense_id}/mark-paid", response_model=ExpenseOut)
async def mark_paid(expense_id: int, db: AsyncSession = Depends(get_db), user = Depends(get_current_user)):
    return await mark_split_paid(db, expense_id, user.id)
