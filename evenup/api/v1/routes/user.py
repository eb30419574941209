from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from evenup.db.session import get_db
from evenup.core.dependencies import get_current_user
from evenup.schemas.ledger import BalanceSummary
from evenup.schemas.user import UserCreate, UserOut
from evenup.services.balance_services import get_user_balances
from evenup.services.user_service import create_user

router = APIRouter()

@router.post("/", response_model=UserOut, status_code=201)
async def register_user(data: UserCreate, db: AsyncSession = Depends(get_db)):
    return await create_user(db, data)

@router.get("/me", response_model=UserOut)
async def get_me(user = Depends(get_current_user)):
    return user

@router.get("/me/balances", response_model=BalanceSummary)
async def my_balances(
    db: AsyncSession = Depends(get_db),
    user = Depends(get_current_user),
):
    return await get_user_balances(db, user.id)
