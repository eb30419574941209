from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from evenup.db.session import get_db
from evenup.core.dependencies import get_current_user
from evenup.schemas.payment import PaymentCreate, PaymentOut, PaymentStatusUpdate
from evenup.services.payment_services import (
    create_payment,
    confirm_payment,
    update_payment_status,
    get_my_payments,
)

router = APIRouter()

@router.post("/", response_model=PaymentOut, status_code=201)
async def record_payment(data: PaymentCreate, db: AsyncSession = Depends(get_db), user = Depends(get_current_user)):
    return await create_payment(db, data, user.id)

@router.get("/", response_model=list[PaymentOut])
async def my_payments(db: AsyncSession = Depends(get_db), user = Depends(get_current_user)):
    return await get_my_payments(db, user.id)

@router.post("/{payment_id}/confirm", response_model=PaymentOut)
async def confirm(payment_id: int, db: AsyncSession = Depends(get_db), user = Depends(get_current_user)):
    return await confirm_payment(db, payment_id, user.id)

@router.patch("/{payment_id}/status", response_model=PaymentOut)
async def set_status(
    payment_id: int,
    data: PaymentStatusUpdate,
    db: AsyncSession = Depends(get_db),
    user = Depends(get_current_user)
):
    return await update_payment_status(db, payment_id, data.status, user.id)
