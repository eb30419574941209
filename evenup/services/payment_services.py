import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from fastapi import HTTPException
from evenup.core.dependencies import check_group_membership, fetch_member_ids
from evenup.models.payment import Payment
from evenup.schemas.payment import PaymentCreate
from evenup.services.user_queries import get_user_by_id

logger = logging.getLogger(__name__)

async def create_payment(db: AsyncSession, data: PaymentCreate, from_user: int):
    if data.to_user == from_user:
        raise HTTPException(400, "You cannot pay yourself")

    if not await get_user_by_id(db, data.to_user):
        raise HTTPException(404, "Receiver does not exist")

    # both sides must be in the group the payment settles
    if data.group_id is not None:
        await check_group_membership(db, data.group_id, from_user)

        if data.to_user not in await fetch_member_ids(db, data.group_id):
            raise HTTPException(400, "Receiver is not in this group")

    payment = Payment(
        from_user=from_user,
        to_user=data.to_user,
        group_id=data.group_id,
        amount=data.amount,
        currency=data.currency,
        payment_method=data.payment_method,
        notes=data.notes,
        status="pending"
    )

    db.add(payment)
    await db.commit()
    await db.refresh(payment)

    logger.info("payment %s recorded from user %s to user %s", payment.id, from_user, data.to_user)
    return payment

async def get_payment_for_user(db: AsyncSession, payment_id: int, user_id: int) -> Payment:
    q = select(Payment).where(
        Payment.id == payment_id,
        (Payment.from_user == user_id) | (Payment.to_user == user_id)
    )
    payment = await db.scalar(q)

    if not payment:
        raise HTTPException(404, "Payment not found")

    return payment

async def update_payment_status(db: AsyncSession, payment_id: int, status: str, user_id: int):
    payment = await get_payment_for_user(db, payment_id, user_id)

    # Only the recipient can confirm money arrived
    if status == "completed" and payment.to_user != user_id:
        raise HTTPException(403, "Only the recipient can mark a payment as completed")

    # Only the sender can mark a payment as failed
    if status == "failed" and payment.from_user != user_id:
        raise HTTPException(403, "Only the sender can mark a payment as failed")

    payment.status = status
    await db.commit()
    await db.refresh(payment)

    logger.info("payment %s is now %s", payment_id, status)
    return payment

async def confirm_payment(db: AsyncSession, payment_id: int, user_id: int):
    return await update_payment_status(db, payment_id, "completed", user_id)

async def get_my_payments(db: AsyncSession, user_id: int, limit: int = 50):
    q = (
        select(Payment)
        .where((Payment.from_user == user_id) | (Payment.to_user == user_id))
        .order_by(Payment.created_at.desc(), Payment.id.desc())
        .limit(limit)
    )

    res = await db.execute(q)
    return res.scalars().all()

async def get_group_payments(db: AsyncSession, group_id: int, user_id: int):
    await check_group_membership(db, group_id, user_id)

    q = (
        select(Payment)
        .where(Payment.group_id == group_id)
        .order_by(Payment.created_at.desc(), Payment.id.desc())
    )

    res = await db.execute(q)
    return res.scalars().all()
