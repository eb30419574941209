from evenup.db.session import engine
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from evenup.models.user import User
from evenup.models.group import Group
from evenup.models.expense import Expense
from evenup.models.payment import Payment

async def check_db_service():
    try:
        async with engine.connect() as conn:
            await conn.exec_driver_sql("SELECT 1")
        return {"db": True, "message": "Database is connected"}
    except Exception as e:
        return {"db": False, "error": str(e)}

async def system_health():
    return {
        "status": "ok"
    }

async def ledger_counts(db: AsyncSession):
    users = await db.scalar(select(func.count(User.id)))
    groups = await db.scalar(select(func.count(Group.id)))
    expenses = await db.scalar(select(func.count(Expense.id)))
    payments = await db.scalar(select(func.count(Payment.id)))

    return {
        "users": users,
        "groups": groups,
        "expenses": expenses,
        "payments": payments
    }
