from contextlib import asynccontextmanager
from fastapi import FastAPI
from evenup.core.db_check import wait_for_db, create_tables
from evenup.core.log_config import configure_logging
from evenup.api.v1.routes.system import router as system_router
from evenup.api.v1.routes.user import router as user_router
from evenup.api.v1.routes.group import router as group_router
from evenup.api.v1.routes.expense import router as expense_router
from evenup.api.v1.routes.payment import router as payment_router

configure_logging()

@asynccontextmanager
async def lifespan(app: FastAPI):
    await wait_for_db()
    await create_tables()
    yield

app = FastAPI(title="EvenUp Backend", lifespan=lifespan)

@app.get("/")
async def root():
    return {"message": "EvenUp Backend is live"}

app.include_router(system_router, prefix="/api/v1/system")
app.include_router(user_router, prefix="/api/v1/users")
app.include_router(group_router, prefix="/api/v1/groups")
app.include_router(expense_router, prefix="/api/v1/expenses")
app.include_router(payment_router, prefix="/api/v1/payments")
