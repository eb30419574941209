from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession
from evenup.services.system_services import check_db_service, ledger_counts, system_health
from evenup.db.session import get_db

router = APIRouter()

@router.get("/health")
async def health():
    return await system_health()

@router.get("/health/db")
async def db_health():
    status = await check_db_service()
    return JSONResponse(status, status_code=200 if status["db"] else 503)

@router.get("/ledger-counts")
async def counts(db: AsyncSession = Depends(get_db)):
    return await ledger_counts(db)
