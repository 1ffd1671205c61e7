from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession
from app.database import get_db
import app.services.assignment_service as assignment_svc

router = APIRouter(tags=["health"])


@router.get("/")
async def root():
    return {"message": "API do Gerenciador de Territórios está no ar!"}


@router.get("/health")
async def health(db: AsyncSession = Depends(get_db)):
    await db.execute(text("SELECT 1"))
    return {"status": "ok"}


@router.get("/health/consistencia", response_model=list[int])
async def status_consistency(db: AsyncSession = Depends(get_db)):
    """Territories whose cached status disagrees with their assignment rows."""
    return await assignment_svc.check_status_consistency(db)
