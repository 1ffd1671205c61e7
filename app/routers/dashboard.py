from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from app.database import get_sessionmaker
from app.schemas.dashboard import DashboardStats
import app.services.dashboard_service as svc

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStats)
async def dashboard_stats(sessionmaker: async_sessionmaker[AsyncSession] = Depends(get_sessionmaker)):
    return await svc.get_dashboard_stats(sessionmaker)
