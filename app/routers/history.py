from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.database import get_db
from app.schemas.territory import TerritoryHistory
import app.services.territory_service as svc

router = APIRouter(tags=["historico"])


@router.get("/historico-completo", response_model=list[TerritoryHistory])
async def full_history(db: AsyncSession = Depends(get_db)):
    return await svc.get_full_history(db)
