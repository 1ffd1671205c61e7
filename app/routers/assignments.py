from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.database import get_db
from app.schemas.assignment import AssignRequest, ReturnRequest, AssignmentResponse
import app.services.assignment_service as svc

router = APIRouter(prefix="/designacoes", tags=["designacoes"])


@router.post("", response_model=AssignmentResponse, status_code=201)
async def assign_territory(data: AssignRequest, db: AsyncSession = Depends(get_db)):
    return await svc.assign_territory(db, data)


@router.put("/devolver", response_model=AssignmentResponse)
async def return_territory(data: ReturnRequest, db: AsyncSession = Depends(get_db)):
    return await svc.return_territory(db, data)
