from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.database import get_db
from app.schemas.group import GroupCreate, GroupUpdate, GroupResponse, GroupWithTerritories, GroupTerritoriesRequest
import app.services.group_service as svc

router = APIRouter(prefix="/grupos", tags=["grupos"])


@router.get("", response_model=list[GroupWithTerritories])
async def list_groups(db: AsyncSession = Depends(get_db)):
    return await svc.get_groups(db)


@router.post("", response_model=GroupResponse, status_code=201)
async def create_group(data: GroupCreate, db: AsyncSession = Depends(get_db)):
    return await svc.create_group(db, data)


@router.put("/{group_id}", response_model=GroupResponse)
async def update_group(group_id: int, data: GroupUpdate, db: AsyncSession = Depends(get_db)):
    return await svc.update_group(db, group_id, data)


@router.delete("/{group_id}")
async def delete_group(group_id: int, db: AsyncSession = Depends(get_db)):
    await svc.delete_group(db, group_id)
    return {"message": "Grupo deletado com sucesso."}


@router.put("/{group_id}/associar-territorios")
async def set_group_territories(group_id: int, data: GroupTerritoriesRequest, db: AsyncSession = Depends(get_db)):
    await svc.set_group_territories(db, group_id, data.territorio_ids)
    return {"message": "Grupo atualizado com sucesso."}
