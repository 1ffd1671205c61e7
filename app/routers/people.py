from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.database import get_db
from app.schemas.person import PersonCreate, PersonUpdate, PersonResponse, PersonDeleted
import app.services.person_service as svc

router = APIRouter(prefix="/pessoas", tags=["pessoas"])


@router.get("", response_model=list[PersonResponse])
async def list_people(db: AsyncSession = Depends(get_db)):
    return await svc.get_people(db)


@router.post("", response_model=PersonResponse, status_code=201)
async def create_person(data: PersonCreate, db: AsyncSession = Depends(get_db)):
    return await svc.create_person(db, data)


@router.put("/{person_id}", response_model=PersonResponse)
async def update_person(person_id: int, data: PersonUpdate, db: AsyncSession = Depends(get_db)):
    return await svc.update_person(db, person_id, data)


@router.delete("/{person_id}", response_model=PersonDeleted)
async def delete_person(person_id: int, db: AsyncSession = Depends(get_db)):
    person = await svc.delete_person(db, person_id)
    return {"message": "Pessoa deletada com sucesso.", "data": person}
