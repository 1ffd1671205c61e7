from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import ConflictError, NotFoundError
from app.models.assignment import Assignment
from app.models.person import Person
from app.schemas.person import PersonCreate, PersonUpdate
from app.services.assignment_service import open_assignment_exists


async def get_people(db: AsyncSession) -> list[Person]:
    return list((await db.scalars(select(Person).order_by(Person.nome))).all())


async def get_person(db: AsyncSession, person_id: int) -> Person:
    person = await db.get(Person, person_id)
    if not person:
        raise NotFoundError("Pessoa não encontrada.")
    return person


async def create_person(db: AsyncSession, data: PersonCreate) -> Person:
    person = Person(**data.model_dump())
    db.add(person)
    await db.commit()
    await db.refresh(person)
    return person


async def update_person(db: AsyncSession, person_id: int, data: PersonUpdate) -> Person:
    person = await get_person(db, person_id)
    for field, value in data.model_dump().items():
        setattr(person, field, value)
    await db.commit()
    await db.refresh(person)
    return person


async def delete_person(db: AsyncSession, person_id: int) -> Person:
    async with db.begin():
        if await db.scalar(select(open_assignment_exists(pessoa_id=person_id))):
            raise ConflictError("Não é possível excluir. A pessoa está com um território em campo.")
        person = await get_person(db, person_id)
        # Closed history stays; only the reference to the person goes away
        await db.execute(
            update(Assignment)
            .where(Assignment.pessoa_id == person_id)
            .values(pessoa_id=None)
            .execution_options(synchronize_session=False)
        )
        await db.delete(person)
    return person
