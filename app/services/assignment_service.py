"""Territory assignment lifecycle.

A territory is ``Disponível`` until it is assigned, ``Em campo`` while an
assignment with no return date exists, and ``Disponível`` again once that
assignment is closed. Both transitions run inside one transaction and start with
a conditional UPDATE of the territory row, so the store serializes concurrent
calls on the same territory and the affected-row count decides who wins.
"""
import logging

from sqlalchemy import select, update, exists
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import InvalidStateError, NotFoundError, ValidationError
from app.models.assignment import Assignment
from app.models.campaign import Campaign
from app.models.person import Person
from app.models.territory import Territory, TerritoryStatus
from app.schemas.assignment import AssignRequest, ReturnRequest

logger = logging.getLogger(__name__)


async def _set_status(db: AsyncSession, territory_id: int, from_: TerritoryStatus, to: TerritoryStatus) -> bool:
    result = await db.execute(
        update(Territory)
        .where(Territory.id == territory_id, Territory.status == from_)
        .values(status=to)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1


async def assign_territory(db: AsyncSession, data: AssignRequest) -> Assignment:
    try:
        assignment = await _assign(db, data)
    except IntegrityError:
        # Only a second open assignment (uq_designacao_ativa) means "not available"
        if await get_open_assignment(db, data.territorio_id) is None:
            raise
        raise InvalidStateError("O território não está disponível para designação.")
    logger.info("Território %s designado para pessoa %s", data.territorio_id, data.pessoa_id)
    return assignment


async def _assign(db: AsyncSession, data: AssignRequest) -> Assignment:
    async with db.begin():
        if not await _set_status(db, data.territorio_id, TerritoryStatus.available, TerritoryStatus.in_field):
            if await db.get(Territory, data.territorio_id) is None:
                raise NotFoundError("Território não encontrado.")
            raise InvalidStateError("O território não está disponível para designação.")

        if await db.get(Person, data.pessoa_id) is None:
            raise NotFoundError("Pessoa não encontrada.")
        if data.campanha_id is not None and await db.get(Campaign, data.campanha_id) is None:
            raise NotFoundError("Campanha não encontrada.")

        assignment = Assignment(
            territorio_id=data.territorio_id,
            pessoa_id=data.pessoa_id,
            campanha_id=data.campanha_id,
            data_saida=data.data_saida,
        )
        db.add(assignment)
        await db.flush()
    return assignment


async def return_territory(db: AsyncSession, data: ReturnRequest) -> Assignment:
    if not data.territorio_id or not data.data_devolucao:
        raise ValidationError("ID do território e data de devolução são obrigatórios.")

    async with db.begin():
        released = await _set_status(db, data.territorio_id, TerritoryStatus.in_field, TerritoryStatus.available)
        assignment = await get_open_assignment(db, data.territorio_id) if released else None
        if assignment is None:
            raise NotFoundError("Não foi encontrada uma designação ativa para este território.")

        assignment.data_devolucao = data.data_devolucao
        await db.flush()

    logger.info("Território %s devolvido em %s", data.territorio_id, data.data_devolucao)
    return assignment


async def get_open_assignment(db: AsyncSession, territory_id: int) -> Assignment | None:
    return await db.scalar(
        select(Assignment).where(
            Assignment.territorio_id == territory_id,
            Assignment.data_devolucao.is_(None),
        )
    )


def open_assignment_exists(**criteria):
    """EXISTS clause for an open assignment matching the given column values."""
    clause = exists().where(Assignment.data_devolucao.is_(None))
    for column, value in criteria.items():
        clause = clause.where(getattr(Assignment, column) == value)
    return clause


async def check_status_consistency(db: AsyncSession) -> list[int]:
    """Ids of territories whose cached status disagrees with their assignment rows."""
    has_open = open_assignment_exists().where(Assignment.territorio_id == Territory.id)
    rows = await db.execute(
        select(Territory.id)
        .where(
            ((Territory.status == TerritoryStatus.in_field) & ~has_open)
            | ((Territory.status == TerritoryStatus.available) & has_open)
        )
        .order_by(Territory.id)
    )
    inconsistent = list(rows.scalars().all())
    if inconsistent:
        logger.warning("Status inconsistente nos territórios: %s", inconsistent)
    return inconsistent
