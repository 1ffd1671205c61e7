import logging

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import ConflictError, NotFoundError, ValidationError
from app.models.group import Group
from app.models.territory import Territory
from app.schemas.group import GroupCreate, GroupUpdate
from app.services.territory_service import numero_order

logger = logging.getLogger(__name__)


async def get_groups(db: AsyncSession) -> list[dict]:
    groups = (await db.scalars(select(Group).order_by(Group.nome))).all()
    rows = (
        await db.execute(
            select(Territory.grupo_id, Territory.id)
            .where(Territory.grupo_id.is_not(None))
            .order_by(numero_order())
        )
    ).all()
    members: dict[int, list[int]] = {}
    for grupo_id, territory_id in rows:
        members.setdefault(grupo_id, []).append(territory_id)
    return [{"id": g.id, "nome": g.nome, "territorio_ids": members.get(g.id, [])} for g in groups]


async def get_group(db: AsyncSession, group_id: int) -> Group:
    group = await db.get(Group, group_id)
    if not group:
        raise NotFoundError("Grupo não encontrado.")
    return group


async def _ensure_unique_name(db: AsyncSession, nome: str, exclude_id: int | None = None) -> None:
    query = select(Group.id).where(Group.nome == nome)
    if exclude_id is not None:
        query = query.where(Group.id != exclude_id)
    if await db.scalar(query):
        raise ConflictError("Já existe um grupo com este nome.")


async def create_group(db: AsyncSession, data: GroupCreate) -> Group:
    nome = data.nome.strip()
    if not nome:
        raise ValidationError("O nome do grupo não pode ser vazio.")
    await _ensure_unique_name(db, nome)
    group = Group(nome=nome)
    db.add(group)
    await db.commit()
    await db.refresh(group)
    return group


async def update_group(db: AsyncSession, group_id: int, data: GroupUpdate) -> Group:
    nome = (data.nome or "").strip()
    if not nome:
        raise ValidationError("O nome do grupo não pode ser vazio.")
    group = await get_group(db, group_id)
    await _ensure_unique_name(db, nome, exclude_id=group_id)
    group.nome = nome
    await db.commit()
    await db.refresh(group)
    return group


async def delete_group(db: AsyncSession, group_id: int) -> None:
    async with db.begin():
        group = await get_group(db, group_id)
        await db.execute(
            update(Territory)
            .where(Territory.grupo_id == group_id)
            .values(grupo_id=None)
            .execution_options(synchronize_session=False)
        )
        await db.delete(group)
    logger.info("Grupo %s excluído", group_id)


async def set_group_territories(db: AsyncSession, group_id: int, territory_ids: list[int]) -> None:
    """Replaces the group's territories in one transaction."""
    async with db.begin():
        await get_group(db, group_id)
        await db.execute(
            update(Territory)
            .where(Territory.grupo_id == group_id)
            .values(grupo_id=None)
            .execution_options(synchronize_session=False)
        )
        if territory_ids:
            await db.execute(
                update(Territory)
                .where(Territory.id.in_(territory_ids))
                .values(grupo_id=group_id)
                .execution_options(synchronize_session=False)
            )
