import re
from collections import OrderedDict

from sqlalchemy import Integer, cast, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from app.errors import ConflictError, NotFoundError, ValidationError
from app.models.assignment import Assignment
from app.models.campaign import Campaign
from app.models.group import Group
from app.models.person import Person
from app.models.territory import Territory, TerritoryStatus
from app.schemas.territory import NUMERO_PATTERN, TerritoryUpdate
from app.services.assignment_service import open_assignment_exists

SORT_NUMERO_ASC = "numero_asc"
SORT_DEVOLUCAO_DESC = "devolucao_desc"
SORT_DESCRICAO_ASC = "descricao_asc"


def numero_order():
    return cast(Territory.numero, Integer)


def last_return_column():
    return (
        select(func.max(Assignment.data_devolucao))
        .where(Assignment.territorio_id == Territory.id)
        .correlate(Territory)
        .scalar_subquery()
        .label("ultima_devolucao")
    )


def enriched_territories_query():
    """Territories joined with their open assignment, holder, group and campaign."""
    active = aliased(Assignment)
    return (
        select(
            Territory,
            Person.nome.label("pessoa_nome"),
            active.data_saida.label("data_saida"),
            Group.nome.label("grupo_nome"),
            Campaign.titulo.label("campanha_titulo"),
            last_return_column(),
        )
        .outerjoin(active, (active.territorio_id == Territory.id) & active.data_devolucao.is_(None))
        .outerjoin(Person, Person.id == active.pessoa_id)
        .outerjoin(Group, Group.id == Territory.grupo_id)
        .outerjoin(Campaign, Campaign.id == active.campanha_id)
    )


def _row_to_dict(row) -> dict:
    t = row.Territory
    return {
        "id": t.id,
        "numero": t.numero,
        "descricao": t.descricao,
        "url_imagem": t.url_imagem,
        "tipo": t.tipo,
        "observacoes": t.observacoes,
        "status": t.status,
        "grupo_id": t.grupo_id,
        "pessoa_nome": row.pessoa_nome,
        "data_saida": row.data_saida,
        "grupo_nome": row.grupo_nome,
        "campanha_titulo": row.campanha_titulo,
        "ultima_devolucao": row.ultima_devolucao,
    }


async def list_territories(
    db: AsyncSession,
    status: TerritoryStatus | None = None,
    search: str = "",
    sort: str = SORT_NUMERO_ASC,
    not_worked_in_campaign: int | None = None,
) -> list[dict]:
    query = enriched_territories_query()
    if not_worked_in_campaign is not None:
        worked = select(Assignment.territorio_id).where(Assignment.campanha_id == not_worked_in_campaign)
        query = query.where(Territory.id.not_in(worked))
    if status is not None:
        query = query.where(Territory.status == status)
    if search:
        query = query.where(
            Territory.numero.ilike(f"%{search}%")
            | Territory.descricao.ilike(f"%{search}%")
        )

    last_return = query.selected_columns.ultima_devolucao
    if sort == SORT_DEVOLUCAO_DESC:
        query = query.order_by(last_return.desc().nulls_last(), numero_order())
    elif sort == SORT_DESCRICAO_ASC:
        query = query.order_by(Territory.descricao)
    else:
        query = query.order_by(numero_order())

    rows = (await db.execute(query)).all()
    return [_row_to_dict(row) for row in rows]


async def get_territory(db: AsyncSession, territory_id: int) -> Territory:
    territory = await db.get(Territory, territory_id)
    if not territory:
        raise NotFoundError("Território não encontrado.")
    return territory


def validate_new_territory(numero: str | None, descricao: str | None) -> None:
    if not numero or not descricao:
        raise ValidationError("Número e Descrição do Território são obrigatórios.")
    if not re.fullmatch(NUMERO_PATTERN, numero):
        raise ValidationError("O número do território deve conter apenas dígitos.")


async def create_territory(
    db: AsyncSession,
    numero: str,
    descricao: str,
    tipo: str | None = None,
    observacoes: str | None = None,
    url_imagem: str | None = None,
) -> Territory:
    territory = Territory(
        numero=numero,
        descricao=descricao,
        tipo=tipo,
        observacoes=observacoes,
        url_imagem=url_imagem,
        status=TerritoryStatus.available,
    )
    db.add(territory)
    await db.commit()
    await db.refresh(territory)
    return territory


async def update_territory(db: AsyncSession, territory_id: int, data: TerritoryUpdate) -> Territory:
    territory = await get_territory(db, territory_id)
    for field, value in data.model_dump().items():
        setattr(territory, field, value)
    await db.commit()
    await db.refresh(territory)
    return territory


async def delete_territory(db: AsyncSession, territory_id: int) -> Territory:
    async with db.begin():
        territory = await get_territory(db, territory_id)
        in_use = await db.scalar(select(open_assignment_exists(territorio_id=territory_id)))
        if territory.status == TerritoryStatus.in_field or in_use:
            raise ConflictError("Não é possível excluir um território que está em campo.")
        await db.execute(delete(Assignment).where(Assignment.territorio_id == territory_id))
        await db.delete(territory)
    return territory


async def get_full_history(db: AsyncSession) -> list[dict]:
    rows = (
        await db.execute(
            select(
                Territory.id,
                Territory.numero,
                Territory.descricao,
                Assignment.id.label("designacao_id"),
                Person.nome.label("pessoa_nome"),
                Assignment.data_saida,
                Assignment.data_devolucao,
                Campaign.titulo.label("campanha_titulo"),
            )
            .outerjoin(Assignment, Assignment.territorio_id == Territory.id)
            .outerjoin(Person, Person.id == Assignment.pessoa_id)
            .outerjoin(Campaign, Campaign.id == Assignment.campanha_id)
            .order_by(Territory.id, Assignment.data_saida.desc(), Assignment.id.desc())
        )
    ).all()

    territories: OrderedDict[int, dict] = OrderedDict()
    for row in rows:
        entry = territories.setdefault(
            row.id,
            {"id": row.id, "numero": row.numero, "descricao": row.descricao, "historico": []},
        )
        if row.designacao_id is not None:
            entry["historico"].append({
                "pessoa_nome": row.pessoa_nome,
                "data_saida": row.data_saida,
                "data_devolucao": row.data_devolucao,
                "campanha_titulo": row.campanha_titulo,
            })
    return list(territories.values())
