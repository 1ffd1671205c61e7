import asyncio
from datetime import date

from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.config import settings
from app.models.assignment import Assignment
from app.models.person import Person
from app.models.territory import Territory, TerritoryStatus
from app.services.territory_service import last_return_column, numero_order
from app.time_utils import months_before


async def get_counts(db: AsyncSession) -> dict:
    row = (
        await db.execute(
            select(
                func.count().label("total"),
                func.count(case((Territory.status == TerritoryStatus.in_field, 1))).label("em_campo"),
                func.count(case((Territory.status == TerritoryStatus.available, 1))).label("disponivel"),
            ).select_from(Territory)
        )
    ).one()
    return {"total": row.total, "em_campo": row.em_campo, "disponivel": row.disponivel}


async def get_overdue(db: AsyncSession, today: date, months: int) -> list[dict]:
    cutoff = months_before(today, months)
    rows = (
        await db.execute(
            select(Territory.id, Territory.numero, Person.nome.label("pessoa_nome"), Assignment.data_saida)
            .join(Assignment, (Assignment.territorio_id == Territory.id) & Assignment.data_devolucao.is_(None))
            .outerjoin(Person, Person.id == Assignment.pessoa_id)
            .where(Territory.status == TerritoryStatus.in_field, Assignment.data_saida <= cutoff)
            .order_by(Assignment.data_saida, numero_order())
        )
    ).all()
    return [dict(row._mapping) for row in rows]


async def get_suggestions(db: AsyncSession, limit: int) -> list[dict]:
    last_return = last_return_column()
    rows = (
        await db.execute(
            select(Territory.id, Territory.numero, last_return)
            .where(Territory.status == TerritoryStatus.available)
            .order_by(last_return.asc().nulls_first(), numero_order())
            .limit(limit)
        )
    ).all()
    return [dict(row._mapping) for row in rows]


async def get_dashboard_stats(
    sessionmaker: async_sessionmaker[AsyncSession],
    today: date | None = None,
) -> dict:
    """Runs the three dashboard reads concurrently, each on its own session."""
    today = today or date.today()

    async def _run(query, *args):
        async with sessionmaker() as db:
            return await query(db, *args)

    counts, overdue, suggestions = await asyncio.gather(
        _run(get_counts),
        _run(get_overdue, today, settings.OVERDUE_MONTHS),
        _run(get_suggestions, settings.SUGGESTION_LIMIT),
    )
    return {
        "counts": counts,
        "overdueTerritories": overdue,
        "assignmentSuggestions": suggestions,
    }
