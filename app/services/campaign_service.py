from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import ConflictError, NotFoundError
from app.models.assignment import Assignment
from app.models.campaign import Campaign
from app.models.territory import Territory
from app.schemas.campaign import CampaignCreate, CampaignUpdate


async def get_campaigns_progress(db: AsyncSession) -> list[dict]:
    worked = (
        select(func.count(func.distinct(Assignment.territorio_id)))
        .where(Assignment.campanha_id == Campaign.id)
        .correlate(Campaign)
        .scalar_subquery()
    )
    total = await db.scalar(select(func.count()).select_from(Territory))
    rows = (
        await db.execute(
            select(Campaign, worked.label("trabalhados_count"))
            .order_by(Campaign.data_inicio.desc(), Campaign.id.desc())
        )
    ).all()
    return [
        {
            "id": c.id,
            "titulo": c.titulo,
            "data_inicio": c.data_inicio,
            "data_fim": c.data_fim,
            "trabalhados_count": trabalhados,
            "total_territorios": total,
            "faltam_count": total - trabalhados,
        }
        for c, trabalhados in rows
    ]


async def get_campaign(db: AsyncSession, campaign_id: int) -> Campaign:
    campaign = await db.get(Campaign, campaign_id)
    if not campaign:
        raise NotFoundError("Campanha não encontrada.")
    return campaign


async def create_campaign(db: AsyncSession, data: CampaignCreate) -> Campaign:
    campaign = Campaign(**data.model_dump())
    db.add(campaign)
    await db.commit()
    await db.refresh(campaign)
    return campaign


async def update_campaign(db: AsyncSession, campaign_id: int, data: CampaignUpdate) -> Campaign:
    campaign = await get_campaign(db, campaign_id)
    for field, value in data.model_dump().items():
        setattr(campaign, field, value)
    await db.commit()
    await db.refresh(campaign)
    return campaign


async def delete_campaign(db: AsyncSession, campaign_id: int) -> None:
    async with db.begin():
        campaign = await get_campaign(db, campaign_id)
        used = await db.scalar(
            select(func.count()).select_from(Assignment).where(Assignment.campanha_id == campaign_id)
        )
        if used:
            raise ConflictError("Não é possível excluir. A campanha possui designações registradas.")
        await db.delete(campaign)
