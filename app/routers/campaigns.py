from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.database import get_db
from app.schemas.campaign import CampaignCreate, CampaignUpdate, CampaignResponse, CampaignProgress
import app.services.campaign_service as svc

router = APIRouter(prefix="/campanhas", tags=["campanhas"])


@router.get("", response_model=list[CampaignProgress])
async def list_campaigns(db: AsyncSession = Depends(get_db)):
    return await svc.get_campaigns_progress(db)


@router.post("", response_model=CampaignResponse, status_code=201)
async def create_campaign(data: CampaignCreate, db: AsyncSession = Depends(get_db)):
    return await svc.create_campaign(db, data)


@router.put("/{campaign_id}", response_model=CampaignResponse)
async def update_campaign(campaign_id: int, data: CampaignUpdate, db: AsyncSession = Depends(get_db)):
    return await svc.update_campaign(db, campaign_id, data)


@router.delete("/{campaign_id}")
async def delete_campaign(campaign_id: int, db: AsyncSession = Depends(get_db)):
    await svc.delete_campaign(db, campaign_id)
    return {"message": "Campanha deletada com sucesso."}
