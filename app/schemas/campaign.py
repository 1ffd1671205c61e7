from datetime import date
from pydantic import BaseModel, Field, model_validator


class CampaignBase(BaseModel):
    titulo: str = Field(..., min_length=1, max_length=255)
    data_inicio: date
    data_fim: date

    @model_validator(mode="after")
    def _check_period(self):
        if self.data_fim < self.data_inicio:
            raise ValueError("A data de fim não pode ser anterior à data de início.")
        return self


class CampaignCreate(CampaignBase):
    pass


class CampaignUpdate(CampaignBase):
    pass


class CampaignResponse(BaseModel):
    id: int
    titulo: str
    data_inicio: date
    data_fim: date

    model_config = {"from_attributes": True}


class CampaignProgress(CampaignResponse):
    trabalhados_count: int
    total_territorios: int
    faltam_count: int
