from pydantic import BaseModel, Field


class GroupCreate(BaseModel):
    nome: str = Field(..., min_length=1, max_length=255)


class GroupUpdate(BaseModel):
    nome: str | None = None


class GroupResponse(BaseModel):
    id: int
    nome: str

    model_config = {"from_attributes": True}


class GroupWithTerritories(GroupResponse):
    territorio_ids: list[int] = []


class GroupTerritoriesRequest(BaseModel):
    territorio_ids: list[int] = []
