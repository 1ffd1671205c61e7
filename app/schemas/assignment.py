from datetime import date
from pydantic import BaseModel


class AssignRequest(BaseModel):
    territorio_id: int
    pessoa_id: int
    data_saida: date
    campanha_id: int | None = None


class ReturnRequest(BaseModel):
    # Presence checked in return_territory
    territorio_id: int | None = None
    data_devolucao: date | None = None


class AssignmentResponse(BaseModel):
    id: int
    territorio_id: int
    pessoa_id: int | None
    campanha_id: int | None
    data_saida: date
    data_devolucao: date | None

    model_config = {"from_attributes": True}
