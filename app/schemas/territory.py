from datetime import date
from pydantic import BaseModel, Field
from app.models.territory import TerritoryStatus

# Numbers are stored as text but must sort numerically
NUMERO_PATTERN = r"^\d{1,9}$"


class TerritoryUpdate(BaseModel):
    numero: str = Field(..., pattern=NUMERO_PATTERN)
    descricao: str | None = None
    tipo: str | None = None
    observacoes: str | None = None


class TerritoryResponse(BaseModel):
    id: int
    numero: str
    descricao: str | None
    url_imagem: str | None
    tipo: str | None
    observacoes: str | None
    status: TerritoryStatus
    grupo_id: int | None

    model_config = {"from_attributes": True}


class TerritoryListItem(TerritoryResponse):
    """Territory enriched with its open assignment and history summary."""

    pessoa_nome: str | None = None
    data_saida: date | None = None
    grupo_nome: str | None = None
    campanha_titulo: str | None = None
    ultima_devolucao: date | None = None


class TerritoryDeleted(BaseModel):
    message: str
    data: TerritoryResponse


class HistoryEntry(BaseModel):
    pessoa_nome: str | None
    data_saida: date
    data_devolucao: date | None
    campanha_titulo: str | None


class TerritoryHistory(BaseModel):
    id: int
    numero: str
    descricao: str | None
    historico: list[HistoryEntry]
