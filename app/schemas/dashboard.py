from datetime import date
from pydantic import BaseModel


class DashboardCounts(BaseModel):
    total: int
    em_campo: int
    disponivel: int


class OverdueTerritory(BaseModel):
    id: int
    numero: str
    pessoa_nome: str | None
    data_saida: date


class AssignmentSuggestion(BaseModel):
    id: int
    numero: str
    ultima_devolucao: date | None


class DashboardStats(BaseModel):
    counts: DashboardCounts
    overdueTerritories: list[OverdueTerritory]
    assignmentSuggestions: list[AssignmentSuggestion]
