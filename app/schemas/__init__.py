from app.schemas.person import PersonCreate, PersonUpdate, PersonResponse, PersonDeleted
from app.schemas.group import GroupCreate, GroupUpdate, GroupResponse, GroupWithTerritories, GroupTerritoriesRequest
from app.schemas.campaign import CampaignCreate, CampaignUpdate, CampaignResponse, CampaignProgress
from app.schemas.territory import (
    TerritoryUpdate, TerritoryResponse, TerritoryListItem, TerritoryDeleted, HistoryEntry, TerritoryHistory,
)
from app.schemas.assignment import AssignRequest, ReturnRequest, AssignmentResponse
from app.schemas.dashboard import DashboardCounts, OverdueTerritory, AssignmentSuggestion, DashboardStats

__all__ = [
    "PersonCreate", "PersonUpdate", "PersonResponse", "PersonDeleted",
    "GroupCreate", "GroupUpdate", "GroupResponse", "GroupWithTerritories", "GroupTerritoriesRequest",
    "CampaignCreate", "CampaignUpdate", "CampaignResponse", "CampaignProgress",
    "TerritoryUpdate", "TerritoryResponse", "TerritoryListItem", "TerritoryDeleted", "HistoryEntry",
    "TerritoryHistory",
    "AssignRequest", "ReturnRequest", "AssignmentResponse",
    "DashboardCounts", "OverdueTerritory", "AssignmentSuggestion", "DashboardStats",
]
