from app.models.person import Person
from app.models.group import Group
from app.models.campaign import Campaign
from app.models.territory import Territory, TerritoryStatus
from app.models.assignment import Assignment

__all__ = ["Person", "Group", "Campaign", "Territory", "TerritoryStatus", "Assignment"]
