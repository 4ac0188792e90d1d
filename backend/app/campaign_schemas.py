from typing import Any, Optional
import datetime
from .schemas import ApiModel, UserSummary


class CampaignCreate(ApiModel):
    # fields are optional here; validation.validate_campaign reports what is missing
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    goal_amount: Any = None


class CampaignUpdate(CampaignCreate):
    status: Optional[str] = None


class Campaign(ApiModel):
    id: int
    title: str
    description: str
    category: str
    goal_amount: float
    raised_amount: float
    progress: float
    status: str
    owner_id: int
    owner: Optional[UserSummary] = None
    created_at: datetime.datetime
