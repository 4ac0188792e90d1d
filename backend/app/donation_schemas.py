from typing import Any, Optional, List, Dict
import datetime
from .schemas import ApiModel, UserSummary


class DonationCreate(ApiModel):
    campaign_id: int
    # raw JSON value; validation.validate_donation_amount decides
    amount: Any = None


class Donation(ApiModel):
    id: int
    supporter_id: int
    campaign_id: int
    amount: float
    created_at: datetime.datetime


class CampaignSummary(ApiModel):
    """Campaign fields shown next to a donation"""
    id: int
    title: str
    description: str
    goal_amount: float
    raised_amount: float
    owner: Optional[UserSummary] = None


class DonationReceipt(Donation):
    campaign: CampaignSummary
    supporter: UserSummary


class DonationHistoryItem(Donation):
    # None once the campaign has been deleted
    campaign: Optional[CampaignSummary] = None


class CampaignDonation(Donation):
    supporter: Optional[UserSummary] = None


class RecentDonation(CampaignDonation):
    campaign_title: str


class CampaignTotals(ApiModel):
    count: int
    total: float


class DonationStats(ApiModel):
    """Aggregates over every donation to an organization's campaigns"""
    total_donations: int
    total_amount: float
    average_donation: float
    donations_by_campaign: Dict[str, CampaignTotals]
    recent_donations: List[RecentDonation]
