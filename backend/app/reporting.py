"""
Read side: campaign listings, donation history and organization statistics.
"""
from collections import OrderedDict
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session, aliased

from . import campaign_models, donation_models, donation_schemas, models
from .errors import ValidationError
from .schemas import UserSummary
from .validation import Violation

RECENT_DONATIONS_LIMIT = 10


def progress(raised, goal) -> float:
    """Percentage of goal reached, capped at 100 for display."""
    if not goal or goal <= 0:
        return 0.0
    return min(raised / goal * 100, 100.0)


def _escape_like(text):
    return text.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')


def list_campaigns(db: Session, category: Optional[str] = None, search: Optional[str] = None,
                   status: Optional[str] = None):
    """Campaigns newest first; only active ones unless status says otherwise."""
    Campaign = campaign_models.Campaign
    q = db.query(Campaign)
    if category and category != 'all':
        q = q.filter(Campaign.category == category)
    status = status or campaign_models.STATUS_ACTIVE
    if status != 'all':
        if status not in campaign_models.STATUSES:
            raise ValidationError([Violation('status', f"Status must be one of: all, {', '.join(campaign_models.STATUSES)}")])
        q = q.filter(Campaign.status == status)
    if search:
        pattern = f"%{_escape_like(search)}%"
        q = q.filter(or_(
            Campaign.title.ilike(pattern, escape='\\'),
            Campaign.description.ilike(pattern, escape='\\'),
        ))
    return q.order_by(Campaign.created_at.desc(), Campaign.id.desc()).all()


def list_campaigns_by_owner(db: Session, owner_id: int):
    Campaign = campaign_models.Campaign
    return (db.query(Campaign)
            .filter(Campaign.owner_id == owner_id)
            .order_by(Campaign.created_at.desc(), Campaign.id.desc())
            .all())


def _donation_fields(d):
    return dict(id=d.id, supporter_id=d.supporter_id, campaign_id=d.campaign_id,
                amount=d.amount, created_at=d.created_at)


def _summary(user):
    return UserSummary.model_validate(user) if user is not None else None


def donation_history(db: Session, supporter_id: int):
    """A supporter's donations joined with each campaign's current state."""
    Donation = donation_models.Donation
    Campaign = campaign_models.Campaign
    rows = (db.query(Donation, Campaign)
            .outerjoin(Campaign, Campaign.id == Donation.campaign_id)
            .filter(Donation.supporter_id == supporter_id)
            .order_by(Donation.created_at.desc(), Donation.id.desc())
            .all())
    return [
        donation_schemas.DonationHistoryItem(
            **_donation_fields(d),
            campaign=donation_schemas.CampaignSummary.model_validate(c) if c is not None else None,
        )
        for d, c in rows
    ]


def campaign_donations(db: Session, campaign_id: int):
    Donation = donation_models.Donation
    Supporter = aliased(models.User)
    rows = (db.query(Donation, Supporter)
            .outerjoin(Supporter, Supporter.id == Donation.supporter_id)
            .filter(Donation.campaign_id == campaign_id)
            .order_by(Donation.created_at.desc(), Donation.id.desc())
            .all())
    return [
        donation_schemas.CampaignDonation(**_donation_fields(d), supporter=_summary(s))
        for d, s in rows
    ]


def donation_stats(db: Session, owner_id: int) -> donation_schemas.DonationStats:
    """Totals over donations to campaigns currently owned by owner_id.

    Donations whose campaign was deleted have no owner any more and are not
    counted.
    """
    Donation = donation_models.Donation
    Campaign = campaign_models.Campaign
    Supporter = aliased(models.User)
    rows = (db.query(Donation, Campaign.title, Supporter)
            .join(Campaign, Campaign.id == Donation.campaign_id)
            .outerjoin(Supporter, Supporter.id == Donation.supporter_id)
            .filter(Campaign.owner_id == owner_id)
            .order_by(Donation.created_at.desc(), Donation.id.desc())
            .all())

    total_donations = len(rows)
    total_amount = sum(d.amount for d, _, _ in rows)
    average = round(total_amount / total_donations, 2) if total_donations else 0

    by_campaign = OrderedDict()
    for d, title, _ in rows:
        group = by_campaign.setdefault(title, {"count": 0, "total": 0.0})
        group["count"] += 1
        group["total"] += d.amount

    recent = [
        donation_schemas.RecentDonation(**_donation_fields(d), campaign_title=title, supporter=_summary(s))
        for d, title, s in rows[:RECENT_DONATIONS_LIMIT]
    ]
    return donation_schemas.DonationStats(
        total_donations=total_donations,
        total_amount=total_amount,
        average_donation=average,
        donations_by_campaign={t: donation_schemas.CampaignTotals(**g) for t, g in by_campaign.items()},
        recent_donations=recent,
    )
