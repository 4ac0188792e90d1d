"""
API endpoints for donations and organization statistics
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from . import campaigns, donation_schemas, ledger, policy, reporting
from .auth import require_organization, require_supporter
from .database import get_db

router = APIRouter(prefix="/api/donations", tags=["Donations"])


@router.post("", response_model=donation_schemas.DonationReceipt, status_code=201)
def make_donation(
    payload: donation_schemas.DonationCreate,
    user=Depends(require_supporter),
    db: Session = Depends(get_db)
):
    """Record a (simulated) donation and credit the campaign"""
    return ledger.record_donation(db, user.id, payload.campaign_id, payload.amount)


@router.get("/history", response_model=List[donation_schemas.DonationHistoryItem])
def donation_history(user=Depends(require_supporter), db: Session = Depends(get_db)):
    return reporting.donation_history(db, user.id)


@router.get("/campaign/{campaign_id}", response_model=List[donation_schemas.CampaignDonation])
def donations_for_campaign(
    campaign_id: int,
    user=Depends(require_organization),
    db: Session = Depends(get_db)
):
    campaign = campaigns.get_campaign(db, campaign_id)
    policy.authorize(policy.can_view_campaign_donations(user, campaign),
                     'Not authorized to view donations for this campaign')
    return reporting.campaign_donations(db, campaign_id)


@router.get("/stats", response_model=donation_schemas.DonationStats)
def donation_stats(user=Depends(require_organization), db: Session = Depends(get_db)):
    """Aggregates over every donation to the caller's campaigns"""
    policy.authorize(policy.can_view_stats(user))
    return reporting.donation_stats(db, user.id)
