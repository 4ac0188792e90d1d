"""
API endpoints for campaigns
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import Optional, List
from . import campaigns, campaign_schemas, reporting
from .auth import get_current_user, require_organization
from .database import get_db

router = APIRouter(prefix="/api/campaigns", tags=["Campaigns"])


@router.get("", response_model=List[campaign_schemas.Campaign])
def list_campaigns(
    category: Optional[str] = None,
    search: Optional[str] = None,
    status: Optional[str] = None,
    db: Session = Depends(get_db)
):
    """List campaigns (active only unless `status` is given), newest first"""
    return reporting.list_campaigns(db, category=category, search=search, status=status)


@router.post("", response_model=campaign_schemas.Campaign, status_code=201)
def create_campaign(
    payload: campaign_schemas.CampaignCreate,
    user=Depends(require_organization),
    db: Session = Depends(get_db)
):
    return campaigns.create_campaign(db, user, payload.model_dump())


# declared before /{campaign_id} so "ngo" is not read as an id
@router.get("/ngo/{user_id}", response_model=List[campaign_schemas.Campaign])
def list_campaigns_by_owner(
    user_id: int,
    user=Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Every campaign of one organization, any status"""
    return reporting.list_campaigns_by_owner(db, user_id)


@router.get("/{campaign_id}", response_model=campaign_schemas.Campaign)
def get_campaign(campaign_id: int, db: Session = Depends(get_db)):
    return campaigns.get_campaign(db, campaign_id)


@router.put("/{campaign_id}", response_model=campaign_schemas.Campaign)
def update_campaign(
    campaign_id: int,
    payload: campaign_schemas.CampaignUpdate,
    user=Depends(require_organization),
    db: Session = Depends(get_db)
):
    """Owner-only; fields sent overwrite the stored ones"""
    return campaigns.update_campaign(db, user, campaign_id, payload.model_dump(exclude_unset=True))


@router.delete("/{campaign_id}")
def delete_campaign(
    campaign_id: int,
    user=Depends(require_organization),
    db: Session = Depends(get_db)
):
    campaigns.delete_campaign(db, user, campaign_id)
    return {"message": "Campaign deleted successfully"}
