"""
Funding ledger: records a donation and credits the campaign.

The donation insert and the raised-amount increment share one transaction,
and the increment is a SQL expression guarded by status = 'active', so
concurrent donations never overwrite each other and a closed campaign is
never credited.
"""
import logging

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import campaign_models, donation_models, donation_schemas, models
from .database import utcnow
from .errors import Conflict, Internal, NotFound, ValidationError
from .schemas import UserSummary
from .validation import validate_donation_amount

logger = logging.getLogger(__name__)

NOT_ACCEPTING = 'Campaign is not accepting donations'


def record_donation(db: Session, supporter_id: int, campaign_id: int, amount) -> donation_schemas.DonationReceipt:
    Campaign = campaign_models.Campaign
    campaign = db.get(Campaign, campaign_id)
    if campaign is None:
        raise NotFound('Campaign not found')
    if campaign.status != campaign_models.STATUS_ACTIVE:
        raise Conflict(NOT_ACCEPTING)
    violations = validate_donation_amount(amount)
    if violations:
        raise ValidationError(violations)
    supporter = db.get(models.User, supporter_id)
    if supporter is None:
        raise NotFound('Supporter not found')

    amount = float(amount)
    donation = donation_models.Donation(
        supporter_id=supporter_id,
        campaign_id=campaign_id,
        amount=amount,
        created_at=utcnow(),
    )
    try:
        db.add(donation)
        db.flush()
        result = db.execute(
            update(Campaign)
            .where(Campaign.id == campaign_id, Campaign.status == campaign_models.STATUS_ACTIVE)
            .values(raised_amount=Campaign.raised_amount + amount)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            # closed or deleted since the check above
            db.rollback()
            raise Conflict(NOT_ACCEPTING)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Donation of %s to campaign %s rolled back: %s", amount, campaign_id, e)
        raise Internal('Donation could not be recorded') from e

    db.refresh(donation)
    db.refresh(campaign)
    logger.info("Donation %s: supporter %s gave %s to campaign %s (raised %s/%s)",
                donation.id, supporter_id, amount, campaign_id, campaign.raised_amount, campaign.goal_amount)

    return donation_schemas.DonationReceipt(
        id=donation.id,
        supporter_id=donation.supporter_id,
        campaign_id=donation.campaign_id,
        amount=donation.amount,
        created_at=donation.created_at,
        campaign=donation_schemas.CampaignSummary.model_validate(campaign),
        supporter=UserSummary.model_validate(supporter),
    )
