"""
Campaign management: create, update, delete.

Order of checks on mutation is existence (NotFound), then ownership
(Forbidden), then field validation, so nothing is written on any failure.
"""
import logging

from sqlalchemy.orm import Session

from . import campaign_models, policy
from .database import utcnow
from .errors import NotFound, ValidationError
from .validation import validate_campaign

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ('title', 'description', 'category', 'goal_amount', 'status')


def get_campaign(db: Session, campaign_id: int):
    campaign = db.get(campaign_models.Campaign, campaign_id)
    if campaign is None:
        raise NotFound('Campaign not found')
    return campaign


def create_campaign(db: Session, owner, data: dict):
    policy.authorize(policy.can_create_campaign(owner), 'Access denied. Organization role required.')
    violations = validate_campaign(data)
    if violations:
        raise ValidationError(violations)

    campaign = campaign_models.Campaign(
        title=data['title'].strip(),
        description=data['description'],
        category=data['category'],
        goal_amount=float(data['goal_amount']),
        raised_amount=0,
        owner_id=owner.id,
        status=campaign_models.STATUS_ACTIVE,
        created_at=utcnow(),
    )
    db.add(campaign)
    db.commit()
    db.refresh(campaign)
    logger.info("Campaign %s created by user %s", campaign.id, owner.id)
    return campaign


def update_campaign(db: Session, actor, campaign_id: int, patch: dict):
    """Overwrite every field present in patch.

    goal_amount may drop below raised_amount; that is allowed here.
    """
    campaign = get_campaign(db, campaign_id)
    policy.authorize(policy.can_modify_campaign(actor, campaign), 'Not authorized to update this campaign')

    patch = {k: v for k, v in patch.items() if k in EDITABLE_FIELDS}
    violations = validate_campaign(patch, partial=True)
    if violations:
        raise ValidationError(violations)

    for field, value in patch.items():
        if field == 'title':
            value = value.strip()
        elif field == 'goal_amount':
            value = float(value)
        setattr(campaign, field, value)
    db.commit()
    db.refresh(campaign)
    logger.info("Campaign %s updated by user %s (%s)", campaign.id, actor.id, ', '.join(sorted(patch)) or 'no changes')
    return campaign


def delete_campaign(db: Session, actor, campaign_id: int):
    """Remove the campaign; its donations stay on record."""
    campaign = get_campaign(db, campaign_id)
    policy.authorize(policy.can_modify_campaign(actor, campaign), 'Not authorized to delete this campaign')
    db.delete(campaign)
    db.commit()
    logger.info("Campaign %s deleted by user %s", campaign_id, actor.id)
