"""
Access policy for campaign and donation actions.

Decision functions are pure: they look at the identity and the resource and
return a bool. authorize() turns a negative decision into Forbidden.
"""
from .models import ROLE_ORGANIZATION, ROLE_SUPPORTER
from .errors import Forbidden


def has_role(user, role) -> bool:
    return user is not None and user.role == role


def owns_campaign(user, campaign) -> bool:
    return user is not None and campaign is not None and user.id == campaign.owner_id


def can_create_campaign(user) -> bool:
    return has_role(user, ROLE_ORGANIZATION)


def can_modify_campaign(user, campaign) -> bool:
    """Update and delete: the owning organization only."""
    return has_role(user, ROLE_ORGANIZATION) and owns_campaign(user, campaign)


def can_donate(user) -> bool:
    return has_role(user, ROLE_SUPPORTER)


def can_view_campaign_donations(user, campaign) -> bool:
    return has_role(user, ROLE_ORGANIZATION) and owns_campaign(user, campaign)


def can_view_stats(user) -> bool:
    return has_role(user, ROLE_ORGANIZATION)


def authorize(allowed: bool, message: str = None):
    if not allowed:
        raise Forbidden(message)
