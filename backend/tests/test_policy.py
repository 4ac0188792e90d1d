from types import SimpleNamespace

import pytest

from app import policy
from app.errors import Forbidden

org_a = SimpleNamespace(id=1, role='organization')
org_b = SimpleNamespace(id=2, role='organization')
supporter = SimpleNamespace(id=3, role='supporter')
campaign = SimpleNamespace(id=10, owner_id=1)


def test_only_organizations_create_campaigns():
    assert policy.can_create_campaign(org_a)
    assert not policy.can_create_campaign(supporter)
    assert not policy.can_create_campaign(None)


def test_only_owner_modifies_campaign():
    assert policy.can_modify_campaign(org_a, campaign)
    assert not policy.can_modify_campaign(org_b, campaign)
    assert not policy.can_modify_campaign(supporter, campaign)


def test_supporter_with_owner_id_still_cannot_modify():
    impostor = SimpleNamespace(id=1, role='supporter')
    assert not policy.can_modify_campaign(impostor, campaign)


def test_only_supporters_donate():
    assert policy.can_donate(supporter)
    assert not policy.can_donate(org_a)


def test_campaign_donations_visible_to_owner_only():
    assert policy.can_view_campaign_donations(org_a, campaign)
    assert not policy.can_view_campaign_donations(org_b, campaign)
    assert not policy.can_view_campaign_donations(supporter, campaign)


def test_stats_for_organizations():
    assert policy.can_view_stats(org_b)
    assert not policy.can_view_stats(supporter)


def test_authorize_raises_forbidden():
    policy.authorize(True)
    with pytest.raises(Forbidden) as exc:
        policy.authorize(False, 'nope')
    assert exc.value.message == 'nope'
    assert exc.value.status_code == 403
