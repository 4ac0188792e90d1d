import datetime

import pytest

from app import campaigns, ledger, models, reporting
from app.campaign_models import STATUS_CLOSED
from app.errors import ValidationError


@pytest.fixture
def setup(db, make_user):
    org = make_user('Org', models.ROLE_ORGANIZATION)
    other = make_user('Other Org', models.ROLE_ORGANIZATION)
    ann = make_user('Ann', models.ROLE_SUPPORTER)
    ben = make_user('Ben', models.ROLE_SUPPORTER)
    return org, other, ann, ben


def _campaign(db, owner, title, category='health', description='A worthy cause', goal=1000, age_days=0):
    c = campaigns.create_campaign(db, owner, {
        'title': title, 'description': description, 'category': category, 'goal_amount': goal,
    })
    c.created_at = datetime.datetime(2026, 1, 1) - datetime.timedelta(days=age_days)
    db.commit()
    return c


@pytest.mark.parametrize('raised, goal, expected', [
    (0, 1000, 0),
    (300, 1000, 30),
    (1000, 1000, 100),
    (1100, 1000, 100),
    (1, 3, 100 / 3),
    (50, 0, 0),
])
def test_progress(raised, goal, expected):
    assert reporting.progress(raised, goal) == pytest.approx(expected)
    assert 0 <= reporting.progress(raised, goal) <= 100


def test_list_defaults_to_active_newest_first(db, setup):
    org = setup[0]
    _campaign(db, org, 'Old', age_days=5)
    _campaign(db, org, 'New', age_days=1)
    closed = _campaign(db, org, 'Closed', age_days=0)
    campaigns.update_campaign(db, org, closed.id, {'status': STATUS_CLOSED})

    assert [c.title for c in reporting.list_campaigns(db)] == ['New', 'Old']
    assert [c.title for c in reporting.list_campaigns(db, status='closed')] == ['Closed']
    assert [c.title for c in reporting.list_campaigns(db, status='all')] == ['Closed', 'New', 'Old']


def test_list_filters_by_category(db, setup):
    org = setup[0]
    _campaign(db, org, 'Clinic', category='health')
    _campaign(db, org, 'Books', category='education')

    assert [c.title for c in reporting.list_campaigns(db, category='education')] == ['Books']
    assert len(reporting.list_campaigns(db, category='all')) == 2


def test_search_is_case_insensitive_over_title_and_description(db, setup):
    org = setup[0]
    _campaign(db, org, 'Flood Relief', description='Emergency kits', age_days=2)
    _campaign(db, org, 'Shelter', description='Beds after the FLOOD', age_days=1)
    _campaign(db, org, 'Library', description='Books')

    assert [c.title for c in reporting.list_campaigns(db, search='flood')] == ['Shelter', 'Flood Relief']
    assert reporting.list_campaigns(db, search='nothing-matches') == []


def test_search_treats_wildcards_literally(db, setup):
    org = setup[0]
    _campaign(db, org, '100% for schools')
    _campaign(db, org, 'Other cause')

    assert [c.title for c in reporting.list_campaigns(db, search='100%')] == ['100% for schools']
    assert reporting.list_campaigns(db, search='_') == []


def test_list_by_owner_includes_closed(db, setup):
    org, other = setup[0], setup[1]
    mine = _campaign(db, org, 'Mine')
    _campaign(db, other, 'Theirs')
    campaigns.update_campaign(db, org, mine.id, {'status': STATUS_CLOSED})

    assert [c.title for c in reporting.list_campaigns_by_owner(db, org.id)] == ['Mine']


def test_donation_stats(db, setup):
    org, other, ann, ben = setup
    water = _campaign(db, org, 'Water')
    books = _campaign(db, org, 'Books')
    foreign = _campaign(db, other, 'Foreign')

    ledger.record_donation(db, ann.id, water.id, 100)
    ledger.record_donation(db, ben.id, water.id, 50)
    ledger.record_donation(db, ann.id, books.id, 25)
    ledger.record_donation(db, ben.id, foreign.id, 1000)

    stats = reporting.donation_stats(db, org.id)
    assert stats.total_donations == 3
    assert stats.total_amount == 175
    assert stats.average_donation == 58.33
    assert stats.donations_by_campaign['Water'].count == 2
    assert stats.donations_by_campaign['Water'].total == 150
    assert stats.donations_by_campaign['Books'].total == 25
    assert 'Foreign' not in stats.donations_by_campaign
    assert [d.amount for d in stats.recent_donations] == [25, 50, 100]
    assert stats.recent_donations[0].campaign_title == 'Books'
    assert stats.recent_donations[0].supporter.name == 'Ann'


def test_donation_stats_empty(db, setup):
    stats = reporting.donation_stats(db, setup[0].id)
    assert stats.total_donations == 0
    assert stats.total_amount == 0
    assert stats.average_donation == 0
    assert stats.donations_by_campaign == {}
    assert stats.recent_donations == []


def test_recent_donations_limited_to_ten(db, setup):
    org, _, ann, _ = setup
    c = _campaign(db, org, 'Many')
    for amount in range(1, 13):
        ledger.record_donation(db, ann.id, c.id, amount)

    stats = reporting.donation_stats(db, org.id)
    assert stats.total_donations == 12
    assert [d.amount for d in stats.recent_donations] == [12, 11, 10, 9, 8, 7, 6, 5, 4, 3]


def test_history_newest_first_with_current_campaign_state(db, setup):
    org, _, ann, ben = setup
    water = _campaign(db, org, 'Water')
    books = _campaign(db, org, 'Books')
    ledger.record_donation(db, ann.id, water.id, 10)
    ledger.record_donation(db, ann.id, books.id, 20)
    ledger.record_donation(db, ben.id, water.id, 30)

    history = reporting.donation_history(db, ann.id)
    assert [h.amount for h in history] == [20, 10]
    assert history[1].campaign.title == 'Water'
    assert history[1].campaign.raised_amount == 40
    assert history[1].campaign.owner.name == 'Org'


def test_deleted_campaign_leaves_orphaned_donations(db, setup):
    org, _, ann, _ = setup
    water = _campaign(db, org, 'Water')
    water_id = water.id
    ledger.record_donation(db, ann.id, water_id, 10)
    campaigns.delete_campaign(db, org, water_id)

    history = reporting.donation_history(db, ann.id)
    assert len(history) == 1
    assert history[0].campaign_id == water_id
    assert history[0].campaign is None

    assert reporting.donation_stats(db, org.id).total_donations == 0
    assert len(reporting.campaign_donations(db, water_id)) == 1


def test_campaign_donations_carry_supporter(db, setup):
    org, _, ann, ben = setup
    c = _campaign(db, org, 'Water')
    ledger.record_donation(db, ann.id, c.id, 10)
    ledger.record_donation(db, ben.id, c.id, 20)

    rows = reporting.campaign_donations(db, c.id)
    assert [(r.supporter.name, r.amount) for r in rows] == [('Ben', 20), ('Ann', 10)]


def test_unknown_status_is_a_validation_error(db, setup):
    _campaign(db, setup[0], 'Water')
    with pytest.raises(ValidationError) as exc:
        reporting.list_campaigns(db, status='paused')
    assert exc.value.violations[0].field == 'status'
