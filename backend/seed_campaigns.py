"""
Seed script to populate demo organizations, supporters, campaigns and donations.
Run: python backend/seed_campaigns.py
"""
import sys
from pathlib import Path

# Add backend to path
backend_path = Path(__file__).resolve().parent
sys.path.insert(0, str(backend_path))

from app import campaigns, ledger, models
from app.auth import hash_password
from app.campaign_models import Campaign
from app.database import SessionLocal, utcnow, init_models

DEMO_PASSWORD = 'demo1234'

USERS = [
    {"name": "Clean Water Initiative", "email": "water@example.org", "role": models.ROLE_ORGANIZATION},
    {"name": "Books For All", "email": "books@example.org", "role": models.ROLE_ORGANIZATION},
    {"name": "Alice Donor", "email": "alice@example.com", "role": models.ROLE_SUPPORTER},
    {"name": "Bob Donor", "email": "bob@example.com", "role": models.ROLE_SUPPORTER},
]

CAMPAIGNS = [
    {"owner": "water@example.org", "title": "Wells for rural villages", "description": "Drill and maintain ten wells serving remote communities.", "category": "health", "goal_amount": 5000},
    {"owner": "water@example.org", "title": "Flood relief kits", "description": "Emergency hygiene and water purification kits for flood victims.", "category": "disaster", "goal_amount": 2000},
    {"owner": "books@example.org", "title": "School library restock", "description": "New books for three primary school libraries.", "category": "education", "goal_amount": 1500},
    {"owner": "books@example.org", "title": "Community reading hour", "description": "Weekly volunteer-led reading sessions for children.", "category": "other", "goal_amount": 800},
]

DONATIONS = [
    ("alice@example.com", "Wells for rural villages", 250),
    ("bob@example.com", "Wells for rural villages", 100),
    ("alice@example.com", "School library restock", 75),
    ("bob@example.com", "Flood relief kits", 500),
    ("bob@example.com", "Community reading hour", 40),
]


def seed():
    init_models()
    db = SessionLocal()
    try:
        users = {}
        for u in USERS:
            existing = db.query(models.User).filter(models.User.email == u["email"]).first()
            if existing:
                print(f"⏭️  Skipped (exists): {u['email']}")
                users[u["email"]] = existing
                continue
            user = models.User(**u, password_hash=hash_password(DEMO_PASSWORD), created_at=utcnow())
            db.add(user)
            db.commit()
            db.refresh(user)
            users[u["email"]] = user
            print(f"✅ Added user: {u['email']} ({u['role']})")

        # donations are only seeded for campaigns created by this run
        created = {}
        for c in CAMPAIGNS:
            data = dict(c)
            owner = users[data.pop("owner")]
            existing = db.query(Campaign).filter(Campaign.owner_id == owner.id, Campaign.title == data["title"]).first()
            if existing:
                print(f"⏭️  Skipped (exists): {data['title']}")
                continue
            campaign = campaigns.create_campaign(db, owner, data)
            created[campaign.title] = campaign
            print(f"✅ Added campaign: {campaign.title}")

        for email, title, amount in DONATIONS:
            if title not in created:
                continue
            receipt = ledger.record_donation(db, users[email].id, created[title].id, amount)
            print(f"✅ {email} donated {amount} to {title} (raised {receipt.campaign.raised_amount})")
    finally:
        db.close()
    print("\n🎉 Seeding completed!")


if __name__ == "__main__":
    seed()
