from sqlalchemy import Column, Integer, Float, DateTime, ForeignKey
from .database import Base, utcnow


class Donation(Base):
    """Append-only record of a contribution to a campaign.

    campaign_id carries no foreign key: donations outlive a deleted campaign.
    """
    __tablename__ = 'donations'
    id = Column(Integer, primary_key=True, index=True)
    supporter_id = Column(Integer, ForeignKey('users.id'), nullable=False, index=True)
    campaign_id = Column(Integer, nullable=False, index=True)
    amount = Column(Float, nullable=False)
    created_at = Column(DateTime, default=utcnow, index=True)
