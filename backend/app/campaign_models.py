from sqlalchemy import Column, Integer, String, Text, Float, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from .database import Base, utcnow

CATEGORIES = ('health', 'education', 'disaster', 'other')
STATUS_ACTIVE = 'active'
STATUS_CLOSED = 'closed'
STATUSES = (STATUS_ACTIVE, STATUS_CLOSED)

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 1000


class Campaign(Base):
    """Fundraising campaign published by an organization"""
    __tablename__ = 'campaigns'

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(TITLE_MAX_LENGTH), nullable=False)
    description = Column(Text, nullable=False)
    category = Column(String(50), nullable=False, index=True)
    goal_amount = Column(Float, nullable=False)
    raised_amount = Column(Float, nullable=False, default=0)  # only the ledger increments this
    owner_id = Column(Integer, ForeignKey('users.id'), nullable=False, index=True)
    status = Column(String(20), nullable=False, default=STATUS_ACTIVE, index=True)
    created_at = Column(DateTime, default=utcnow, index=True)

    owner = relationship('User', lazy='joined')

    @property
    def progress(self):
        from .reporting import progress
        return progress(self.raised_amount or 0, self.goal_amount or 0)
