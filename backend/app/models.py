from sqlalchemy import Column, Integer, String, DateTime
from .database import Base, utcnow

ROLE_ORGANIZATION = 'organization'
ROLE_SUPPORTER = 'supporter'
ROLES = (ROLE_ORGANIZATION, ROLE_SUPPORTER)


class User(Base):
    __tablename__ = 'users'
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    email = Column(String(200), nullable=False, unique=True, index=True)
    password_hash = Column(String(200), nullable=False)
    role = Column(String(50), nullable=False)  # organization, supporter
    created_at = Column(DateTime, default=utcnow)
