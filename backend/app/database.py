from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
import datetime

from .config import Config

DATABASE_URL = Config.DATABASE_URL

# If using sqlite file, ensure check_same_thread option
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith('sqlite') else {}

# create engine with pool_pre_ping for reliability with some DB providers
engine = create_engine(DATABASE_URL, connect_args=connect_args, pool_pre_ping=True)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def utcnow():
    """Naive UTC timestamp, the form stored in DateTime columns."""
    return datetime.datetime.now(datetime.timezone.utc).replace(tzinfo=None)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_models():
    """Import every model module so its tables are registered, then create them."""
    from . import models, campaign_models, donation_models  # noqa: F401
    Base.metadata.create_all(bind=engine)
