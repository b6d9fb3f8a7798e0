"""Last upstream refresh per source: the authoritative cooldown timestamp shared by all instances."""
from sqlalchemy import BigInteger, Column, DateTime, String
from sqlalchemy.sql import func

from newsdesk.db.base import Base


class RefreshState(Base):
    __tablename__ = "refresh_state"

    source = Column(String(32), primary_key=True)
    # Epoch seconds of the last successful or rate-limited upstream call; never decreases
    last_refresh_epoch = Column(BigInteger, nullable=True)
    last_outcome = Column(String(32), nullable=True)  # ok | rate_limited
    last_error = Column(String(64), nullable=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
