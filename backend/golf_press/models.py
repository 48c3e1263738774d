from sqlalchemy import Boolean, Column, DateTime, Index, JSON, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.sql import func

from .db import Base


class GolfMatch(Base):
    """One persisted match record, keyed by match id.

    ``record`` holds the whole ledger document; ``title`` and ``is_complete``
    are copied out of it for listing and filtering.
    """

    __tablename__ = "golf_match"
    id = Column(String, primary_key=True)
    title = Column(String, nullable=False, default="")
    record = Column(JSON().with_variant(JSONB, "postgresql"), nullable=False)
    is_complete = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime, server_default=func.now(), onupdate=func.now(), nullable=False
    )

    __table_args__ = (
        Index("ix_golf_match_is_complete", "is_complete"),
    )
