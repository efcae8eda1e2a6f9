from sqlalchemy import Column, String, DateTime, Index
from app.core.database import Base
from app.models.types import JSONType

class UserSession(Base):
    """Server-side session keyed by the opaque token stored in the cookie"""
    __tablename__ = "sessions"

    sid = Column(String, primary_key=True)
    sess = Column(JSONType, nullable=False)  # {"user_id": ..., "created_at": ...}
    expire = Column(DateTime, nullable=False)

    __table_args__ = (
        Index("IDX_session_expire", "expire"),
    )
