from sqlalchemy.orm import Session
from datetime import datetime, timedelta
from typing import Optional
import logging

from app.core.config import settings
from app.core.security import generate_session_token
from app.models.session import UserSession

logger = logging.getLogger(__name__)

class SessionService:
    """Database-backed sessions with a rolling inactivity window."""

    def __init__(self, db: Session, max_age_seconds: int = None):
        self.db = db
        self.max_age = timedelta(seconds=max_age_seconds or settings.SESSION_MAX_AGE_SECONDS)

    def _expiry(self) -> datetime:
        return datetime.utcnow() + self.max_age

    def create(self, user_id: str) -> str:
        sid = generate_session_token()
        session = UserSession(
            sid=sid,
            sess={"user_id": user_id, "created_at": datetime.utcnow().isoformat()},
            expire=self._expiry()
        )
        self.db.add(session)
        self.db.commit()
        return sid

    def resolve(self, sid: Optional[str]) -> Optional[str]:
        """Return the user id bound to a session, or None if missing or expired."""
        if not sid:
            return None

        session = self.db.query(UserSession).filter(UserSession.sid == sid).first()
        if not session:
            return None

        if session.expire <= datetime.utcnow():
            logger.info("Session expired, removing it")
            self.db.delete(session)
            self.db.commit()
            return None

        session.expire = self._expiry()
        self.db.commit()
        return (session.sess or {}).get("user_id")

    def destroy(self, sid: Optional[str]) -> bool:
        if not sid:
            return False

        deleted = self.db.query(UserSession).filter(UserSession.sid == sid).delete()
        self.db.commit()
        return deleted > 0

    def purge_expired(self) -> int:
        """Delete every expired session, returning how many were removed."""
        deleted = self.db.query(UserSession).filter(
            UserSession.expire <= datetime.utcnow()
        ).delete()
        self.db.commit()
        if deleted:
            logger.info(f"Purged {deleted} expired sessions")
        return deleted
