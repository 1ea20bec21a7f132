"""Records customer and employee activity (emails sent, logins)."""

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.repositories.user_activity_log_repository import UserActivityLogRepository

logger = logging.getLogger(__name__)

EMAIL_SENT = "EMAIL_SENT"
LOGIN = "LOGIN"


class ActivityLogService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = UserActivityLogRepository(db)

    def log_activity(
        self, user_id: str, action: str, details: dict[str, Any] | None = None
    ) -> bool:
        """Append an activity entry. Failures are logged and reported as False."""
        try:
            self.repo.create(user_id=str(user_id), action=action, details=details or {})
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Failed to log activity %s for user %s", action, user_id)
            return False
        return True
