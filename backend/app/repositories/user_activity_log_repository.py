from typing import Any

from sqlalchemy.orm import Session

from app.models.shared import utc_now
from app.models.user_activity_log import UserActivityLog


class UserActivityLogRepository:
    def __init__(self, db: Session):
        self.db = db

    def create(self, user_id: str, action: str, details: dict[str, Any]) -> UserActivityLog:
        entry = UserActivityLog(
            user_id=user_id,
            action=action,
            details=details,
            created_at=utc_now(),
        )
        self.db.add(entry)
        self.db.commit()
        self.db.refresh(entry)
        return entry

    def get_by_user(self, user_id: str, limit: int = 100) -> list[UserActivityLog]:
        return (
            self.db.query(UserActivityLog)
            .filter(UserActivityLog.user_id == user_id)
            .order_by(UserActivityLog.created_at.desc())
            .limit(limit)
            .all()
        )
