import logging
from datetime import datetime

from sqlalchemy.orm import Session

from fittrack.models.activity import ActivityLog
from fittrack.models.calorie import CalorieLog
from fittrack.utils.errors import LogNotFoundError

logger = logging.getLogger(__name__)


class OwnedLogStore:
    """CRUD over one dated log table, always scoped to the owning user.

    Every query carries ``user_id`` in its WHERE clause, so an id belonging
    to somebody else behaves exactly like an id that does not exist.
    """

    def __init__(self, model, value_field: str):
        self.model = model
        self.value_field = value_field

    def _owned(self, db: Session, user_id: int):
        return db.query(self.model).filter(self.model.user_id == user_id)

    def list(self, db: Session, user_id: int) -> list:
        return (
            self._owned(db, user_id)
            .order_by(self.model.date.desc(), self.model.id.desc())
            .all()
        )

    def get(self, db: Session, user_id: int, log_id: int):
        log = self._owned(db, user_id).filter(self.model.id == log_id).first()
        if not log:
            raise LogNotFoundError()
        return log

    def create(self, db: Session, user_id: int, value, logged_at: datetime | None = None):
        log = self.model(user_id=user_id, date=logged_at or datetime.now())
        setattr(log, self.value_field, value)
        db.add(log)
        db.commit()
        db.refresh(log)
        logger.info(
            "User %s created %s id=%s %s=%s",
            user_id,
            self.model.__tablename__,
            log.id,
            self.value_field,
            value,
        )
        return log

    def update(self, db: Session, user_id: int, log_id: int, value):
        updated = (
            self._owned(db, user_id)
            .filter(self.model.id == log_id)
            .update(
                {self.value_field: value, "updated_at": datetime.utcnow()},
                synchronize_session=False,
            )
        )
        if not updated:
            db.rollback()
            raise LogNotFoundError()
        db.commit()
        return self.get(db, user_id, log_id)

    def delete(self, db: Session, user_id: int, log_id: int) -> None:
        deleted = (
            self._owned(db, user_id)
            .filter(self.model.id == log_id)
            .delete(synchronize_session=False)
        )
        if not deleted:
            db.rollback()
            raise LogNotFoundError()
        db.commit()
        logger.info("User %s deleted %s id=%s", user_id, self.model.__tablename__, log_id)


calorie_logs = OwnedLogStore(CalorieLog, "calories")
activity_logs = OwnedLogStore(ActivityLog, "activity")
