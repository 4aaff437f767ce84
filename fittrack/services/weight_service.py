import logging
from datetime import datetime

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from fittrack.models.weight import WeightLog
from fittrack.services.log_store import OwnedLogStore

logger = logging.getLogger(__name__)

_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class WeightLogStore(OwnedLogStore):
    """Weight logs hold at most one row per user per calendar day.

    ``create`` converges on that row: the first write for a day inserts it,
    later writes for the same day overwrite its weight and keep its id and
    original date.
    """

    def create(self, db: Session, user_id: int, value, logged_at: datetime | None = None) -> WeightLog:
        logged_at = logged_at or datetime.now()
        log_day = logged_at.date()
        now = datetime.utcnow()

        insert = _UPSERT_INSERTS.get(db.get_bind().dialect.name)
        if insert is not None:
            stmt = insert(WeightLog).values(
                user_id=user_id,
                weight=value,
                date=logged_at,
                log_day=log_day,
                created_at=now,
                updated_at=now,
            )
            stmt = stmt.on_conflict_do_update(
                index_elements=["user_id", "log_day"],
                set_={"weight": stmt.excluded.weight, "updated_at": stmt.excluded.updated_at},
            )
            db.execute(stmt)
            db.commit()
        else:
            self._locked_upsert(db, user_id, value, logged_at, log_day, now)

        log = self._owned(db, user_id).filter(WeightLog.log_day == log_day).one()
        logger.info(
            "User %s logged weight id=%s weight=%s for %s",
            user_id,
            log.id,
            log.weight,
            log_day.isoformat(),
        )
        return log

    def _find_day(self, db: Session, user_id: int, log_day):
        return (
            self._owned(db, user_id)
            .filter(WeightLog.log_day == log_day)
            .with_for_update()
            .first()
        )

    def _locked_upsert(self, db: Session, user_id: int, value, logged_at: datetime, log_day, now: datetime) -> None:
        existing = self._find_day(db, user_id, log_day)
        if existing is None:
            db.add(
                WeightLog(
                    user_id=user_id,
                    weight=value,
                    date=logged_at,
                    log_day=log_day,
                    created_at=now,
                    updated_at=now,
                )
            )
            try:
                db.commit()
                return
            except IntegrityError:
                # Another request inserted the day's row first; overwrite it instead.
                db.rollback()
                existing = self._find_day(db, user_id, log_day)

        existing.weight = value
        existing.updated_at = now
        db.commit()


weight_logs = WeightLogStore(WeightLog, "weight")
