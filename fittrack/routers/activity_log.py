from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from fittrack.database import get_db
from fittrack.models.user import User
from fittrack.schemas.logs import ActivityLogCreate, ActivityLogResponse, ActivityLogUpdate
from fittrack.services.auth_middleware import get_current_user
from fittrack.services.log_store import activity_logs
from fittrack.utils.response import create_response, handle_exception

router = APIRouter(prefix="/api/activity-log", tags=["Activity Log"])


def _payload(log) -> dict:
    return ActivityLogResponse.model_validate(log).model_dump()


@router.get("")
def list_activity_logs(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        logs = activity_logs.list(db, current_user.id)
        return create_response(
            message="Activity logs fetched",
            data=[_payload(log) for log in logs],
            status_code=status.HTTP_200_OK,
        )
    except Exception as exc:
        return handle_exception(exc, fallback_message="Failed to fetch activity logs")


@router.post("")
def create_activity_log(
    body: ActivityLogCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        log = activity_logs.create(db, current_user.id, body.activity, body.date)
        return create_response(
            message="Activity log created",
            data=_payload(log),
            status_code=status.HTTP_201_CREATED,
        )
    except Exception as exc:
        return handle_exception(exc, fallback_message="Failed to create activity log")


@router.put("/{log_id}")
def update_activity_log(
    log_id: int,
    body: ActivityLogUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        log = activity_logs.update(db, current_user.id, log_id, body.activity)
        return create_response(
            message="Activity log updated",
            data=_payload(log),
            status_code=status.HTTP_200_OK,
        )
    except Exception as exc:
        return handle_exception(exc, fallback_message="Failed to update activity log")


@router.delete("/{log_id}")
def delete_activity_log(
    log_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        activity_logs.delete(db, current_user.id, log_id)
        return create_response(
            message="Activity log deleted successfully",
            data={"id": log_id},
            status_code=status.HTTP_200_OK,
        )
    except Exception as exc:
        return handle_exception(exc, fallback_message="Failed to delete activity log")
