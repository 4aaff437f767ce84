from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from fittrack.database import get_db
from fittrack.models.user import User
from fittrack.schemas.logs import CalorieLogCreate, CalorieLogResponse, CalorieLogUpdate
from fittrack.services.auth_middleware import get_current_user
from fittrack.services.log_store import calorie_logs
from fittrack.utils.response import create_response, handle_exception

router = APIRouter(prefix="/api/calorie-log", tags=["Calorie Log"])


def _payload(log) -> dict:
    return CalorieLogResponse.model_validate(log).model_dump()


@router.get("")
def list_calorie_logs(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        logs = calorie_logs.list(db, current_user.id)
        return create_response(
            message="Calorie logs fetched",
            data=[_payload(log) for log in logs],
            status_code=status.HTTP_200_OK,
        )
    except Exception as exc:
        return handle_exception(exc, fallback_message="Failed to fetch calorie logs")


@router.post("")
def create_calorie_log(
    body: CalorieLogCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        log = calorie_logs.create(db, current_user.id, body.calories, body.date)
        return create_response(
            message="Calorie log created",
            data=_payload(log),
            status_code=status.HTTP_201_CREATED,
        )
    except Exception as exc:
        return handle_exception(exc, fallback_message="Failed to create calorie log")


@router.put("/{log_id}")
def update_calorie_log(
    log_id: int,
    body: CalorieLogUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        log = calorie_logs.update(db, current_user.id, log_id, body.calories)
        return create_response(
            message="Calorie log updated",
            data=_payload(log),
            status_code=status.HTTP_200_OK,
        )
    except Exception as exc:
        return handle_exception(exc, fallback_message="Failed to update calorie log")


@router.delete("/{log_id}")
def delete_calorie_log(
    log_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        calorie_logs.delete(db, current_user.id, log_id)
        return create_response(
            message="Calorie log deleted successfully",
            data={"id": log_id},
            status_code=status.HTTP_200_OK,
        )
    except Exception as exc:
        return handle_exception(exc, fallback_message="Failed to delete calorie log")
