from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from fittrack.database import get_db
from fittrack.models.user import User
from fittrack.schemas.logs import WeightLogCreate, WeightLogResponse, WeightLogUpdate
from fittrack.services.auth_middleware import get_current_user
from fittrack.services.weight_service import weight_logs
from fittrack.utils.response import create_response, handle_exception

router = APIRouter(prefix="/api/weight-log", tags=["Weight Log"])


def _payload(log) -> dict:
    return WeightLogResponse.model_validate(log).model_dump()


@router.get("")
def list_weight_logs(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        logs = weight_logs.list(db, current_user.id)
        return create_response(
            message="Weight logs fetched",
            data=[_payload(log) for log in logs],
            status_code=status.HTTP_200_OK,
        )
    except Exception as exc:
        return handle_exception(exc, fallback_message="Failed to fetch weight logs")


@router.post("")
def create_weight_log(
    body: WeightLogCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        log = weight_logs.create(db, current_user.id, body.weight, body.date)
        return create_response(
            message="Weight logged successfully",
            data=_payload(log),
            status_code=status.HTTP_201_CREATED,
        )
    except Exception as exc:
        return handle_exception(exc, fallback_message="Failed to create weight log")


@router.put("/{log_id}")
def update_weight_log(
    log_id: int,
    body: WeightLogUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        log = weight_logs.update(db, current_user.id, log_id, body.weight)
        return create_response(
            message="Weight log updated",
            data=_payload(log),
            status_code=status.HTTP_200_OK,
        )
    except Exception as exc:
        return handle_exception(exc, fallback_message="Failed to update weight log")


@router.delete("/{log_id}")
def delete_weight_log(
    log_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        weight_logs.delete(db, current_user.id, log_id)
        return create_response(
            message="Weight log deleted successfully",
            data={"id": log_id},
            status_code=status.HTTP_200_OK,
        )
    except Exception as exc:
        return handle_exception(exc, fallback_message="Failed to delete weight log")
