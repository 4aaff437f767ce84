from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from fittrack.database import get_db
from fittrack.models.user import User
from fittrack.schemas.logs import ActivityLogResponse, CalorieLogResponse, WeightLogResponse
from fittrack.services.auth_middleware import get_current_user
from fittrack.services.log_store import activity_logs, calorie_logs
from fittrack.services.weight_service import weight_logs
from fittrack.utils.response import create_response, handle_exception

router = APIRouter(prefix="/api/logs", tags=["Logs"])


@router.get("")
def list_all_logs(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Every log kind for the calendar view, each newest first."""
    try:
        return create_response(
            message="Logs fetched",
            data={
                "calorie_logs": [
                    CalorieLogResponse.model_validate(log).model_dump()
                    for log in calorie_logs.list(db, current_user.id)
                ],
                "weight_logs": [
                    WeightLogResponse.model_validate(log).model_dump()
                    for log in weight_logs.list(db, current_user.id)
                ],
                "activity_logs": [
                    ActivityLogResponse.model_validate(log).model_dump()
                    for log in activity_logs.list(db, current_user.id)
                ],
            },
            status_code=status.HTTP_200_OK,
        )
    except Exception as exc:
        return handle_exception(exc, fallback_message="Failed to fetch logs")
