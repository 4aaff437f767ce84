from datetime import datetime, timezone

from fastapi import APIRouter, status

from fittrack.database import check_database_health
from fittrack.utils.response import create_response

router = APIRouter(prefix="/api/health", tags=["Health"])


@router.get("")
def health_check():
    database = check_database_health()
    healthy = database["connected"]
    return create_response(
        message="ok" if healthy else "Database unavailable",
        data={
            "status": "ok" if healthy else "error",
            "database": database,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
    )
