from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from fittrack.database import get_db
from fittrack.models.user import User
from fittrack.schemas.user import ProfileResponse, ProfileUpdate
from fittrack.services.auth_middleware import get_current_user
from fittrack.utils.response import create_response, handle_exception

router = APIRouter(prefix="/api/user", tags=["User"])


@router.get("")
def get_profile(current_user: User = Depends(get_current_user)):
    try:
        return create_response(
            message="Profile fetched successfully",
            data=ProfileResponse.model_validate(current_user).model_dump(),
            status_code=status.HTTP_200_OK,
        )
    except Exception as exc:
        return handle_exception(exc)


@router.put("")
def update_profile(
    update: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        update_data = update.model_dump(exclude_unset=True, mode="json")
        for field, value in update_data.items():
            if field == "name" and value is None:
                continue
            setattr(current_user, field, value)

        db.commit()
        db.refresh(current_user)

        return create_response(
            message="Profile updated successfully",
            data=ProfileResponse.model_validate(current_user).model_dump(),
            status_code=status.HTTP_200_OK,
        )
    except Exception as exc:
        return handle_exception(exc, fallback_message="Failed to update profile")
