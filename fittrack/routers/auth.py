import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from fittrack.config import settings
from fittrack.database import get_db
from fittrack.schemas.auth import LoginRequest, RegisterRequest
from fittrack.schemas.user import ProfileResponse
from fittrack.services.auth_service import authenticate_user, create_access_token, register_user
from fittrack.utils.response import create_response, handle_exception

router = APIRouter(prefix="/api/auth", tags=["Auth"])
logger = logging.getLogger(__name__)


def _set_auth_cookie(response: JSONResponse, token: str, max_age: int) -> None:
    response.set_cookie(
        settings.AUTH_COOKIE_NAME,
        token,
        max_age=max_age,
        path="/",
        secure=settings.COOKIE_SECURE,
        httponly=True,
        samesite="lax",
    )


@router.post("/register")
def register(body: RegisterRequest, db: Session = Depends(get_db)):
    try:
        user = register_user(db, body.name, body.email, body.password)
        return create_response(
            message="User registered successfully",
            data=ProfileResponse.model_validate(user).model_dump(),
            status_code=status.HTTP_201_CREATED,
        )
    except Exception as exc:
        return handle_exception(exc, fallback_message="Failed to create user")


@router.post("/login")
def login(body: LoginRequest, db: Session = Depends(get_db)):
    try:
        user = authenticate_user(db, body.email, body.password)
        token = create_access_token(user)
        logger.info("User %s logged in", user.id)

        response = create_response(
            message="Login successful",
            data={"user": ProfileResponse.model_validate(user).model_dump()},
            status_code=status.HTTP_200_OK,
        )
        _set_auth_cookie(response, token, settings.cookie_max_age)
        return response
    except Exception as exc:
        return handle_exception(exc, fallback_message="Login failed")


@router.post("/logout")
def logout():
    response = create_response(
        message="Logged out successfully",
        data=None,
        status_code=status.HTTP_200_OK,
    )
    _set_auth_cookie(response, "", 0)
    return response
