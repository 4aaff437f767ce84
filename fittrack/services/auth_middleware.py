import logging

from fastapi import Depends, HTTPException, Request, status
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from fittrack.config import settings
from fittrack.database import get_db
from fittrack.models.user import User

logger = logging.getLogger(__name__)


def resolve_session(token: str | None, db: Session) -> User | None:
    """Map a session token to the live user row, or None.

    The profile is always re-read from the database; claims other than the
    user id are not trusted.
    """
    if not token:
        return None
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.ALGORITHM])
    except JWTError as exc:
        logger.debug("Rejected session token: %s", exc)
        return None

    try:
        user_id = int(payload.get("userId"))
    except (TypeError, ValueError):
        return None

    return db.query(User).filter(User.id == user_id).first()


def get_token_from_request(request: Request) -> str | None:
    token = request.cookies.get(settings.AUTH_COOKIE_NAME)
    if token:
        return token
    auth = request.headers.get("authorization") or ""
    if auth.lower().startswith("bearer "):
        return auth.split(" ", 1)[1].strip() or None
    return None


def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    user = resolve_session(get_token_from_request(request), db)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return user
