"""Identity gate dependencies. Routes receive the caller's user id explicitly."""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel import Session

from app.core.database import get_session
from app.core.errors import AdminRequired, Unauthenticated
from app.core.security import decode_access_token
from app.models.user import User

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> int:
    # HTTPBearer yields None for a missing header or a non-Bearer scheme
    if credentials is None or not credentials.credentials:
        raise Unauthenticated()
    return decode_access_token(credentials.credentials)


def require_admin(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_session),
) -> int:
    user = db.get(User, user_id)
    if not user or not user.is_admin:
        raise AdminRequired()
    return user_id
