import logging

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from portfolio_api.database import get_db
from portfolio_api.models.user import User, UserRole
from portfolio_api.services.auth_service import decode_access_token
from portfolio_api.utils.exceptions import Forbidden, Unauthorized

logger = logging.getLogger(__name__)

# auto_error=False so a missing header is reported as 401, not 403.
bearer_scheme = HTTPBearer(auto_error=False)


def _resolve_user(token: str, db: Session) -> User:
    try:
        payload = decode_access_token(token)
    except JWTError:
        raise Unauthorized("Invalid or expired token")

    user_id = payload.get("sub")
    if not user_id or (payload.get("type") or "access") != "access":
        raise Unauthorized("Invalid token payload")

    try:
        user = db.query(User).filter(User.id == int(user_id)).first()
    except (TypeError, ValueError):
        raise Unauthorized("Invalid token payload")

    if not user:
        raise Unauthorized("User no longer exists")
    return user


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    if credentials is None or not credentials.credentials:
        raise Unauthorized("No token, authorization denied")
    return _resolve_user(credentials.credentials, db)


def get_current_admin(current_user: User = Depends(get_current_user)) -> User:
    if current_user.role != UserRole.admin.value:
        logger.warning("Non-admin user %s attempted an admin action", current_user.id)
        raise Forbidden("Admin access required")
    return current_user
