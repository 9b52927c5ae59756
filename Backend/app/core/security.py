import logging

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import UnauthorizedError
from app.models.user import User
from app.services.database import get_db
from app.services.entry_store import find_entry_with_id

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def decode_access_token(token: str) -> dict:
    """Verify the token signature and return its payload."""
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except jwt.PyJWTError as e:
        logger.warning(f"Rejected access token: {e}")
        raise UnauthorizedError("Could not validate credentials")


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db)
) -> User:
    """
    Dependency resolving the bearer token to a stored user.

    The token payload carries the user id under "id".
    """
    if credentials is None:
        raise UnauthorizedError()

    payload = decode_access_token(credentials.credentials)
    user_id = payload.get("id")
    if user_id is None:
        raise UnauthorizedError("Could not validate credentials")

    try:
        user_id = int(user_id)
    except (TypeError, ValueError):
        raise UnauthorizedError("Could not validate credentials")

    user = await find_entry_with_id(User, user_id, db)
    if user is None:
        raise UnauthorizedError("Unknown user")
    return user
