"""FastAPI dependencies for authentication.

Tokens are issued by the external identity provider; we only verify them
and map the subject onto our local User row.
"""

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from salonbook.core.config import settings
from salonbook.core.database import get_db
from salonbook.core.errors import AuthorizationError, NotFoundError
from salonbook.models.user import User

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def decode_token(token: str) -> Optional[dict]:
    """Verify a provider-issued JWT and return its claims, or None."""
    options = {"verify_aud": bool(settings.JWT_AUDIENCE)}
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            audience=settings.JWT_AUDIENCE or None,
            options=options,
        )
    except JWTError as e:
        logger.warning("JWT decode error: %s", e)
        return None


async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> str:
    """The identity provider's user id for this request; 401 when absent."""
    if credentials is None:
        raise AuthorizationError("Unauthorized")

    payload = decode_token(credentials.credentials)
    if payload is None:
        raise AuthorizationError("Invalid authentication credentials")

    subject = payload.get("sub")
    if not subject:
        raise AuthorizationError("Invalid token payload")
    return str(subject)


async def get_current_user(
    external_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Local User for the authenticated subject."""
    result = await db.execute(select(User).where(User.external_id == external_id))
    user = result.scalar_one_or_none()
    if user is None:
        raise NotFoundError("User not found")
    return user
