"""
Session and Admin-Permission Dependencies

require_admin is the single authorization gate for every /api/admin router.
It is attached once at router-include level in main.py; endpoints that need
the acting user depend on it again and get the cached result.
"""
import logging
from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from storefront_admin.database import get_db
from storefront_admin.utils.security import decode_token
from storefront_admin.models.user import User

logger = logging.getLogger(__name__)

http_bearer = HTTPBearer(auto_error=False)


def _user_from_token(token: str, db: Session) -> Optional[User]:
    payload = decode_token(token)
    if payload is None:
        return None
    user_id = payload.get("sub")
    if user_id is None:
        return None
    return db.query(User).filter(User.id == str(user_id)).first()


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(http_bearer),
    db: Session = Depends(get_db)
) -> User:
    """Verify the session and return its user"""
    if not credentials or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = _user_from_token(credentials.credentials, db)
    if user is None:
        logger.warning("Rejected request with invalid or expired token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is inactive"
        )

    return user


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(http_bearer),
    db: Session = Depends(get_db)
) -> Optional[User]:
    """Session user if one is present and valid, else None"""
    if not credentials or not credentials.credentials:
        return None
    user = _user_from_token(credentials.credentials, db)
    if user is None or not user.is_active:
        return None
    return user


async def require_admin(
    current_user: User = Depends(get_current_user)
) -> User:
    """Require the admin-permission flag"""
    if not current_user.is_admin:
        logger.warning(f"User {current_user.id} denied admin access")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required"
        )
    return current_user
