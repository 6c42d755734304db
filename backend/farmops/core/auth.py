# backend/farmops/core/auth.py

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Depends, Header, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

from farmops.core.config import settings
from farmops.models.enums import Role

security = HTTPBearer(auto_error=False)


class CurrentUser(BaseModel):
    id: str
    email: str
    role: Role


# ------------------------------------------------
# TOKEN CREATION / DECODING
# ------------------------------------------------
def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    expires_delta = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode["exp"] = datetime.now(timezone.utc) + expires_delta
    return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> CurrentUser:
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token expired")
    except jwt.PyJWTError:
        raise HTTPException(status_code=401, detail="Invalid token")

    try:
        return CurrentUser(id=payload["id"], email=payload["email"], role=payload["role"])
    except (KeyError, ValueError):
        raise HTTPException(status_code=401, detail="Invalid token")


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> CurrentUser:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise HTTPException(status_code=401, detail="No token provided")
    return decode_token(credentials.credentials)


# ------------------------------------------------
# ROLE GUARDS
# ------------------------------------------------
def require_roles(*allowed_roles: Role):
    """
    Dependency factory that only lets the listed roles through.
    """

    async def wrapper(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if user.role not in allowed_roles:
            raise HTTPException(403, "Insufficient permissions")
        return user

    return wrapper


async def require_internal_token(x_internal_token: Optional[str] = Header(None)) -> None:
    if not settings.INTERNAL_API_TOKEN or x_internal_token != settings.INTERNAL_API_TOKEN:
        raise HTTPException(status_code=401, detail="Invalid internal token")
