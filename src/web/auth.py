"""JWT validation dependency for FastAPI."""

import os
from pathlib import Path

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from web.deps import get_db_path
from web.user_store import get_or_create_user

ALGORITHM = "HS256"

security = HTTPBearer(auto_error=False)


def _get_jwt_secret() -> str:
    secret = os.getenv("JWT_SECRET")
    if not secret:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="JWT_SECRET not configured",
        )
    return secret


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db_path: Path = Depends(get_db_path),
) -> dict:
    """Decode the bearer JWT and auto-register its subject on first use."""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authorized, no token",
        )
    try:
        payload = jwt.decode(credentials.credentials, _get_jwt_secret(), algorithms=[ALGORITHM])
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )
    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token: missing sub",
        )
    get_or_create_user(
        user_id, email=payload.get("email"), name=payload.get("name"), db_path=db_path
    )
    return {"id": user_id, "email": payload.get("email"), "name": payload.get("name")}
