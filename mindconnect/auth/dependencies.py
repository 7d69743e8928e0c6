import jwt
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from mindconnect.auth import jwt_handler
from mindconnect.core import config

security = HTTPBearer(auto_error=False)


def require_admin(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> dict | None:
    """Admin gate for management routes, active only when ADMIN_AUTH_REQUIRED is set."""
    if not config.ADMIN_AUTH_REQUIRED:
        return None

    if credentials is None:
        raise HTTPException(status_code=401, detail="Admin authentication required")

    try:
        payload = jwt_handler.decode_access_token(credentials.credentials)
    except jwt.PyJWTError as exc:
        raise HTTPException(status_code=401, detail="Invalid token") from exc

    if payload.get("role") != jwt_handler.ADMIN_ROLE:
        raise HTTPException(status_code=401, detail="Admin role required")
    return payload
