import hmac
import logging

from fastapi import APIRouter, HTTPException, status

from mindconnect.auth import jwt_handler
from mindconnect.core import config
from mindconnect.core.schemas import CamelModel

router = APIRouter(tags=['auth'])

logger = logging.getLogger(__name__)

ADMIN_SUBJECT = "admin"


class AdminLoginRequest(CamelModel):
    password: str


class TokenResponse(CamelModel):
    access_token: str
    token_type: str = "bearer"


@router.post("/login", response_model=TokenResponse)
def admin_login(data: AdminLoginRequest):
    if not hmac.compare_digest(data.password.encode("utf-8"), config.ADMIN_PASSWORD.encode("utf-8")):
        logger.warning("Rejected admin login attempt")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="The password you entered is incorrect",
        )

    token = jwt_handler.create_access_token(ADMIN_SUBJECT, role=jwt_handler.ADMIN_ROLE)
    return TokenResponse(access_token=token)
