import hmac
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from src.config import config
from src.utils.logger import setup_logger

logger = setup_logger(__name__)

security = HTTPBearer(description="Admin secret", auto_error=False)


def verify_admin_secret(credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)]) -> None:
    """Allow the request only if it carries the configured ADMIN_SECRET as bearer token."""
    if (
        credentials is None
        or not config.ADMIN_SECRET
        or not hmac.compare_digest(credentials.credentials.encode(), config.ADMIN_SECRET.encode())
    ):
        logger.warning("Rejected admin request: invalid credentials")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
