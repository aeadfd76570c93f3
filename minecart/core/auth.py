"""Auth utilities and dependencies for FastAPI.

- security: HTTPBearer instance
- require_auth(): dependency that validates Authorization header against
  MINECART_API_TOKEN when it is set (presence only otherwise)
"""
import hmac
import os

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

security = HTTPBearer()


def require_auth(credentials: HTTPAuthorizationCredentials = Depends(security)) -> str:
    if not credentials or not credentials.credentials:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing auth")
    expected = os.getenv("MINECART_API_TOKEN")
    if expected and not hmac.compare_digest(credentials.credentials, expected):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    return credentials.credentials
