"""
Pipeline authentication using Bearer token.

Guards the trigger endpoints used by the scheduler and operators.
"""

from fastapi import HTTPException, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from core.settings import get_settings

security = HTTPBearer()


def verify_pipeline_token(
    credentials: HTTPAuthorizationCredentials = Security(security),
) -> str:
    """
    Verify the bearer token matches PIPELINE_API_TOKEN.

    Raises:
        HTTPException: 500 if no token is configured, 401 if it does not match
    """
    expected = get_settings().pipeline_api_token
    if expected is None or not expected.get_secret_value():
        raise HTTPException(
            status_code=500,
            detail="Server misconfigured: PIPELINE_API_TOKEN not set",
        )

    if credentials.credentials != expected.get_secret_value():
        raise HTTPException(
            status_code=401,
            detail="Invalid pipeline authentication token",
        )

    return credentials.credentials
