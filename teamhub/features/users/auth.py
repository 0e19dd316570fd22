"""
Bearer token verification.
"""
import jwt
from fastapi import HTTPException, status

from teamhub.core import config


def verify_jwt_token(token: str) -> dict:
    """
    Verify a bearer JWT and return its payload.

    The signature is checked with JWT_SECRET when one is configured; without
    a secret the token is trusted as issued by the fronting identity proxy
    and only its expiry is checked.

    Raises:
        HTTPException: 401 if the token is invalid or expired
    """
    try:
        if config.JWT_SECRET:
            return jwt.decode(token, config.JWT_SECRET, algorithms=[config.JWT_ALGORITHM])
        return jwt.decode(
            token,
            options={"verify_signature": False, "verify_exp": True}
        )
    except jwt.ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except jwt.InvalidTokenError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid token: {str(e)}",
            headers={"WWW-Authenticate": "Bearer"},
        )
