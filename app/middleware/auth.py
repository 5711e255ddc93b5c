"""JWT authentication for FastAPI.

Sessions are issued by the auth provider; this module only verifies the
bearer token and trusts its ``sub`` claim as the user id.
"""
from fastapi import HTTPException, Depends, status, Request
from jose import jwt, JWTError
from pydantic import BaseModel
from sqlmodel import Session
from typing import Optional

from app.config import BETTER_AUTH_SECRET, JWT_ALGORITHM
from app.db.config import get_session
from app.services.user_service import ensure_user


class CurrentUser(BaseModel):
    """User information extracted from JWT."""
    user_id: str
    email: Optional[str] = None
    name: Optional[str] = None


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(request: Request) -> CurrentUser:
    """
    Validate JWT token from Authorization header and extract user information.

    Args:
        request: FastAPI request object to extract Authorization header

    Returns:
        CurrentUser with user_id, email and name from token

    Raises:
        HTTPException: If token is missing, invalid or expired
    """
    auth_header = request.headers.get("authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        raise _unauthorized("Missing or invalid Authorization header")

    token = auth_header[7:]  # Remove "Bearer " prefix

    try:
        payload = jwt.decode(token, BETTER_AUTH_SECRET, algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise _unauthorized("Token has expired")
    except JWTError as e:
        raise _unauthorized(f"Invalid token: {str(e)}")

    user_id = payload.get("sub")
    if not user_id:
        raise _unauthorized("Invalid token: missing user ID")

    return CurrentUser(
        user_id=user_id,
        email=payload.get("email"),
        name=payload.get("name"),
    )


def require_user_id(
    current_user: CurrentUser = Depends(get_current_user),
    session: Session = Depends(get_session),
) -> str:
    """Authenticated user id, with the user row guaranteed to exist."""
    ensure_user(session, current_user.user_id, current_user.email, current_user.name)
    return current_user.user_id
