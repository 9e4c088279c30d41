"""Authenticated identity for API routes."""

from uuid import UUID

from fastapi import HTTPException, status

from intralink.domain.service import JWTService


def require_user_id(jwt_service: JWTService, auth_token: str | None) -> str:
    """User ID from the ``auth_token`` cookie.

    Raises:
        HTTPException: 401 if the cookie is missing, invalid or expired
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)
    try:
        # The claim must be a user UUID
        UUID(user_id or "")
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return user_id
