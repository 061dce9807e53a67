"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from activity_trail.infrastructure.security import decode_access_token

# Tokens are issued by the application's authentication service.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")


def resolve_actor_id(token: str) -> str:
    """Return the user id carried by ``token``."""

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc

    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return subject.strip()


def get_current_actor_id(token: str = Depends(oauth2_scheme)) -> str:
    """Return the id of the authenticated user performing the request."""

    return resolve_actor_id(token)
