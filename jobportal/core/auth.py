"""
Authentication dependencies for protected routes.

The token is read from the Authorization header (Bearer) or, failing
that, from the "token" cookie set at login. Routes receive either the
full user document or an Actor {actor_id, role}; services only ever see
the Actor.
"""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from jobportal.api.deps import get_user_store
from jobportal.core.actor import Actor
from jobportal.core.errors import Unauthorized
from jobportal.core.security import decode_token
from jobportal.services.mongo_service import UserStore

# Bearer token extractor (cookie is the fallback)
bearer_scheme = HTTPBearer(auto_error=False)

TOKEN_COOKIE = "token"


def _extract_token(request: Request, credentials: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    if credentials and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(TOKEN_COOKIE)


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    users: UserStore = Depends(get_user_store),
) -> dict:
    """
    FastAPI dependency - Get current authenticated user document.

    Usage:
        @router.get("/protected")
        def route(user: dict = Depends(get_current_user)):
            return user
    """
    token = _extract_token(request, credentials)
    if not token:
        raise Unauthorized("User Not Authorized")

    payload = decode_token(token)
    user_id = payload.get("sub")
    if not user_id:
        raise Unauthorized("User Not Authorized")

    user = users.find_by_id(user_id)
    if not user:
        raise Unauthorized("User Not Authorized")
    return user


def get_actor(user: dict = Depends(get_current_user)) -> Actor:
    """Dependency - the acting identity and role, nothing else."""
    return Actor(actor_id=user["_id"], role=user["role"])
