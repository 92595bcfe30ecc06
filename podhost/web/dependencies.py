# Copyright 2025 podhost
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
FastAPI dependency injection for the podhost web server.

Usage:
    from fastapi import Depends
    from podhost.web.dependencies import AppState, get_app_state, require_role

    @router.post("/podcasts", dependencies=[Depends(require_role(UserRole.HOST))])
    def create_podcast(body: CreatePodcastInput, state: AppState = Depends(get_app_state)):
        return state.podcast_service.create_podcast(body.title, body.category)
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional

from fastapi import Depends, HTTPException, Request

from ..logging import get_logger
from ..models.user import User, UserRole

if TYPE_CHECKING:
    from ..services import PodcastService, UserService

logger = get_logger(__name__)

# Header carrying the login token
TOKEN_HEADER = "x-jwt"


@dataclass
class AppState:
    """
    Application state container for dependency injection.

    Attributes:
        user_service: User account service
        podcast_service: Podcast and episode service
    """

    user_service: "UserService"
    podcast_service: "PodcastService"


def get_app_state(request: Request) -> AppState:
    """FastAPI dependency returning the AppState stored on the application."""
    return request.app.state.app_state


def _get_token_from_request(request: Request) -> Optional[str]:
    """Extract the token from the x-jwt header, falling back to Authorization: Bearer."""
    token = request.headers.get(TOKEN_HEADER)
    if token:
        return token

    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        return auth_header[7:]

    return None


def get_current_user(request: Request, state: AppState = Depends(get_app_state)) -> Optional[User]:
    """
    FastAPI dependency to get the current user (optional).

    Returns:
        User if the request carries a valid token for an existing user, None otherwise
    """
    token = _get_token_from_request(request)
    if not token:
        return None

    user = state.user_service.get_user_from_token(token)
    if user is not None:
        # Picked up by LoggingMiddleware for the request completion line
        request.state.user_id = user.id
    return user


def require_auth(user: Optional[User] = Depends(get_current_user)) -> User:
    """
    FastAPI dependency that requires authentication.

    Raises:
        HTTPException: 401 if the request is not authenticated
    """
    if not user:
        raise HTTPException(
            status_code=401,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def require_role(*roles: UserRole) -> Callable[..., User]:
    """
    Dependency factory restricting a route to users with one of the given roles.

    Raises:
        HTTPException: 401 if not authenticated, 403 if the role is not allowed
    """

    def _role_dependency(user: User = Depends(require_auth)) -> User:
        if user.role not in roles:
            logger.warning("role_rejected", user_id=user.id, role=user.role.value)
            raise HTTPException(status_code=403, detail="Insufficient permissions")
        return user

    return _role_dependency
