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
User account routes.

Routes:
- POST /users - Create an account
- POST /users/login - Log in and receive a token
- GET /users/me - Current user
- PATCH /users/me - Edit the current user's profile (only Hosts may change a role)
- GET /users/{user_id} - See another user's profile

Bodies are the service result models: domain failures come back with
``ok: false`` and an ``error`` message, not as HTTP errors.
"""

from fastapi import APIRouter, Depends, HTTPException

from ...models.results import UserOutput
from ...models.user import CreateAccountInput, EditProfileInput, LoginInput, User, UserRole
from ..dependencies import AppState, get_app_state, require_auth

router = APIRouter()


@router.post("")
def create_account(body: CreateAccountInput, state: AppState = Depends(get_app_state)):
    return state.user_service.create_account(body.email, body.password, body.role)


@router.post("/login")
def login(body: LoginInput, state: AppState = Depends(get_app_state)):
    return state.user_service.login(body.email, body.password)


@router.get("/me")
def me(user: User = Depends(require_auth)):
    return UserOutput(user=user)


@router.patch("/me")
def edit_profile(
    body: EditProfileInput,
    user: User = Depends(require_auth),
    state: AppState = Depends(get_app_state),
):
    if body.role is not None and body.role != user.role and user.role != UserRole.HOST:
        raise HTTPException(status_code=403, detail="Insufficient permissions")
    return state.user_service.edit_profile(user.id, body)


@router.get("/{user_id}", dependencies=[Depends(require_auth)])
def user_profile(user_id: int, state: AppState = Depends(get_app_state)):
    return state.user_service.find_by_id(user_id)
