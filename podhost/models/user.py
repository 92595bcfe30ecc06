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

"""User account models and JWT payload."""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class UserRole(str, Enum):
    """
    Account role.

    Hosts publish and manage podcasts; listeners only read them.
    """

    HOST = "Host"
    LISTENER = "Listener"


class User(BaseModel):
    """
    User account.

    Attributes:
        id: Store-assigned identifier (None until saved)
        email: Email address, unique across all users
        password: One-way password hash. Stores leave it unset unless the
            caller selects it explicitly, and it is never serialized.
        role: Account role
        created_at: When the account was created
        updated_at: When the account was last saved
    """

    id: Optional[int] = None
    email: str
    password: Optional[str] = Field(default=None, exclude=True)
    role: UserRole = UserRole.LISTENER
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class TokenPayload(BaseModel):
    """
    Decoded token claims.

    Attributes:
        id: Subject - the user ID
        iat: Issued at time
    """

    id: int
    iat: datetime


class CreateAccountInput(BaseModel):
    email: str
    password: str
    role: UserRole


class LoginInput(BaseModel):
    email: str
    password: str


class EditProfileInput(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[UserRole] = None
