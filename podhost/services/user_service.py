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
User service - account creation, login and profile management.

Every public method returns a result model and never raises: store and
signer errors are logged and reported with the operation's generic message.
"""

import logging
from typing import Optional, Union

from ..models.results import (
    ACCOUNT_CREATION_FAILED,
    DUPLICATE_ACCOUNT,
    LOGIN_FAILED,
    PROFILE_UPDATE_FAILED,
    USER_NOT_FOUND,
    USER_NOT_FOUND_BY_ID,
    WRONG_PASSWORD,
    Failure,
    Success,
    TokenOutput,
    UserOutput,
)
from ..models.user import EditProfileInput, User, UserRole
from ..repositories.record_store import UserStore
from ..utils.exceptions import InvalidTokenError
from ..utils.passwords import PasswordHasher
from .token_service import TokenService

logger = logging.getLogger(__name__)

# Fields loaded for login; the password hash is hidden unless selected
LOGIN_FIELDS = ["id", "email", "password", "role"]


class UserService:
    """
    Service for user accounts.

    Attributes:
        user_store: Record store for users
        token_service: Signs login tokens
        password_hasher: Hashes and checks passwords
    """

    def __init__(self, user_store: UserStore, token_service: TokenService, password_hasher: PasswordHasher) -> None:
        self.user_store = user_store
        self.token_service = token_service
        self.password_hasher = password_hasher

    def create_account(self, email: str, password: str, role: UserRole) -> Union[Success, Failure]:
        """
        Create an account unless the email is already taken.

        Args:
            email: Email address (must be unused)
            password: Plaintext password, stored hashed
            role: Account role

        Returns:
            Success, or Failure with the duplicate-account or creation message
        """
        try:
            if self.user_store.find_one({"email": email}) is not None:
                logger.info(f"Account creation rejected, email in use: {email}")
                return Failure(error=DUPLICATE_ACCOUNT)

            user = self.user_store.create(email=email, password=self.password_hasher.hash(password), role=role)
            self.user_store.save(user)
            logger.info(f"Created account: {email}")
            return Success()
        except Exception:
            logger.exception(f"Could not create account for {email}")
            return Failure(error=ACCOUNT_CREATION_FAILED)

    def login(self, email: str, password: str) -> Union[TokenOutput, Failure]:
        """
        Check credentials and issue a token signed for the user's id.

        Returns:
            TokenOutput, or Failure (user not found, wrong password, or a
            generic login failure when a dependency errors)
        """
        try:
            user = self.user_store.find_one({"email": email}, select=LOGIN_FIELDS)
            if user is None:
                return Failure(error=USER_NOT_FOUND)

            if not self.password_hasher.matches(password, user.password):
                logger.info(f"Wrong password for {email}")
                return Failure(error=WRONG_PASSWORD)

            return TokenOutput(token=self.token_service.sign(user.id))
        except Exception:
            logger.exception(f"Login failed for {email}")
            return Failure(error=LOGIN_FAILED)

    def find_by_id(self, user_id: int) -> Union[UserOutput, Failure]:
        """Get a user by id. A missing user and a lookup error look the same to the caller."""
        try:
            return UserOutput(user=self.user_store.find_one_or_fail({"id": user_id}))
        except Exception as e:
            logger.debug(f"User lookup failed for {user_id}: {e}")
            return Failure(error=USER_NOT_FOUND_BY_ID)

    def edit_profile(self, user_id: int, updates: EditProfileInput) -> Union[Success, Failure]:
        """
        Merge profile changes over the current user and save.

        A new password is hashed before saving. Changing only the email keeps
        the stored hash untouched.

        Args:
            user_id: User to edit
            updates: Fields to change; unset fields are left alone

        Returns:
            Success, or Failure with the profile-update message
        """
        try:
            user = self.user_store.find_one({"id": user_id})
            if user is None:
                logger.warning(f"Profile update for unknown user: {user_id}")
                return Failure(error=PROFILE_UPDATE_FAILED)

            changes = updates.model_dump(exclude_unset=True, exclude_none=True)
            if "password" in changes:
                changes["password"] = self.password_hasher.hash(changes["password"])

            self.user_store.save(user.model_copy(update=changes))
            logger.info(f"Updated profile for user {user_id}: {sorted(changes)}")
            return Success()
        except Exception:
            logger.exception(f"Could not update profile for user {user_id}")
            return Failure(error=PROFILE_UPDATE_FAILED)

    def get_user_from_token(self, token: str) -> Optional[User]:
        """
        Resolve the user a token was issued for.

        Returns:
            User if the token is valid and the user exists, None otherwise
        """
        try:
            payload = self.token_service.get_payload(token)
        except InvalidTokenError as e:
            logger.debug(f"Rejected token: {e}")
            return None

        result = self.find_by_id(payload.id)
        return result.user if result.ok else None
