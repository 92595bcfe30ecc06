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
Password hashing capability.

Services depend on the PasswordHasher interface rather than on a specific
algorithm. The default implementation uses passlib's bcrypt scheme.
"""

from abc import ABC, abstractmethod
from typing import Optional

from passlib.context import CryptContext


class PasswordHasher(ABC):
    """One-way password hashing and verification."""

    @abstractmethod
    def hash(self, plaintext: str) -> str:
        """
        Hash a plaintext password.

        Args:
            plaintext: Password as entered by the user

        Returns:
            Hash string suitable for storage
        """
        pass

    @abstractmethod
    def matches(self, plaintext: str, hashed: Optional[str]) -> bool:
        """
        Check a plaintext password against a stored hash.

        Args:
            plaintext: Password as entered by the user
            hashed: Stored hash (None when the account has no password)

        Returns:
            True if the password matches, False otherwise
        """
        pass


class BcryptPasswordHasher(PasswordHasher):
    """bcrypt via passlib's CryptContext."""

    def __init__(self, rounds: int = 12):
        self._context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    def hash(self, plaintext: str) -> str:
        return self._context.hash(plaintext)

    def matches(self, plaintext: str, hashed: Optional[str]) -> bool:
        if not hashed:
            return False
        return self._context.verify(plaintext, hashed)
