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
Token service - issues and verifies signed tokens carrying a subject id.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict

import jwt
from pydantic import ValidationError

from ..models.user import TokenPayload
from ..utils.exceptions import InvalidTokenError
from ..utils.jwt import create_access_token, decode_token

logger = logging.getLogger(__name__)


class TokenService:
    """
    Signs and verifies JWTs with a single private key.

    Tokens embed the issue time, so signing the same subject twice need not
    produce the same string; ``verify(sign(id))`` always recovers ``id``.
    """

    def __init__(self, private_key: str, algorithm: str = "HS256"):
        """
        Initialize the token service.

        Args:
            private_key: Secret used to sign and verify tokens
            algorithm: JWT signing algorithm
        """
        if not private_key:
            raise ValueError("TokenService requires a private signing key")

        self.private_key = private_key
        self.algorithm = algorithm

    def sign(self, subject_id: int) -> str:
        """
        Create a token for a subject.

        Args:
            subject_id: Identifier to embed (the user ID)

        Returns:
            Signed token string
        """
        return create_access_token(subject_id, self.private_key, self.algorithm)

    def verify(self, token: str) -> Dict[str, Any]:
        """
        Verify a token and return its claims.

        Args:
            token: Token produced by sign()

        Returns:
            Decoded claims, containing at least ``id``

        Raises:
            InvalidTokenError: If the signature or format is wrong
        """
        try:
            return decode_token(token, self.private_key, self.algorithm)
        except jwt.InvalidTokenError as e:
            logger.debug(f"Token rejected: {e}")
            raise InvalidTokenError("Invalid token", reason=str(e)) from e

    def get_payload(self, token: str) -> TokenPayload:
        """Verify a token and return its claims as a TokenPayload."""
        claims = self.verify(token)
        try:
            return TokenPayload(
                id=claims["id"],
                iat=datetime.fromtimestamp(claims.get("iat", 0), tz=timezone.utc),
            )
        except ValidationError as e:
            raise InvalidTokenError("Malformed token claims", reason=str(e)) from e
