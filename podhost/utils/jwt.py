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
JWT utilities for token encoding and decoding.

Uses PyJWT. Tokens carry the subject under the ``id`` claim plus an ``iat``
timestamp; they do not expire.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict

import jwt

logger = logging.getLogger(__name__)


def create_access_token(subject_id: int, secret_key: str, algorithm: str = "HS256") -> str:
    """
    Create a signed JWT access token.

    Args:
        subject_id: The user's identifier
        secret_key: Secret key for signing the token
        algorithm: JWT signing algorithm (default: HS256)

    Returns:
        Encoded JWT token string
    """
    payload = {
        "id": subject_id,
        "iat": datetime.now(timezone.utc),
    }

    token = jwt.encode(payload, secret_key, algorithm=algorithm)
    logger.debug(f"Created access token for user {subject_id}")
    return token


def decode_token(token: str, secret_key: str, algorithm: str = "HS256") -> Dict[str, Any]:
    """
    Decode and validate a JWT token.

    Args:
        token: The JWT token string to decode
        secret_key: Secret key used for token verification
        algorithm: JWT signing algorithm (default: HS256)

    Returns:
        The decoded claims

    Raises:
        jwt.InvalidTokenError: If the signature or format is wrong, or the
            ``id`` claim is missing
    """
    return jwt.decode(token, secret_key, algorithms=[algorithm], options={"require": ["id"]})
