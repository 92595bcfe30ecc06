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
Custom exception classes for podhost.

Services never raise these across their public boundary; they are raised by
the lower layers (record stores, token service) and converted to result
models by the services. Catching PodhostError lets callers handle
application errors without catching system exceptions like
KeyboardInterrupt or SystemExit.

Example:
    try:
        payload = token_service.verify(token)
    except InvalidTokenError as e:
        logger.debug(f"Rejected token: {e}")
"""


class PodhostError(Exception):
    """
    Base exception for all podhost errors.

    Attributes:
        message: Human-readable error message
        context: Optional dict of additional error context (entity, criteria, etc.)

    Example:
        raise PodhostError("Failed to load podcast", podcast_id=3)
    """

    def __init__(self, message: str, **context):
        super().__init__(message)
        self.message = message
        self.context = context if context else {}

    def __str__(self):
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message

    def __repr__(self):
        if self.context:
            return f"{type(self).__name__}(message={self.message!r}, context={self.context!r})"
        return f"{type(self).__name__}(message={self.message!r})"


class RecordNotFoundError(PodhostError):
    """
    Raised by RecordStore.find_one_or_fail when no record matches.

    Example:
        raise RecordNotFoundError("No User matches criteria", criteria={"id": 7})
    """

    pass


class InvalidTokenError(PodhostError):
    """Raised by TokenService.verify when a token's signature or format is wrong."""

    pass


__all__ = ["PodhostError", "RecordNotFoundError", "InvalidTokenError"]
