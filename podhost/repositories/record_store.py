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
Abstract record store interface.

A record store supplies the CRUD primitives the services need for one entity
type. Criteria are plain dicts of entity field names to values, matched with
equality, e.g. ``{"id": 3}`` or ``{"email": "a@b.c"}``.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel

from ..models.podcast import Episode, Podcast
from ..models.user import User
from ..utils.exceptions import RecordNotFoundError

T = TypeVar("T", bound=BaseModel)


class RecordStore(ABC, Generic[T]):
    """
    Abstract per-entity persistence.

    Implementations must provide thread-safe access to their records and
    return copies, so that mutating a returned entity has no effect until it
    is passed to save().
    """

    model: Type[T]

    @abstractmethod
    def find_one(
        self,
        criteria: Dict[str, Any],
        relations: Optional[Sequence[str]] = None,
        select: Optional[Sequence[str]] = None,
    ) -> Optional[T]:
        """
        Get the first record matching all criteria.

        Args:
            criteria: Field name to value mapping
            relations: Related collections to load (e.g. ["episodes"])
            select: Fields to load explicitly, including ones hidden by default

        Returns:
            Entity if found, None otherwise
        """
        pass

    def find_one_or_fail(self, criteria: Dict[str, Any]) -> T:
        """
        Get the first record matching all criteria or raise.

        Raises:
            RecordNotFoundError: If nothing matches
        """
        entity = self.find_one(criteria)
        if entity is None:
            raise RecordNotFoundError(f"No {self.model.__name__} matches criteria", criteria=criteria)
        return entity

    @abstractmethod
    def find(self) -> List[T]:
        """
        Get all records.

        Returns:
            List of all records, ordered by id
        """
        pass

    def create(self, **fields: Any) -> T:
        """
        Build an unsaved entity from field values. Performs no I/O.

        Fields the caller leaves out take the entity's defaults.
        """
        return self.model(**fields)

    @abstractmethod
    def save(self, entity: T) -> T:
        """
        Insert or overwrite a record.

        An entity without an id is inserted and receives a new id; otherwise
        the stored record with that id is replaced by the entity's fields.

        Returns:
            The saved entity with id and updated_at set
        """
        pass

    @abstractmethod
    def delete(self, criteria: Dict[str, Any]) -> None:
        """Delete every record matching all criteria."""
        pass


class PodcastStore(RecordStore[Podcast]):
    """Podcast records. Supports the "episodes" relation."""

    model = Podcast


class EpisodeStore(RecordStore[Episode]):
    """Episode records."""

    model = Episode


class UserStore(RecordStore[User]):
    """
    User records.

    The password hash is not loaded unless "password" is named in ``select``.
    Saving a user whose password is None keeps the stored hash.
    """

    model = User
