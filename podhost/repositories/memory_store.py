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
In-memory record stores.

Used for tests and for running the web server without a database file. Every
store keeps its records in a dict guarded by a lock and hands out deep
copies.
"""

import threading
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from ..logging import get_logger
from ..models.podcast import Episode, Podcast
from ..models.user import User
from ..utils.exceptions import PodhostError
from .record_store import EpisodeStore, PodcastStore, RecordStore, T, UserStore

logger = get_logger(__name__)


class InMemoryStore(RecordStore[T]):
    """Dict-backed store with sequential integer ids starting at 1."""

    def __init__(self):
        self._records: Dict[int, T] = {}
        self._next_id = 1
        self._lock = threading.RLock()

    def _matches(self, entity: T, criteria: Dict[str, Any]) -> bool:
        for key, value in criteria.items():
            if key not in self.model.model_fields:
                raise ValueError(f"Unknown {self.model.__name__} field in criteria: {key}")
            if getattr(entity, key) != value:
                return False
        return True

    def _load(self, entity: T, relations: Optional[Sequence[str]], select: Optional[Sequence[str]]) -> T:
        """Copy a stored record for the caller. Subclasses attach relations and hide fields."""
        if relations:
            raise ValueError(f"{self.model.__name__} has no relations: {list(relations)}")
        return entity.model_copy(deep=True)

    def find_one(
        self,
        criteria: Dict[str, Any],
        relations: Optional[Sequence[str]] = None,
        select: Optional[Sequence[str]] = None,
    ) -> Optional[T]:
        with self._lock:
            for entity in self._records.values():
                if self._matches(entity, criteria):
                    return self._load(entity, relations, select)
            return None

    def find(self) -> List[T]:
        with self._lock:
            return [self._load(entity, None, None) for _, entity in sorted(self._records.items())]

    def save(self, entity: T) -> T:
        with self._lock:
            stored = self._prepare(entity)
            if stored.id is None:
                stored.id = self._next_id
                self._next_id += 1
            stored.updated_at = datetime.now(timezone.utc)
            self._records[stored.id] = stored
            logger.debug("record_saved", entity=self.model.__name__, id=stored.id)
            return self._load(stored, None, None)

    def _prepare(self, entity: T) -> T:
        """Return the copy of ``entity`` that will be stored."""
        return entity.model_copy(deep=True)

    def delete(self, criteria: Dict[str, Any]) -> None:
        if not criteria:
            raise ValueError(f"Refusing to delete every {self.model.__name__} record without criteria")
        with self._lock:
            doomed = [key for key, entity in self._records.items() if self._matches(entity, criteria)]
            for key in doomed:
                del self._records[key]
            logger.debug("records_deleted", entity=self.model.__name__, count=len(doomed))


class InMemoryEpisodeStore(InMemoryStore[Episode], EpisodeStore):
    pass


class InMemoryPodcastStore(InMemoryStore[Podcast], PodcastStore):
    """Podcast store that resolves the "episodes" relation through an episode store."""

    def __init__(self, episode_store: InMemoryEpisodeStore):
        super().__init__()
        self.episode_store = episode_store

    def _load(self, entity: Podcast, relations: Optional[Sequence[str]], select: Optional[Sequence[str]]) -> Podcast:
        podcast = entity.model_copy(deep=True)
        for relation in relations or []:
            if relation != "episodes":
                raise ValueError(f"Unknown Podcast relation: {relation}")
            podcast.episodes = [ep for ep in self.episode_store.find() if ep.podcast_id == podcast.id]
        return podcast

    def _prepare(self, entity: Podcast) -> Podcast:
        # Episodes are owned by the episode store, never embedded in the podcast record
        return entity.model_copy(update={"episodes": []}, deep=True)


class InMemoryUserStore(InMemoryStore[User], UserStore):
    """User store enforcing unique emails and hiding password hashes by default."""

    def _load(self, entity: User, relations: Optional[Sequence[str]], select: Optional[Sequence[str]]) -> User:
        user = super()._load(entity, relations, select)
        if not select or "password" not in select:
            user.password = None
        return user

    def _prepare(self, entity: User) -> User:
        user = entity.model_copy(deep=True)
        for other in self._records.values():
            if other.email == user.email and other.id != user.id:
                raise PodhostError("Unique constraint failed: users.email", email=user.email)
        if user.password is None and user.id in self._records:
            user.password = self._records[user.id].password
        return user
