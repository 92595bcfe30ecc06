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

"""Podcast and episode entities, plus the input payloads accepted by the podcast service."""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field

MIN_RATING = 1
MAX_RATING = 5
DEFAULT_RATING = 1


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Episode(BaseModel):
    # Store-assigned identifier, None until the first save
    id: Optional[int] = None
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    title: str
    category: str

    # Owning podcast; episode ids are only meaningful together with this
    podcast_id: Optional[int] = None


class Podcast(BaseModel):
    id: Optional[int] = None
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    title: str
    category: str
    rating: int = Field(default=DEFAULT_RATING, ge=MIN_RATING, le=MAX_RATING)

    # Loaded only when the store is asked for the "episodes" relation
    episodes: List[Episode] = []


class CreatePodcastInput(BaseModel):
    title: str
    category: str


class UpdatePodcastInput(BaseModel):
    """
    Partial podcast update.

    Only fields that were explicitly set are merged. The rating range is
    checked by PodcastService so that an out-of-range value is reported as a
    domain failure instead of a validation error.
    """

    title: Optional[str] = None
    category: Optional[str] = None
    rating: Optional[int] = None


class CreateEpisodeInput(BaseModel):
    title: str
    category: str


class UpdateEpisodeInput(BaseModel):
    title: Optional[str] = None
    category: Optional[str] = None
