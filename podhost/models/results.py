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
Result models returned by every service operation.

Each operation returns either a success model carrying only its payload
field, or a Failure carrying a human-readable message. The ``ok`` field is a
literal discriminator, so a return type such as
``Union[PodcastOutput, Failure]`` is a tagged union:

    result = podcast_service.get_podcast(1)
    if result.ok:
        print(result.podcast.title)
    else:
        print(result.error)
"""

from typing import List, Literal

from pydantic import BaseModel

from .podcast import Episode, Podcast
from .user import User

INTERNAL_ERROR = "Internal server error occurred."
INVALID_RATING = "Rating must be between 1 and 5."

DUPLICATE_ACCOUNT = "There is a user with that email already"
ACCOUNT_CREATION_FAILED = "Could not create account"
USER_NOT_FOUND = "User not found"
USER_NOT_FOUND_BY_ID = "User Not Found"
WRONG_PASSWORD = "Wrong password"
LOGIN_FAILED = "Could not log in"
PROFILE_UPDATE_FAILED = "Could not update profile"


def podcast_not_found(podcast_id: int) -> str:
    return f"Podcast with id {podcast_id} not found"


def episode_not_found(podcast_id: int, episode_id: int) -> str:
    return f"Episode with id {episode_id} not found in podcast with id {podcast_id}"


class Success(BaseModel):
    """Successful operation without a payload."""

    ok: Literal[True] = True


class Failure(BaseModel):
    """Failed operation. ``error`` is always a message string."""

    ok: Literal[False] = False
    error: str


class IdOutput(Success):
    id: int


class TokenOutput(Success):
    token: str


class UserOutput(Success):
    user: User


class PodcastOutput(Success):
    podcast: Podcast


class PodcastsOutput(Success):
    podcasts: List[Podcast]


class EpisodeOutput(Success):
    episode: Episode


class EpisodesOutput(Success):
    episodes: List[Episode]
