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
Podcast service - Business logic for podcast and episode management
"""

import logging
from typing import Union

from ..models.podcast import MAX_RATING, MIN_RATING, UpdateEpisodeInput, UpdatePodcastInput
from ..models.results import (
    INTERNAL_ERROR,
    INVALID_RATING,
    EpisodeOutput,
    EpisodesOutput,
    Failure,
    IdOutput,
    PodcastOutput,
    PodcastsOutput,
    Success,
    episode_not_found,
    podcast_not_found,
)
from ..repositories.record_store import EpisodeStore, PodcastStore

logger = logging.getLogger(__name__)


class PodcastService:
    """
    Service for podcasts and the episodes they own.

    Episodes are always reached through their podcast: every episode
    operation starts from get_podcast (directly or via get_episodes /
    get_episode), so an episode is never visible or mutable unless its
    podcast exists. Failures from those lookups are returned unchanged.

    Every public method catches unexpected errors and returns
    Failure(INTERNAL_ERROR) instead of raising.

    Attributes:
        podcast_store: Record store for podcasts
        episode_store: Record store for episodes
    """

    def __init__(self, podcast_store: PodcastStore, episode_store: EpisodeStore) -> None:
        self.podcast_store: PodcastStore = podcast_store
        self.episode_store: EpisodeStore = episode_store

    def get_all_podcasts(self) -> Union[PodcastsOutput, Failure]:
        """Get every podcast, unfiltered and unpaginated."""
        try:
            podcasts = self.podcast_store.find()
            logger.debug(f"Listing {len(podcasts)} podcasts")
            return PodcastsOutput(podcasts=podcasts)
        except Exception:
            logger.exception("Failed to list podcasts")
            return Failure(error=INTERNAL_ERROR)

    def create_podcast(self, title: str, category: str) -> Union[IdOutput, Failure]:
        """
        Create a podcast. The rating takes the entity default.

        Returns:
            IdOutput with the new podcast's id
        """
        try:
            podcast = self.podcast_store.create(title=title, category=category)
            saved = self.podcast_store.save(podcast)
            logger.info(f"Created podcast {saved.id}: {title}")
            return IdOutput(id=saved.id)
        except Exception:
            logger.exception(f"Failed to create podcast: {title}")
            return Failure(error=INTERNAL_ERROR)

    def get_podcast(self, podcast_id: int) -> Union[PodcastOutput, Failure]:
        """
        Get a podcast together with its episodes.

        Returns:
            PodcastOutput, or Failure("Podcast with id {id} not found")
        """
        try:
            podcast = self.podcast_store.find_one({"id": podcast_id}, relations=["episodes"])
            if podcast is None:
                logger.warning(f"Podcast not found: {podcast_id}")
                return Failure(error=podcast_not_found(podcast_id))
            return PodcastOutput(podcast=podcast)
        except Exception:
            logger.exception(f"Failed to get podcast {podcast_id}")
            return Failure(error=INTERNAL_ERROR)

    def delete_podcast(self, podcast_id: int) -> Union[Success, Failure]:
        """
        Delete a podcast after checking it exists.

        Episodes are not deleted with it.
        """
        try:
            result = self.get_podcast(podcast_id)
            if not result.ok:
                return result

            self.podcast_store.delete({"id": podcast_id})
            logger.info(f"Deleted podcast {podcast_id}")
            return Success()
        except Exception:
            logger.exception(f"Failed to delete podcast {podcast_id}")
            return Failure(error=INTERNAL_ERROR)

    def update_podcast(self, podcast_id: int, payload: UpdatePodcastInput) -> Union[Success, Failure]:
        """
        Merge a partial update over the current podcast and save the whole entity.

        Args:
            podcast_id: Podcast to update
            payload: Fields to change; a rating outside 1..5 is rejected

        Returns:
            Success, or Failure (not found, invalid rating, internal error)
        """
        try:
            result = self.get_podcast(podcast_id)
            if not result.ok:
                return result

            updates = payload.model_dump(exclude_unset=True, exclude_none=True)
            rating = updates.get("rating")
            if rating is not None and not MIN_RATING <= rating <= MAX_RATING:
                logger.info(f"Rejected rating {rating} for podcast {podcast_id}")
                return Failure(error=INVALID_RATING)

            self.podcast_store.save(result.podcast.model_copy(update=updates))
            logger.info(f"Updated podcast {podcast_id}: {sorted(updates)}")
            return Success()
        except Exception:
            logger.exception(f"Failed to update podcast {podcast_id}")
            return Failure(error=INTERNAL_ERROR)

    def get_episodes(self, podcast_id: int) -> Union[EpisodesOutput, Failure]:
        """Get a podcast's episodes (possibly none)."""
        try:
            result = self.get_podcast(podcast_id)
            if not result.ok:
                return result
            return EpisodesOutput(episodes=result.podcast.episodes)
        except Exception:
            logger.exception(f"Failed to get episodes of podcast {podcast_id}")
            return Failure(error=INTERNAL_ERROR)

    def get_episode(self, podcast_id: int, episode_id: int) -> Union[EpisodeOutput, Failure]:
        """
        Find an episode within its podcast.

        An episode id that belongs to another podcast is reported as not found.
        """
        try:
            result = self.get_episodes(podcast_id)
            if not result.ok:
                return result

            episode = next((ep for ep in result.episodes if ep.id == episode_id), None)
            if episode is None:
                logger.warning(f"Episode {episode_id} not found in podcast {podcast_id}")
                return Failure(error=episode_not_found(podcast_id, episode_id))
            return EpisodeOutput(episode=episode)
        except Exception:
            logger.exception(f"Failed to get episode {episode_id} of podcast {podcast_id}")
            return Failure(error=INTERNAL_ERROR)

    def create_episode(self, podcast_id: int, title: str, category: str) -> Union[IdOutput, Failure]:
        """Create an episode owned by an existing podcast."""
        try:
            result = self.get_podcast(podcast_id)
            if not result.ok:
                return result

            episode = self.episode_store.create(title=title, category=category, podcast_id=result.podcast.id)
            saved = self.episode_store.save(episode)
            logger.info(f"Created episode {saved.id} in podcast {podcast_id}: {title}")
            return IdOutput(id=saved.id)
        except Exception:
            logger.exception(f"Failed to create episode in podcast {podcast_id}")
            return Failure(error=INTERNAL_ERROR)

    def delete_episode(self, podcast_id: int, episode_id: int) -> Union[Success, Failure]:
        try:
            result = self.get_episode(podcast_id, episode_id)
            if not result.ok:
                return result

            self.episode_store.delete({"id": result.episode.id})
            logger.info(f"Deleted episode {episode_id} of podcast {podcast_id}")
            return Success()
        except Exception:
            logger.exception(f"Failed to delete episode {episode_id} of podcast {podcast_id}")
            return Failure(error=INTERNAL_ERROR)

    def update_episode(
        self, podcast_id: int, episode_id: int, fields: UpdateEpisodeInput
    ) -> Union[Success, Failure]:
        """Merge changed fields over an episode of the given podcast and save it."""
        try:
            result = self.get_episode(podcast_id, episode_id)
            if not result.ok:
                return result

            updates = fields.model_dump(exclude_unset=True, exclude_none=True)
            self.episode_store.save(result.episode.model_copy(update=updates))
            logger.info(f"Updated episode {episode_id} of podcast {podcast_id}: {sorted(updates)}")
            return Success()
        except Exception:
            logger.exception(f"Failed to update episode {episode_id} of podcast {podcast_id}")
            return Failure(error=INTERNAL_ERROR)
