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
Unit tests for PodcastService.

Tests cover:
- Podcast CRUD against mocked stores (not found, internal errors)
- Rating validation on update
- Episodes scoped to their podcast
- A full scenario against in-memory stores
"""

from unittest.mock import Mock, patch

import pytest

from podhost.models.podcast import Episode, Podcast, UpdateEpisodeInput, UpdatePodcastInput
from podhost.models.results import (
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
from podhost.repositories.record_store import EpisodeStore, PodcastStore
from podhost.services.podcast_service import PodcastService


@pytest.fixture
def podcast_store():
    return Mock(spec=PodcastStore)


@pytest.fixture
def episode_store():
    return Mock(spec=EpisodeStore)


@pytest.fixture
def service(podcast_store, episode_store):
    return PodcastService(podcast_store, episode_store)


@pytest.fixture
def sample_podcast():
    return Podcast(
        id=1,
        title="Morning Show",
        category="News",
        rating=3,
        episodes=[
            Episode(id=10, title="Pilot", category="News", podcast_id=1),
            Episode(id=11, title="Second", category="News", podcast_id=1),
        ],
    )


class TestPodcasts:
    """Tests for podcast operations."""

    def test_get_all_podcasts(self, service, podcast_store):
        podcasts = [Podcast(id=1, title="A", category="x"), Podcast(id=2, title="B", category="y")]
        podcast_store.find.return_value = podcasts

        result = service.get_all_podcasts()

        assert result == PodcastsOutput(podcasts=podcasts)

    def test_get_all_podcasts_empty(self, service, podcast_store):
        podcast_store.find.return_value = []

        assert service.get_all_podcasts() == PodcastsOutput(podcasts=[])

    def test_get_all_podcasts_store_error(self, service, podcast_store):
        podcast_store.find.side_effect = RuntimeError("disk on fire")

        assert service.get_all_podcasts() == Failure(error=INTERNAL_ERROR)

    def test_create_podcast_returns_new_id(self, service, podcast_store):
        unsaved = Podcast(title="Morning Show", category="News")
        podcast_store.create.return_value = unsaved
        podcast_store.save.return_value = unsaved.model_copy(update={"id": 7})

        result = service.create_podcast("Morning Show", "News")

        assert result == IdOutput(id=7)
        podcast_store.create.assert_called_once_with(title="Morning Show", category="News")
        podcast_store.save.assert_called_once_with(unsaved)

    def test_create_podcast_save_error(self, service, podcast_store):
        podcast_store.create.return_value = Podcast(title="t", category="c")
        podcast_store.save.side_effect = RuntimeError("boom")

        assert service.create_podcast("t", "c") == Failure(error=INTERNAL_ERROR)

    def test_get_podcast_loads_episodes(self, service, podcast_store, sample_podcast):
        podcast_store.find_one.return_value = sample_podcast

        result = service.get_podcast(1)

        assert result == PodcastOutput(podcast=sample_podcast)
        podcast_store.find_one.assert_called_once_with({"id": 1}, relations=["episodes"])

    def test_get_podcast_not_found(self, service, podcast_store):
        podcast_store.find_one.return_value = None

        result = service.get_podcast(42)

        assert result == Failure(error="Podcast with id 42 not found")

    def test_get_podcast_store_error(self, service, podcast_store):
        podcast_store.find_one.side_effect = RuntimeError("boom")

        assert service.get_podcast(1) == Failure(error=INTERNAL_ERROR)

    def test_delete_podcast(self, service, podcast_store, sample_podcast):
        podcast_store.find_one.return_value = sample_podcast

        with patch.object(service, "get_podcast", wraps=service.get_podcast) as spy:
            result = service.delete_podcast(1)

        assert result == Success()
        spy.assert_called_once_with(1)
        podcast_store.delete.assert_called_once_with({"id": 1})

    def test_delete_podcast_not_found(self, service, podcast_store):
        podcast_store.find_one.return_value = None

        result = service.delete_podcast(3)

        assert result == Failure(error=podcast_not_found(3))
        podcast_store.delete.assert_not_called()

    def test_delete_podcast_store_error(self, service, podcast_store, sample_podcast):
        podcast_store.find_one.return_value = sample_podcast
        podcast_store.delete.side_effect = RuntimeError("boom")

        assert service.delete_podcast(1) == Failure(error=INTERNAL_ERROR)


class TestUpdatePodcast:
    """Tests for partial podcast updates and rating validation."""

    @pytest.mark.parametrize("rating", [0, 6, -1, 100])
    def test_rejects_out_of_range_rating(self, service, podcast_store, sample_podcast, rating):
        podcast_store.find_one.return_value = sample_podcast

        result = service.update_podcast(1, UpdatePodcastInput(rating=rating))

        assert result == Failure(error=INVALID_RATING)
        podcast_store.save.assert_not_called()

    @pytest.mark.parametrize("rating", [1, 5])
    def test_accepts_boundary_ratings(self, service, podcast_store, sample_podcast, rating):
        podcast_store.find_one.return_value = sample_podcast

        result = service.update_podcast(1, UpdatePodcastInput(rating=rating))

        assert result == Success()
        saved = podcast_store.save.call_args.args[0]
        assert saved.rating == rating

    def test_merges_only_given_fields(self, service, podcast_store, sample_podcast):
        podcast_store.find_one.return_value = sample_podcast

        result = service.update_podcast(1, UpdatePodcastInput(title="Evening Show"))

        assert result == Success()
        saved = podcast_store.save.call_args.args[0]
        assert saved.id == 1
        assert saved.title == "Evening Show"
        assert saved.category == "News"
        assert saved.rating == 3

    def test_not_found_is_returned_unchanged(self, service, podcast_store):
        podcast_store.find_one.return_value = None

        result = service.update_podcast(9, UpdatePodcastInput(rating=0))

        # Existence is checked before the rating
        assert result == Failure(error=podcast_not_found(9))
        podcast_store.save.assert_not_called()

    def test_save_error(self, service, podcast_store, sample_podcast):
        podcast_store.find_one.return_value = sample_podcast
        podcast_store.save.side_effect = RuntimeError("boom")

        assert service.update_podcast(1, UpdatePodcastInput(title="x")) == Failure(error=INTERNAL_ERROR)


class TestEpisodes:
    """Tests for episode operations scoped to a podcast."""

    def test_get_episodes(self, service, podcast_store, sample_podcast):
        podcast_store.find_one.return_value = sample_podcast

        result = service.get_episodes(1)

        assert result == EpisodesOutput(episodes=sample_podcast.episodes)

    def test_get_episodes_missing_podcast(self, service, podcast_store):
        podcast_store.find_one.return_value = None

        assert service.get_episodes(5) == Failure(error=podcast_not_found(5))

    def test_get_episode(self, service, podcast_store, sample_podcast):
        podcast_store.find_one.return_value = sample_podcast

        result = service.get_episode(1, 11)

        assert result == EpisodeOutput(episode=sample_podcast.episodes[1])

    def test_get_episode_from_other_podcast_is_not_found(self, service, podcast_store, sample_podcast):
        podcast_store.find_one.return_value = sample_podcast

        result = service.get_episode(1, 99)

        assert result == Failure(error="Episode with id 99 not found in podcast with id 1")

    def test_create_episode_links_podcast(self, service, podcast_store, episode_store, sample_podcast):
        podcast_store.find_one.return_value = sample_podcast
        unsaved = Episode(title="Third", category="News", podcast_id=1)
        episode_store.create.return_value = unsaved
        episode_store.save.return_value = unsaved.model_copy(update={"id": 12})

        result = service.create_episode(1, "Third", "News")

        assert result == IdOutput(id=12)
        episode_store.create.assert_called_once_with(title="Third", category="News", podcast_id=1)

    def test_create_episode_missing_podcast(self, service, podcast_store, episode_store):
        podcast_store.find_one.return_value = None

        result = service.create_episode(4, "t", "c")

        assert result == Failure(error=podcast_not_found(4))
        episode_store.save.assert_not_called()

    def test_delete_episode(self, service, podcast_store, episode_store, sample_podcast):
        podcast_store.find_one.return_value = sample_podcast

        assert service.delete_episode(1, 10) == Success()
        episode_store.delete.assert_called_once_with({"id": 10})

    def test_delete_episode_not_found(self, service, podcast_store, episode_store, sample_podcast):
        podcast_store.find_one.return_value = sample_podcast

        assert service.delete_episode(1, 77) == Failure(error=episode_not_found(1, 77))
        episode_store.delete.assert_not_called()

    def test_update_episode(self, service, podcast_store, episode_store, sample_podcast):
        podcast_store.find_one.return_value = sample_podcast

        result = service.update_episode(1, 10, UpdateEpisodeInput(category="Politics"))

        assert result == Success()
        saved = episode_store.save.call_args.args[0]
        assert saved.id == 10
        assert saved.title == "Pilot"
        assert saved.category == "Politics"
        assert saved.podcast_id == 1

    def test_update_episode_not_found(self, service, podcast_store, episode_store, sample_podcast):
        podcast_store.find_one.return_value = sample_podcast

        result = service.update_episode(1, 99, UpdateEpisodeInput(title="x"))

        assert result == Failure(error=episode_not_found(1, 99))
        episode_store.save.assert_not_called()

    def test_update_episode_missing_podcast(self, service, podcast_store, episode_store):
        podcast_store.find_one.return_value = None

        result = service.update_episode(8, 10, UpdateEpisodeInput(title="x"))

        assert result == Failure(error=podcast_not_found(8))
        episode_store.save.assert_not_called()

    def test_delete_episode_missing_podcast(self, service, podcast_store, episode_store):
        podcast_store.find_one.return_value = None

        result = service.delete_episode(8, 10)

        assert result == Failure(error=podcast_not_found(8))
        episode_store.delete.assert_not_called()

    def test_get_episodes_never_mutates(self, service, podcast_store, episode_store):
        podcast_store.find_one.return_value = None

        service.get_episodes(8)

        podcast_store.save.assert_not_called()
        podcast_store.delete.assert_not_called()
        episode_store.save.assert_not_called()

    def test_update_episode_store_error(self, service, podcast_store, episode_store, sample_podcast):
        podcast_store.find_one.return_value = sample_podcast
        episode_store.save.side_effect = RuntimeError("boom")

        assert service.update_episode(1, 10, UpdateEpisodeInput(title="x")) == Failure(error=INTERNAL_ERROR)


class TestPodcastScenario:
    """End-to-end service behaviour against in-memory stores."""

    def test_podcast_lifecycle(self, podcast_service, stores):
        created = podcast_service.create_podcast("Morning Show", "News")
        assert created.ok
        podcast_id = created.id

        fetched = podcast_service.get_podcast(podcast_id)
        assert fetched.podcast.rating == 1
        assert fetched.podcast.episodes == []

        first = podcast_service.create_episode(podcast_id, "Pilot", "News")
        second = podcast_service.create_episode(podcast_id, "Second", "News")
        assert first.ok and second.ok

        episodes = podcast_service.get_episodes(podcast_id)
        assert [ep.title for ep in episodes.episodes] == ["Pilot", "Second"]

        assert podcast_service.update_podcast(podcast_id, UpdatePodcastInput(rating=4)) == Success()
        assert podcast_service.get_podcast(podcast_id).podcast.rating == 4

        renamed = UpdateEpisodeInput(title="Pilot (remastered)")
        assert podcast_service.update_episode(podcast_id, first.id, renamed) == Success()
        assert podcast_service.get_episode(podcast_id, first.id).episode.title == "Pilot (remastered)"

        assert podcast_service.delete_episode(podcast_id, second.id) == Success()
        assert [ep.id for ep in podcast_service.get_episodes(podcast_id).episodes] == [first.id]

        assert podcast_service.delete_podcast(podcast_id) == Success()
        assert podcast_service.get_podcast(podcast_id) == Failure(error=podcast_not_found(podcast_id))

        # Episodes outlive their podcast
        assert [ep.id for ep in stores.episode.find()] == [first.id]

    def test_episode_ids_do_not_leak_across_podcasts(self, podcast_service):
        a = podcast_service.create_podcast("A", "x").id
        b = podcast_service.create_podcast("B", "y").id
        episode_id = podcast_service.create_episode(a, "Only in A", "x").id

        assert podcast_service.get_episode(b, episode_id) == Failure(error=episode_not_found(b, episode_id))
        assert podcast_service.delete_episode(b, episode_id) == Failure(error=episode_not_found(b, episode_id))
        assert podcast_service.get_episode(a, episode_id).ok
