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
Podcast and episode routes.

Reads are public; every mutation requires a Host account. Episode routes
are always nested under their podcast.
"""

from fastapi import APIRouter, Depends

from ...models.podcast import CreateEpisodeInput, CreatePodcastInput, UpdateEpisodeInput, UpdatePodcastInput
from ...models.user import UserRole
from ..dependencies import AppState, get_app_state, require_role

router = APIRouter()

host_only = [Depends(require_role(UserRole.HOST))]


@router.get("")
def get_all_podcasts(state: AppState = Depends(get_app_state)):
    return state.podcast_service.get_all_podcasts()


@router.post("", dependencies=host_only)
def create_podcast(body: CreatePodcastInput, state: AppState = Depends(get_app_state)):
    return state.podcast_service.create_podcast(body.title, body.category)


@router.get("/{podcast_id}")
def get_podcast(podcast_id: int, state: AppState = Depends(get_app_state)):
    return state.podcast_service.get_podcast(podcast_id)


@router.patch("/{podcast_id}", dependencies=host_only)
def update_podcast(podcast_id: int, body: UpdatePodcastInput, state: AppState = Depends(get_app_state)):
    return state.podcast_service.update_podcast(podcast_id, body)


@router.delete("/{podcast_id}", dependencies=host_only)
def delete_podcast(podcast_id: int, state: AppState = Depends(get_app_state)):
    return state.podcast_service.delete_podcast(podcast_id)


@router.get("/{podcast_id}/episodes")
def get_episodes(podcast_id: int, state: AppState = Depends(get_app_state)):
    return state.podcast_service.get_episodes(podcast_id)


@router.post("/{podcast_id}/episodes", dependencies=host_only)
def create_episode(podcast_id: int, body: CreateEpisodeInput, state: AppState = Depends(get_app_state)):
    return state.podcast_service.create_episode(podcast_id, body.title, body.category)


@router.get("/{podcast_id}/episodes/{episode_id}")
def get_episode(podcast_id: int, episode_id: int, state: AppState = Depends(get_app_state)):
    return state.podcast_service.get_episode(podcast_id, episode_id)


@router.patch("/{podcast_id}/episodes/{episode_id}", dependencies=host_only)
def update_episode(
    podcast_id: int,
    episode_id: int,
    body: UpdateEpisodeInput,
    state: AppState = Depends(get_app_state),
):
    return state.podcast_service.update_episode(podcast_id, episode_id, body)


@router.delete("/{podcast_id}/episodes/{episode_id}", dependencies=host_only)
def delete_episode(podcast_id: int, episode_id: int, state: AppState = Depends(get_app_state)):
    return state.podcast_service.delete_episode(podcast_id, episode_id)
