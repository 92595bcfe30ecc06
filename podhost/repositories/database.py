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
Factory for creating record store instances.

Usage:
    from podhost.repositories.database import create_stores

    stores = create_stores(config)
    podcast_store = stores.podcast
    user_store = stores.user
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .memory_store import InMemoryEpisodeStore, InMemoryPodcastStore, InMemoryUserStore
from .record_store import EpisodeStore, PodcastStore, UserStore
from .sqlite_store import SqliteEpisodeStore, SqlitePodcastStore, SqliteUserStore

if TYPE_CHECKING:
    from ..utils.config import Config

logger = logging.getLogger(__name__)


@dataclass
class Stores:
    """Container for all record store instances."""

    podcast: PodcastStore
    episode: EpisodeStore
    user: UserStore


def create_stores(config: "Config") -> Stores:
    """
    Create SQLite-backed stores sharing one database file.

    Args:
        config: Application configuration

    Returns:
        Stores container with all store instances
    """
    db_path = config.database_path
    logger.info(f"Using SQLite database: {db_path}")

    return Stores(
        podcast=SqlitePodcastStore(db_path=db_path),
        episode=SqliteEpisodeStore(db_path=db_path),
        user=SqliteUserStore(db_path=db_path),
    )


def create_memory_stores() -> Stores:
    """Create in-memory stores. Nothing survives the process."""
    episode_store = InMemoryEpisodeStore()
    logger.info("Using in-memory stores")

    return Stores(
        podcast=InMemoryPodcastStore(episode_store),
        episode=episode_store,
        user=InMemoryUserStore(),
    )
