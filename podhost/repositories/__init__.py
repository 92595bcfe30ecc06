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
Persistence layer.

The services depend only on the abstract record stores defined here;
SQLite and in-memory implementations are provided.
"""

from .database import Stores, create_memory_stores, create_stores
from .record_store import EpisodeStore, PodcastStore, RecordStore, UserStore

__all__ = [
    "RecordStore",
    "PodcastStore",
    "EpisodeStore",
    "UserStore",
    "Stores",
    "create_stores",
    "create_memory_stores",
]
