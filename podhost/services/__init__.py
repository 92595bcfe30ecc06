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
Service layer for podhost

This package contains the business logic services used by the web API and
the CLI.
"""

from .podcast_service import PodcastService
from .token_service import TokenService
from .user_service import UserService

__all__ = [
    "PodcastService",
    "TokenService",
    "UserService",
]
