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
Pytest fixtures for podhost tests.

Provides PlainTextHasher so service tests don't pay for bcrypt, plus
in-memory services and a configured web client.
"""

from typing import Optional

import pytest
from fastapi.testclient import TestClient

from podhost.repositories.database import create_memory_stores
from podhost.services import PodcastService, TokenService, UserService
from podhost.utils.config import Config
from podhost.utils.passwords import PasswordHasher
from podhost.web.app import create_app

TEST_SECRET = "podhost-test-secret-key-0123456789abcdef"


class PlainTextHasher(PasswordHasher):
    """
    Reversible password "hasher" for tests.

    Tracks how many times hash() was called so tests can assert that a
    password was (or was not) re-hashed.
    """

    PREFIX = "hashed::"

    def __init__(self):
        self.hash_calls = 0

    def hash(self, plaintext: str) -> str:
        self.hash_calls += 1
        return f"{self.PREFIX}{plaintext}"

    def matches(self, plaintext: str, hashed: Optional[str]) -> bool:
        return hashed == f"{self.PREFIX}{plaintext}"


@pytest.fixture
def stores():
    """Fresh in-memory stores."""
    return create_memory_stores()


@pytest.fixture
def token_service():
    return TokenService(TEST_SECRET)


@pytest.fixture
def password_hasher():
    return PlainTextHasher()


@pytest.fixture
def user_service(stores, token_service, password_hasher):
    return UserService(stores.user, token_service, password_hasher)


@pytest.fixture
def podcast_service(stores):
    return PodcastService(stores.podcast, stores.episode)


@pytest.fixture
def config(tmp_path):
    """Config with a fixed signing key and the cheapest bcrypt cost."""
    return Config(
        jwt_secret_key=TEST_SECRET,
        bcrypt_rounds=4,
        database_path=str(tmp_path / "podhost.db"),
    )


@pytest.fixture
def client(config, stores):
    """TestClient for an app backed by in-memory stores."""
    return TestClient(create_app(config, stores=stores))
