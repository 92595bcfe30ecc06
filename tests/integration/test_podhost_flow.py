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
Integration test: a host publishes a podcast and a listener reads it,
over HTTP, against a SQLite database file.
"""

import pytest
from fastapi.testclient import TestClient

from podhost.repositories.database import create_stores
from podhost.web.app import create_app


@pytest.fixture
def app_and_stores(config):
    stores = create_stores(config)
    return create_app(config, stores=stores), stores


def _login(client, email, password):
    token = client.post("/users/login", json={"email": email, "password": password}).json()["token"]
    return {"x-jwt": token}


def test_host_publishes_listener_reads(app_and_stores):
    app, stores = app_and_stores
    client = TestClient(app)

    assert client.post("/users", json={"email": "h@example.com", "password": "s3cret", "role": "Host"}).json()["ok"]
    assert client.post("/users", json={"email": "l@example.com", "password": "s3cret", "role": "Listener"}).json()["ok"]
    host = _login(client, "h@example.com", "s3cret")
    listener = _login(client, "l@example.com", "s3cret")

    podcast_id = client.post("/podcasts", json={"title": "Deep Dive", "category": "Science"}, headers=host).json()["id"]
    for title in ["Oceans", "Caves"]:
        created = client.post(
            f"/podcasts/{podcast_id}/episodes", json={"title": title, "category": "Science"}, headers=host
        )
        assert created.json()["ok"]

    # Listener sees everything but cannot change it
    podcast = client.get(f"/podcasts/{podcast_id}", headers=listener).json()["podcast"]
    assert [ep["title"] for ep in podcast["episodes"]] == ["Oceans", "Caves"]
    assert client.patch(f"/podcasts/{podcast_id}", json={"rating": 5}, headers=listener).status_code == 403

    assert client.patch(f"/podcasts/{podcast_id}", json={"rating": 4}, headers=host).json() == {"ok": True}
    assert client.get(f"/podcasts/{podcast_id}").json()["podcast"]["rating"] == 4

    # Deleting the podcast leaves its episodes stored
    assert client.delete(f"/podcasts/{podcast_id}", headers=host).json() == {"ok": True}
    assert client.get(f"/podcasts/{podcast_id}/episodes").json()["ok"] is False
    assert len(stores.episode.find()) == 2


def test_data_survives_app_restart(config):
    first = TestClient(create_app(config))
    first.post("/users", json={"email": "h@example.com", "password": "pw", "role": "Host"})
    host = _login(first, "h@example.com", "pw")
    first.post("/podcasts", json={"title": "Persistent", "category": "Misc"}, headers=host)

    second = TestClient(create_app(config))

    assert [p["title"] for p in second.get("/podcasts").json()["podcasts"]] == ["Persistent"]
    # Same signing key, so the old token is still accepted
    assert second.get("/users/me", headers=host).json()["user"]["email"] == "h@example.com"
