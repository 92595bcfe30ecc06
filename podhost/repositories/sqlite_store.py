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
SQLite implementation of the record stores.

Design principles:
- Raw SQL with parameter binding (no ORM)
- Thread-safe via connection-per-operation
- Schema created idempotently on first use
- No cascades: deleting a podcast leaves its episodes in place
"""

import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from ..logging import get_logger
from ..models.podcast import Episode, Podcast
from ..models.user import User, UserRole
from .record_store import EpisodeStore, PodcastStore, RecordStore, T, UserStore

logger = get_logger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS podcasts (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    created_at TIMESTAMP NOT NULL,
    updated_at TIMESTAMP NOT NULL,
    title TEXT NOT NULL,
    category TEXT NOT NULL,
    rating INTEGER NOT NULL DEFAULT 1,
    CHECK (rating BETWEEN 1 AND 5)
);

CREATE TABLE IF NOT EXISTS episodes (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    podcast_id INTEGER NOT NULL,
    created_at TIMESTAMP NOT NULL,
    updated_at TIMESTAMP NOT NULL,
    title TEXT NOT NULL,
    category TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_episodes_podcast_id ON episodes(podcast_id);

CREATE TABLE IF NOT EXISTS users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    created_at TIMESTAMP NOT NULL,
    updated_at TIMESTAMP NOT NULL,
    email TEXT NOT NULL UNIQUE,
    password TEXT NULL,
    role TEXT NOT NULL,
    CHECK (role IN ('Host', 'Listener'))
);
"""


class SqliteStore(RecordStore[T]):
    """
    Shared SQLite plumbing for one table.

    Subclasses set ``table`` and ``columns`` (every column except id) and
    implement the row conversions.
    """

    table: str
    columns: Tuple[str, ...]

    def __init__(self, db_path: str):
        """
        Initialize the store and create the schema if needed.

        Args:
            db_path: Path to SQLite database file (e.g., "./data/podhost.db")
        """
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        with self._get_connection() as conn:
            conn.executescript(SCHEMA)
        logger.info(f"Initialized SQLite {self.table} store: {self.db_path}")

    @contextmanager
    def _get_connection(self) -> Iterator[sqlite3.Connection]:
        """
        Get database connection with proper setup.

        Features:
        - Row factory for dict-like access
        - Automatic commit/rollback
        """
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row

        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _select_columns(self, select: Optional[Sequence[str]] = None) -> List[str]:
        return ["id", *self.columns]

    def _where(self, criteria: Dict[str, Any]) -> Tuple[str, List[Any]]:
        """Build a WHERE clause from equality criteria."""
        if not criteria:
            return "", []
        clauses = []
        params = []
        for key, value in criteria.items():
            if key != "id" and key not in self.columns:
                raise ValueError(f"Unknown {self.table} column in criteria: {key}")
            clauses.append(f"{key} = ?")
            params.append(value.value if isinstance(value, Enum) else value)
        return " WHERE " + " AND ".join(clauses), params

    def _to_row(self, entity: T) -> Dict[str, Any]:
        raise NotImplementedError

    def _from_row(self, row: sqlite3.Row) -> T:
        raise NotImplementedError

    def _load_relations(self, conn: sqlite3.Connection, entity: T, relations: Sequence[str]) -> None:
        raise ValueError(f"{self.table} has no relations: {list(relations)}")

    def find_one(
        self,
        criteria: Dict[str, Any],
        relations: Optional[Sequence[str]] = None,
        select: Optional[Sequence[str]] = None,
    ) -> Optional[T]:
        where, params = self._where(criteria)
        columns = ", ".join(self._select_columns(select))
        with self._get_connection() as conn:
            row = conn.execute(f"SELECT {columns} FROM {self.table}{where} ORDER BY id LIMIT 1", params).fetchone()
            if row is None:
                return None
            entity = self._from_row(row)
            if relations:
                self._load_relations(conn, entity, relations)
            return entity

    def find(self) -> List[T]:
        columns = ", ".join(self._select_columns())
        with self._get_connection() as conn:
            rows = conn.execute(f"SELECT {columns} FROM {self.table} ORDER BY id").fetchall()
            return [self._from_row(row) for row in rows]

    def save(self, entity: T) -> T:
        """
        Insert or overwrite a record.

        An entity whose id is set but missing from the table is inserted with
        that id.
        """
        saved = entity.model_copy(deep=True)
        saved.updated_at = datetime.now(timezone.utc)
        row = self._to_row(saved)

        with self._get_connection() as conn:
            updated = 0
            if saved.id is not None:
                assignments = ", ".join(self._assignment(column) for column in row)
                cursor = conn.execute(
                    f"UPDATE {self.table} SET {assignments} WHERE id = ?",
                    [*row.values(), saved.id],
                )
                updated = cursor.rowcount

            if not updated:
                if saved.id is not None:
                    row = {"id": saved.id, **row}
                placeholders = ", ".join("?" for _ in row)
                cursor = conn.execute(
                    f"INSERT INTO {self.table} ({', '.join(row)}) VALUES ({placeholders})",
                    list(row.values()),
                )
                saved.id = cursor.lastrowid

        logger.debug(f"Saved {self.table} record {saved.id}")
        return saved

    def _assignment(self, column: str) -> str:
        return f"{column} = ?"

    def delete(self, criteria: Dict[str, Any]) -> None:
        if not criteria:
            raise ValueError(f"Refusing to delete every {self.table} record without criteria")
        where, params = self._where(criteria)
        with self._get_connection() as conn:
            cursor = conn.execute(f"DELETE FROM {self.table}{where}", params)
            logger.info(f"Deleted {cursor.rowcount} {self.table} record(s)")


class SqlitePodcastStore(SqliteStore[Podcast], PodcastStore):
    table = "podcasts"
    columns = ("created_at", "updated_at", "title", "category", "rating")

    def _to_row(self, podcast: Podcast) -> Dict[str, Any]:
        return {
            "created_at": podcast.created_at.isoformat(),
            "updated_at": podcast.updated_at.isoformat(),
            "title": podcast.title,
            "category": podcast.category,
            "rating": podcast.rating,
        }

    def _from_row(self, row: sqlite3.Row) -> Podcast:
        return Podcast(
            id=row["id"],
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
            title=row["title"],
            category=row["category"],
            rating=row["rating"],
        )

    def _load_relations(self, conn: sqlite3.Connection, podcast: Podcast, relations: Sequence[str]) -> None:
        for relation in relations:
            if relation != "episodes":
                raise ValueError(f"Unknown podcasts relation: {relation}")
            columns = ", ".join(["id", *SqliteEpisodeStore.columns])
            rows = conn.execute(
                f"SELECT {columns} FROM episodes WHERE podcast_id = ? ORDER BY id",
                (podcast.id,),
            ).fetchall()
            podcast.episodes = [SqliteEpisodeStore.row_to_episode(row) for row in rows]


class SqliteEpisodeStore(SqliteStore[Episode], EpisodeStore):
    table = "episodes"
    columns = ("podcast_id", "created_at", "updated_at", "title", "category")

    def _to_row(self, episode: Episode) -> Dict[str, Any]:
        return {
            "podcast_id": episode.podcast_id,
            "created_at": episode.created_at.isoformat(),
            "updated_at": episode.updated_at.isoformat(),
            "title": episode.title,
            "category": episode.category,
        }

    @staticmethod
    def row_to_episode(row: sqlite3.Row) -> Episode:
        return Episode(
            id=row["id"],
            podcast_id=row["podcast_id"],
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
            title=row["title"],
            category=row["category"],
        )

    def _from_row(self, row: sqlite3.Row) -> Episode:
        return self.row_to_episode(row)


class SqliteUserStore(SqliteStore[User], UserStore):
    """
    SQLite user store.

    The password column is read only when selected, and an UPDATE with a
    NULL password keeps the stored hash.
    """

    table = "users"
    columns = ("created_at", "updated_at", "email", "password", "role")

    def _select_columns(self, select: Optional[Sequence[str]] = None) -> List[str]:
        columns = [column for column in super()._select_columns() if column != "password"]
        if select and "password" in select:
            columns.append("password")
        return columns

    def _assignment(self, column: str) -> str:
        if column == "password":
            return "password = COALESCE(?, password)"
        return super()._assignment(column)

    def _to_row(self, user: User) -> Dict[str, Any]:
        return {
            "created_at": user.created_at.isoformat(),
            "updated_at": user.updated_at.isoformat(),
            "email": user.email,
            "password": user.password,
            "role": user.role.value,
        }

    def _from_row(self, row: sqlite3.Row) -> User:
        return User(
            id=row["id"],
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
            email=row["email"],
            password=row["password"] if "password" in row.keys() else None,
            role=UserRole(row["role"]),
        )
