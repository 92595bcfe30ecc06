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

import logging
import os
import secrets
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

logger = logging.getLogger(__name__)


class Config(BaseModel):
    # Authentication
    jwt_secret_key: str = ""
    jwt_algorithm: str = "HS256"
    bcrypt_rounds: int = 12

    # Storage
    database_path: str = "./data/podhost.db"

    def ensure_jwt_secret(self) -> str:
        """Return the signing key, generating a per-process one if none is configured"""
        if not self.jwt_secret_key:
            logger.warning("JWT_SECRET_KEY not set, generating random key for this session")
            self.jwt_secret_key = secrets.token_hex(32)
        return self.jwt_secret_key

    def ensure_database_dir(self) -> None:
        """Create the directory holding the SQLite file if it doesn't exist"""
        Path(self.database_path).parent.mkdir(parents=True, exist_ok=True)


def load_config(env_file: Optional[str] = None) -> Config:
    """Load configuration from environment variables and .env file"""
    if env_file:
        load_dotenv(env_file)
    else:
        load_dotenv()

    bcrypt_rounds = int(os.getenv("BCRYPT_ROUNDS", "12"))
    if not 4 <= bcrypt_rounds <= 31:
        raise ValueError(f"BCRYPT_ROUNDS must be between 4 and 31, got {bcrypt_rounds}")

    config_data = {
        "jwt_secret_key": os.getenv("JWT_SECRET_KEY", ""),
        "jwt_algorithm": os.getenv("JWT_ALGORITHM", "HS256"),
        "bcrypt_rounds": bcrypt_rounds,
        "database_path": os.getenv("DATABASE_PATH", "./data/podhost.db"),
    }

    return Config(**config_data)
