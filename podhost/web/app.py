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
FastAPI application factory for the podhost web server.

Usage:
    from podhost.web.app import create_app
    app = create_app()
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from ..repositories.database import Stores, create_stores
from ..services import PodcastService, TokenService, UserService
from ..utils.config import Config, load_config
from ..utils.passwords import BcryptPasswordHasher
from .dependencies import AppState
from .middleware import LoggingMiddleware
from .routes import health, podcasts, users

logger = logging.getLogger(__name__)


def create_app(config: Optional[Config] = None, stores: Optional[Stores] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Optional Config object. If not provided, loads from environment.
        stores: Optional record stores. If not provided, SQLite stores are
            opened on config.database_path.

    Returns:
        Configured FastAPI application instance.
    """
    if config is None:
        config = load_config()

    if stores is None:
        config.ensure_database_dir()
        stores = create_stores(config)

    token_service = TokenService(config.ensure_jwt_secret(), config.jwt_algorithm)
    password_hasher = BcryptPasswordHasher(rounds=config.bcrypt_rounds)

    app_state = AppState(
        user_service=UserService(stores.user, token_service, password_hasher),
        podcast_service=PodcastService(stores.podcast, stores.episode),
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager for startup/shutdown."""
        logger.info("Starting podhost web server...")
        logger.info(f"Database: {config.database_path}")
        yield
        logger.info("Shutting down podhost web server...")

    app = FastAPI(
        title="podhost",
        description="Podcast hosting API with host and listener accounts",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Set eagerly so routes work even when the lifespan is not run
    app.state.app_state = app_state

    app.add_middleware(LoggingMiddleware)

    app.include_router(health.router, tags=["health"])
    app.include_router(users.router, prefix="/users", tags=["users"])
    app.include_router(podcasts.router, prefix="/podcasts", tags=["podcasts"])

    return app
