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

import click

# This module can be executed in two ways:
# 1. Package mode: `podhost` command (pyproject.toml entry point)
# 2. Module mode: `python -m podhost.cli` (uses __main__ guard at bottom)
from .logging import configure_structlog
from .models.user import UserRole
from .repositories.database import create_memory_stores, create_stores
from .services import TokenService, UserService
from .utils.config import load_config
from .utils.passwords import BcryptPasswordHasher


class CLIContext:
    """Container for CLI dependency injection."""

    def __init__(self, config):
        self.config = config


@click.group()
@click.option("--config", "-c", help="Path to .env file")
@click.pass_context
def main(ctx, config):
    """podhost - podcast hosting API"""
    configure_structlog()

    try:
        ctx.obj = CLIContext(config=load_config(config))
    except Exception as e:
        click.echo(f"❌ Configuration error: {e}", err=True)
        ctx.exit(1)


@main.command("create-account")
@click.argument("email")
@click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True, help="Account password")
@click.option(
    "--role",
    type=click.Choice([role.value for role in UserRole]),
    default=UserRole.LISTENER.value,
    help="Account role (default: Listener)",
)
@click.pass_context
def create_account(ctx, email, password, role):
    """Create a user account in the configured database"""
    config = ctx.obj.config
    config.ensure_database_dir()
    stores = create_stores(config)

    token_service = TokenService(config.ensure_jwt_secret(), config.jwt_algorithm)
    user_service = UserService(stores.user, token_service, BcryptPasswordHasher(rounds=config.bcrypt_rounds))

    result = user_service.create_account(email, password, UserRole(role))
    if not result.ok:
        click.echo(f"❌ {result.error}", err=True)
        ctx.exit(1)

    click.echo(f"✓ Created {role} account: {email}")


@main.command()
@click.option("--host", "-h", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
@click.option("--port", "-p", default=8000, type=int, help="Port to bind to (default: 8000)")
@click.option("--memory", is_flag=True, help="Use in-memory stores instead of the SQLite database")
@click.pass_context
def server(ctx, host, port, memory):
    """Start the API server.

    Examples:
        podhost server                      # Start on localhost:8000
        podhost server --port 8080          # Custom port
        podhost server --memory             # Throwaway in-memory data
    """
    import uvicorn

    from .web.app import create_app

    config = ctx.obj.config
    stores = create_memory_stores() if memory else None

    click.echo("🌐 Starting podhost web server...")
    click.echo(f"   Host: {host}")
    click.echo(f"   Port: {port}")
    click.echo(f"   Database: {'in-memory' if memory else config.database_path}")
    click.echo(f"📚 API Docs: http://{host}:{port}/docs")

    app = create_app(config, stores=stores)

    # log_config=None keeps uvicorn on the root handler set up by configure_structlog
    uvicorn.run(app, host=host, port=port, log_config=None)


if __name__ == "__main__":
    main()
