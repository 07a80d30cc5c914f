"""Application entry point: wiring, logging, and the uvicorn runner."""

import logging
from dataclasses import dataclass
from pathlib import Path

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.errors import register_error_handlers
from api.middleware import RequestIDMiddleware
from api.tasks import create_tasks_router
from auth.api import create_auth_router, create_users_router
from auth.config import AuthConfig
from auth.database import AuthDatabase
from auth.passwords import PasswordHasher
from auth.security_logger import SecurityLogger
from auth.security_middleware import AuthMiddleware
from auth.service import AuthService
from auth.tokens import TokenManager
from clients.postgres_client import PostgresClient
from clients.vault_client import get_database_url, get_jwt_secret
from config import AppConfig
from core.audit import AuditLogger
from core.services.task_service import TaskService

logger = logging.getLogger(__name__)


@dataclass
class Services:
    """Constructed services handed to create_app."""

    auth: AuthService
    task: TaskService


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_services(postgres: PostgresClient, jwt_secret: str, auth_config: AuthConfig) -> Services:
    """Construct every service over one Postgres client."""
    auth_service = AuthService(
        config=auth_config,
        auth_db=AuthDatabase(postgres),
        token_manager=TokenManager(jwt_secret, auth_config),
        password_hasher=PasswordHasher(rounds=auth_config.bcrypt_rounds),
        security_logger=SecurityLogger(postgres),
    )
    task_service = TaskService(postgres, AuditLogger(postgres))
    return Services(auth=auth_service, task=task_service)


def create_app(
    services: Services,
    app_config: AppConfig | None = None,
    auth_config: AuthConfig | None = None,
) -> FastAPI:
    """FastAPI app with auth middleware, error handlers, and routes."""
    app_config = app_config or AppConfig()
    auth_config = auth_config or AuthConfig()

    app = FastAPI(
        title="Task Manager API",
        description="Authentication and calendar-filtered task management",
        version="1.0.0",
    )

    # Last added runs first: CORS -> request ID -> auth
    app.add_middleware(AuthMiddleware, auth_service=services.auth)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_config.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "Accept"],
        expose_headers=["X-Request-ID"],
        max_age=3600,
    )
    register_error_handlers(app)

    app.include_router(create_auth_router(services.auth, auth_config), prefix="/auth")
    app.include_router(create_tasks_router(services.task), prefix="/tasks")
    app.include_router(create_users_router(), prefix="/users")

    @app.get("/health", tags=["health"])
    async def health():
        return {"status": "ok"}

    return app


def main() -> None:
    """Run the API with secrets from Vault."""
    load_dotenv(Path(__file__).parent / ".env")

    app_config = AppConfig.from_env()
    auth_config = AuthConfig()
    configure_logging(app_config.log_level)

    postgres = PostgresClient(get_database_url())
    services = build_services(postgres, get_jwt_secret(), auth_config)
    app = create_app(services, app_config, auth_config)

    logger.info(f"Starting task manager API on {app_config.host}:{app_config.port}")
    try:
        uvicorn.run(app, host=app_config.host, port=app_config.port, log_config=None)
    finally:
        PostgresClient.close_all_pools()


if __name__ == "__main__":
    main()
