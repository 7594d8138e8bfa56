import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI

from src.adapters.sqlite.migrator import SQLiteMigrator
from src.api.deps import close_shortener_clients, get_settings
from src.app_shell.config import validate_ops_rules
from src.rules.loader import default_rules_path, load_rules
from src.rules.models import Rules

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings = get_settings()

    # Load rules and validate on startup (fail-fast)
    try:
        rules = load_rules(settings.rules_path)
        validate_ops_rules(rules)
        logger.info("Rules loaded from %s", settings.rules_path)
    except (FileNotFoundError, ValueError) as e:
        logger.critical("Rules load failed: %s", e)
        sys.exit(1)

    settings.data_dir.mkdir(parents=True, exist_ok=True)
    SQLiteMigrator(settings.db_path, settings.migrations_dir).run_migrations()

    yield

    close_shortener_clients()


def _rest_namespace() -> str:
    """
    Namespace the router is mounted under, read before the app is built.

    Without a rules file the default namespace is used and the lifespan
    reports the missing file. An invalid file exits here with status 1.
    """
    path = default_rules_path()
    if not path.exists():
        return Rules().rest_namespace

    try:
        return load_rules(path).rest_namespace
    except ValueError as e:
        logger.critical("Rules load failed: %s", e)
        sys.exit(1)


app = FastAPI(
    title="Social Share Links API",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# --- Routers ---
from src.api.routes import social_share  # noqa: E402

app.include_router(social_share.router, prefix=f"/{_rest_namespace()}", tags=["Social Share"])


@app.get("/health")
def health_check() -> dict[str, Any]:
    """Health check endpoint."""
    return {"status": "ok", "service": "social-share"}
