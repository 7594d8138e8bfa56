import os
from functools import lru_cache
from pathlib import Path

from fastapi import Depends

from src.adapters.bitly import BitlyClient, UnconfiguredShortener
from src.adapters.sqlite.repos import SQLiteMetaStore, SQLitePostRepo
from src.components.social_share import LinkGenerationService, ShareMeta
from src.ports.shortener import ShortenerPort
from src.rules.loader import default_rules_path, load_rules
from src.rules.models import Rules


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.data_dir = Path(os.environ.get("SOCIAL_SHARE_DATA_DIR", "./data"))
        self.db_path = str(self.data_dir / "social_share.db")
        self.migrations_dir = str(self.base_dir / "migrations")
        self.rules_path = default_rules_path()


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
def get_rules(settings: Settings = Depends(get_settings)) -> Rules:
    return _load_rules_cached(str(settings.rules_path))


@lru_cache
def _load_rules_cached(path: str) -> Rules:
    return load_rules(Path(path))


# --- Repos ---
def get_post_repo(settings: Settings = Depends(get_settings)) -> SQLitePostRepo:
    return SQLitePostRepo(settings.db_path)


def get_meta_store(settings: Settings = Depends(get_settings)) -> SQLiteMetaStore:
    return SQLiteMetaStore(settings.db_path)


# --- Adapters ---
# One Bitly client per (token, api_url, timeout), reused across requests
_bitly_clients: dict[tuple[str, str, float], BitlyClient] = {}


def get_shortener(rules: Rules = Depends(get_rules)) -> ShortenerPort:
    """
    Bitly client for the configured token. The token is re-read on every
    call, so setting it later takes effect without a restart.
    """
    config = rules.shortener
    token = os.environ.get(config.token_env)
    if not token:
        return UnconfiguredShortener(f"Bitly access token missing ({config.token_env})")

    key = (token, config.api_url, config.timeout_seconds)
    client = _bitly_clients.get(key)
    if client is None:
        client = BitlyClient(token=token, api_url=config.api_url, timeout=config.timeout_seconds)
        _bitly_clients[key] = client
    return client


def close_shortener_clients() -> None:
    """Close every cached Bitly client (app shutdown)."""
    for client in _bitly_clients.values():
        client.close()
    _bitly_clients.clear()


# --- Component Services ---
def get_share_meta(
    store: SQLiteMetaStore = Depends(get_meta_store),
    rules: Rules = Depends(get_rules),
) -> ShareMeta:
    return ShareMeta(store, prefix=rules.meta_prefix)


def get_link_generation_service(
    meta: ShareMeta = Depends(get_share_meta),
    shortener: ShortenerPort = Depends(get_shortener),
    rules: Rules = Depends(get_rules),
) -> LinkGenerationService:
    return LinkGenerationService(meta=meta, shortener=shortener, rules=rules)
