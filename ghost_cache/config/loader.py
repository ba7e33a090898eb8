"""
Ghost Cache - Configuration Loader

Loads and validates default options from environment variables and .env files.
Provides a singleton options instance for the default caching context.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

from ..errors import ConfigurationError
from .schemas import GhostCacheOptions

logger = logging.getLogger(__name__)

_options_instance: GhostCacheOptions | None = None


def load_options(
    env_file: str | None = None,
    reload: bool = False,
) -> GhostCacheOptions:
    """
    Load default options from environment variables and .env file.

    Args:
        env_file: Path to .env file (default: .env in the working directory)
        reload: Force reload even if options were already loaded

    Returns:
        Validated GhostCacheOptions instance

    Raises:
        ConfigurationError: If the environment holds invalid options
    """
    global _options_instance

    if _options_instance is not None and not reload:
        return _options_instance

    env_path = Path(env_file) if env_file else Path.cwd() / ".env"

    if env_path.exists():
        logger.info(f"Loading environment from {env_path}")
        try:
            load_dotenv(env_path, override=True)
        except Exception as e:
            logger.error(
                f"Failed to load .env file from {env_path}: {e}",
                extra={"path": str(env_path), "error": str(e)},
                exc_info=True,
            )
            raise ConfigurationError(
                f"Failed to load environment file: {e}",
                details={"path": str(env_path), "error": str(e)},
            ) from e
    else:
        logger.debug("No .env file found, using environment variables only")

    # Persist to redis automatically when REDIS_URL is set
    redis_url = os.getenv("REDIS_URL")
    storage = "redis" if redis_url else "memory"

    try:
        options_dict = {
            "ttl": int(os.getenv("GHOST_CACHE_TTL_MS", "60000")),
            "persistent": os.getenv("GHOST_CACHE_PERSISTENT", "false").lower() == "true",
            "max_entries": int(os.getenv("GHOST_CACHE_MAX_ENTRIES", "100")),
            "storage": os.getenv("GHOST_CACHE_STORAGE", storage),
            "namespace": os.getenv("GHOST_CACHE_NAMESPACE", "ghost_cache"),
            "disk_path": os.getenv("GHOST_CACHE_DISK_PATH", ".ghost_cache"),
            "redis_url": redis_url,
        }
        _options_instance = GhostCacheOptions(**options_dict)  # type: ignore[arg-type]
    except (ValidationError, ValueError) as e:
        logger.error(
            f"Options validation failed: {e}",
            extra={"error": str(e)},
            exc_info=True,
        )
        raise ConfigurationError(
            "Options validation failed. Check your GHOST_CACHE_* environment variables.",
            details={"error": str(e)},
        ) from e

    logger.info(
        "Options loaded (ttl=%sms, persistent=%s, storage=%s)",
        _options_instance.ttl,
        _options_instance.persistent,
        _options_instance.storage,
        extra={"ttl": _options_instance.ttl, "persistent": _options_instance.persistent},
    )
    return _options_instance


def get_options() -> GhostCacheOptions:
    """Get the current default options, loading them on first access."""
    if _options_instance is None:
        return load_options()
    return _options_instance


def reload_options(env_file: str | None = None) -> GhostCacheOptions:
    """
    Force reload default options.

    Args:
        env_file: Optional path to .env file

    Returns:
        Reloaded GhostCacheOptions instance
    """
    return load_options(env_file=env_file, reload=True)
