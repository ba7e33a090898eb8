"""
Ghost Cache - Configuration Schemas

Defines typed configuration models using Pydantic for validation and type safety.

Options are established at enable time. A later enable call merges the
explicitly provided fields into the existing options instead of resetting
them (see GhostCacheOptions.merge).
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..storage.interface import StorageAdapter


class StoragePreset(str, Enum):
    """Named persistent storage backends."""

    MEMORY = "memory"
    DISK = "disk"  # Requires diskcache
    REDIS = "redis"  # Requires redis_url


class GhostCacheOptions(BaseModel):
    """Cache and interception options."""

    ttl: int = Field(default=60000, ge=0, description="Entry time-to-live in milliseconds")
    persistent: bool = Field(default=False, description="Mirror entries to a persistent storage adapter")
    max_entries: int = Field(default=100, ge=1, description="Max in-memory entries (FIFO eviction)")
    storage: StoragePreset | StorageAdapter = Field(
        default=StoragePreset.MEMORY,
        description="Storage preset name or an injected StorageAdapter instance",
    )
    namespace: str = Field(default="ghost_cache", description="Key prefix for shared persistent backends")

    # Preset-specific settings
    redis_url: str | None = Field(default=None, description="Redis connection URL (storage=redis)")
    disk_path: str = Field(default=".ghost_cache", description="Cache directory (storage=disk)")

    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    @model_validator(mode="after")
    def validate_redis_url(self) -> "GhostCacheOptions":
        """Ensure redis_url is provided when persisting to redis."""
        if self.persistent and self.storage == StoragePreset.REDIS and not self.redis_url:
            raise ValueError("redis_url is required when storage is 'redis'")
        return self

    def merge(self, overrides: "GhostCacheOptions | dict[str, Any] | None") -> "GhostCacheOptions":
        """
        Return a copy with the explicitly provided fields of overrides applied.

        Fields that were not set on overrides keep their current value, so
        enable(ttl=5000) followed by enable(persistent=True) keeps ttl=5000.

        Args:
            overrides: Options model or plain dict of option fields

        Returns:
            New validated GhostCacheOptions instance
        """
        if overrides is None:
            return self.model_copy()

        if isinstance(overrides, GhostCacheOptions):
            update = {name: getattr(overrides, name) for name in overrides.model_fields_set}
        else:
            update = dict(overrides)

        merged = self.model_dump()
        merged["storage"] = self.storage
        merged.update(update)
        return GhostCacheOptions(**merged)
