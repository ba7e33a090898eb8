"""
Ghost Cache - Options and Loader Tests
"""

import pytest
from pydantic import ValidationError

from ghost_cache.config import GhostCacheOptions, StoragePreset, load_options, reload_options
from ghost_cache.errors import ConfigurationError
from ghost_cache.storage import InMemoryStorageAdapter


class TestGhostCacheOptions:
    def test_defaults(self) -> None:
        options = GhostCacheOptions()

        assert options.ttl == 60000
        assert options.persistent is False
        assert options.max_entries == 100
        assert options.storage == StoragePreset.MEMORY

    def test_storage_accepts_preset_name(self) -> None:
        assert GhostCacheOptions(storage="disk").storage == StoragePreset.DISK

    def test_storage_accepts_adapter_instance(self) -> None:
        adapter = InMemoryStorageAdapter()
        assert GhostCacheOptions(storage=adapter).storage is adapter

    def test_rejects_invalid_values(self) -> None:
        with pytest.raises(ValidationError):
            GhostCacheOptions(ttl=-1)
        with pytest.raises(ValidationError):
            GhostCacheOptions(max_entries=0)
        with pytest.raises(ValidationError):
            GhostCacheOptions(storage="localStorage")

    def test_redis_requires_url_when_persistent(self) -> None:
        with pytest.raises(ValidationError):
            GhostCacheOptions(persistent=True, storage="redis")

        options = GhostCacheOptions(persistent=True, storage="redis", redis_url="redis://localhost:6379/0")
        assert options.redis_url == "redis://localhost:6379/0"

    def test_merge_keeps_unset_fields(self) -> None:
        base = GhostCacheOptions().merge({"ttl": 5000})
        merged = base.merge(GhostCacheOptions(persistent=True))

        assert merged.ttl == 5000
        assert merged.persistent is True
        assert merged.max_entries == 100

    def test_merge_keeps_injected_adapter(self) -> None:
        adapter = InMemoryStorageAdapter()
        merged = GhostCacheOptions(storage=adapter).merge({"ttl": 10})

        assert merged.storage is adapter

    def test_merge_none_is_copy(self) -> None:
        base = GhostCacheOptions(ttl=10)
        merged = base.merge(None)

        assert merged == base
        assert merged is not base


class TestLoadOptions:
    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
        for name in (
            "GHOST_CACHE_TTL_MS",
            "GHOST_CACHE_PERSISTENT",
            "GHOST_CACHE_MAX_ENTRIES",
            "GHOST_CACHE_STORAGE",
            "GHOST_CACHE_NAMESPACE",
            "GHOST_CACHE_DISK_PATH",
            "REDIS_URL",
        ):
            monkeypatch.delenv(name, raising=False)
        monkeypatch.chdir(tmp_path)

    def test_defaults_without_env(self) -> None:
        options = reload_options()

        assert options.ttl == 60000
        assert options.persistent is False
        assert options.storage == StoragePreset.MEMORY

    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GHOST_CACHE_TTL_MS", "5000")
        monkeypatch.setenv("GHOST_CACHE_PERSISTENT", "true")
        monkeypatch.setenv("GHOST_CACHE_MAX_ENTRIES", "2")
        monkeypatch.setenv("GHOST_CACHE_STORAGE", "disk")

        options = reload_options()

        assert options.ttl == 5000
        assert options.persistent is True
        assert options.max_entries == 2
        assert options.storage == StoragePreset.DISK

    def test_redis_url_selects_redis(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("REDIS_URL", "redis://localhost:6379/0")

        assert reload_options().storage == StoragePreset.REDIS

    def test_env_file(self, tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
        # Registers the variable so teardown removes what load_dotenv writes
        monkeypatch.setenv("GHOST_CACHE_TTL_MS", "60000")
        env_file = tmp_path / "ghost.env"
        env_file.write_text("GHOST_CACHE_TTL_MS=1234\n")

        options = load_options(env_file=str(env_file), reload=True)

        assert options.ttl == 1234

    def test_invalid_env_raises_configuration_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GHOST_CACHE_MAX_ENTRIES", "zero")

        with pytest.raises(ConfigurationError):
            reload_options()

    def test_cached_until_reload(self, monkeypatch: pytest.MonkeyPatch) -> None:
        first = reload_options()
        monkeypatch.setenv("GHOST_CACHE_TTL_MS", "1")

        assert load_options() is first
        assert reload_options().ttl == 1
