"""
Ghost Cache - Cache Entry

Timestamped record stored in both cache layers.

The persisted form is compact JSON {"timestamp": <ms>, "data": "<body>"},
where data is itself the already-serialized response body.
"""

from pydantic import BaseModel, ConfigDict, Field


class CacheEntry(BaseModel):
    """A cached body and the wall-clock millisecond it was written."""

    timestamp: int = Field(description="Creation time in milliseconds since the epoch")
    data: str = Field(description="Serialized response body or manual value")

    model_config = ConfigDict(frozen=True)

    def is_fresh(self, ttl: int, now: int) -> bool:
        """Return True while the entry's age is strictly below ttl."""
        return now - self.timestamp < ttl

    def dumps(self) -> str:
        """Encode the entry for a storage adapter."""
        return self.model_dump_json()

    @classmethod
    def loads(cls, raw: str) -> "CacheEntry":
        """
        Decode an entry read from a storage adapter.

        Raises:
            pydantic.ValidationError: If raw is not a well-formed record
        """
        return cls.model_validate_json(raw)
