"""Keyed blob store contract used by the document engine"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class StoredRecord:
    """A persisted document as the store sees it: encrypted content plus metadata strings."""
    content: bytes
    custom: str
    syntax: str
    upload: str                         # YYYY-MM-DD HH:MM:SS, UTC
    expiration: Optional[str] = None    # same format; None = never
    views: int = 0


class BlobStore(ABC):
    """Records are addressed by the hashed identifier, never the identifier itself."""

    @abstractmethod
    def put(self, key: str, record: StoredRecord) -> None:
        raise NotImplementedError

    @abstractmethod
    def get(self, key: str) -> StoredRecord:
        """Return the record, or raise DocumentNotFound."""
        raise NotImplementedError

    @abstractmethod
    def exists(self, key: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def increment_views(self, key: str) -> None:
        """Best effort; must not block the caller or raise on failure."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Return True if a record was removed."""
        raise NotImplementedError

    def close(self) -> None:
        """Release resources and wait for pending background work."""
