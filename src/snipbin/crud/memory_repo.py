from dataclasses import dataclass, field, replace

from snipbin.core.errors import DocumentNotFound
from snipbin.crud.repo import BlobStore, StoredRecord


@dataclass
class MemoryStore(BlobStore):
    _records: dict[str, StoredRecord] = field(default_factory=dict)

    def put(self, key: str, record: StoredRecord) -> None:
        if key in self._records:
            raise KeyError(f"record {key} already exists")
        self._records[key] = record

    def get(self, key: str) -> StoredRecord:
        try:
            return self._records[key]
        except KeyError:
            raise DocumentNotFound(key) from None

    def exists(self, key: str) -> bool:
        return key in self._records

    def increment_views(self, key: str) -> None:
        if record := self._records.get(key):
            self._records[key] = replace(record, views=record.views + 1)

    def delete(self, key: str) -> bool:
        return self._records.pop(key, None) is not None
