from __future__ import annotations
import logging
from concurrent.futures import Future, ThreadPoolExecutor

from sqlmodel import Session

from snipbin.core.errors import DocumentNotFound
from snipbin.crud.repo import BlobStore, StoredRecord
from snipbin.crud.tables import DocumentRow


logger = logging.getLogger(__name__)


def _row_to_record(r: DocumentRow) -> StoredRecord:
    return StoredRecord(
        content=bytes(r.content),
        custom=r.custom,
        syntax=r.syntax,
        upload=r.upload,
        expiration=r.expiration,
        views=r.views,
    )


class SQLStore(BlobStore):
    def __init__(self, engine):
        self.engine = engine
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="snipbin-views")

    def put(self, key: str, record: StoredRecord) -> None:
        with Session(self.engine) as session:
            session.add(DocumentRow(
                id=key,
                content=record.content,
                custom=record.custom,
                syntax=record.syntax,
                upload=record.upload,
                expiration=record.expiration,
                views=record.views,
            ))
            session.commit()

    def get(self, key: str) -> StoredRecord:
        with Session(self.engine) as session:
            row = session.get(DocumentRow, key)
            if row is None:
                raise DocumentNotFound(key)
            return _row_to_record(row)

    def exists(self, key: str) -> bool:
        with Session(self.engine) as session:
            return session.get(DocumentRow, key) is not None

    def _increment(self, key: str) -> None:
        with Session(self.engine) as session:
            row = session.get(DocumentRow, key)
            if row is None:
                return
            row.views += 1
            session.add(row)
            session.commit()

    @staticmethod
    def _report(future: Future) -> None:
        if (e := future.exception()) is not None:
            logger.warning("Couldn't increment view counter: %s", e)

    def increment_views(self, key: str) -> None:
        try:
            future = self._executor.submit(self._increment, key)
        except RuntimeError as e:  # executor already shut down
            logger.warning("Couldn't schedule view counter increment: %s", e)
            return
        future.add_done_callback(self._report)

    def delete(self, key: str) -> bool:
        with Session(self.engine) as session:
            row = session.get(DocumentRow, key)
            if row is None:
                return False
            session.delete(row)
            session.commit()
            return True

    def close(self) -> None:
        self._executor.shutdown(wait=True)
