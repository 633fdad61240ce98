"""Shared fixtures for crud unit tests"""

import pytest

from snipbin.crud.database import drop_db, init_db, make_engine
from snipbin.crud.repo import StoredRecord
from snipbin.crud.sql_repo import SQLStore


@pytest.fixture(name="db")
def db_fixture(tmp_path):
    """File-backed SQLite engine, so the view-counter thread gets its own connection."""
    engine = make_engine(f"sqlite:///{tmp_path}/test.db")
    init_db(engine)
    yield engine
    drop_db(engine)


@pytest.fixture(name="sql_store")
def sql_store_fixture(db):
    store = SQLStore(db)
    yield store
    store.close()


@pytest.fixture(name="record")
def record_fixture():
    """A minimal record with binary content containing NUL bytes."""
    return StoredRecord(
        content=b"\x00\x01ciphertext\xff",
        custom="",
        syntax="python",
        upload="2024-05-17 12:30:45",
        expiration=None,
        views=0,
    )
