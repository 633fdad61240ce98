from __future__ import annotations
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

from snipbin.crud import tables  # noqa: F401  registers DocumentRow on the metadata


def make_engine(db_url: str):
    """Engine usable from the background view-counter thread as well as the caller's."""
    if not db_url.startswith("sqlite"):
        return create_engine(db_url, echo=False)
    connect_args = {"check_same_thread": False}
    if db_url in ("sqlite://", "sqlite:///:memory:"):
        return create_engine(db_url, echo=False, connect_args=connect_args, poolclass=StaticPool)
    return create_engine(db_url, echo=False, connect_args=connect_args)


def init_db(engine) -> None:
    SQLModel.metadata.create_all(engine)


def drop_db(engine) -> None:
    SQLModel.metadata.drop_all(engine)
