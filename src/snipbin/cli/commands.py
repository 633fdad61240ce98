"""CLI command implementations"""

import logging
import re
from contextlib import contextmanager
from datetime import datetime, timedelta
from pathlib import Path
from typing import Annotated, Iterator, Optional

import typer

from snipbin.config import Settings, load_config
from snipbin.core.engine import DocumentEngine, build_engine
from snipbin.core.errors import SnipbinError
from snipbin.core.models import Document
from snipbin.core.names import NameGenerator
from snipbin.core.utils.timestamps import VOLATILE, utcnow
from snipbin.crud.database import drop_db, init_db, make_engine
from snipbin.crud.sql_repo import SQLStore


_DURATION_RE = re.compile(r"^(\d+)([smhd])$")
_UNITS = {"s": "seconds", "m": "minutes", "h": "hours", "d": "days"}


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling, then configure logging."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")
    return settings


@contextmanager
def _engine(settings: Settings) -> Iterator[DocumentEngine]:
    """Engine over the configured database; waits for background view updates on exit."""
    db = make_engine(settings.db_url)
    init_db(db)
    store = SQLStore(db)
    try:
        try:
            engine = build_engine(settings, store)
        except (OSError, ValueError) as e:
            _fail(f"Couldn't load word list {settings.words_file}", e)
        yield engine
    finally:
        store.close()


def _expiration(value: str) -> Optional[datetime]:
    """'never' -> None, 'volatile' -> delete after first read, '<n>[smhd]' -> now + duration."""
    if value == "never":
        return None
    if value == "volatile":
        return VOLATILE
    m = _DURATION_RE.match(value)
    if not m:
        raise typer.BadParameter("expected 'never', 'volatile' or a duration like 30m, 12h, 7d")
    return utcnow() + timedelta(**{_UNITS[m.group(2)]: int(m.group(1))})


def init_cmd(
    reset: Annotated[bool, typer.Option("--reset", help="Drop and recreate all tables")] = False,
    ):
    """Initialize database schema. Use --reset to clear existing data."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    if reset:
        drop_db(engine)
        typer.echo("Existing data cleared.")
    init_db(engine)
    typer.echo(f"Database initialized at: {settings.db_url}")


def put_cmd(
    path: Annotated[str, typer.Argument(help="File to upload, or '-' for stdin")],
    syntax: Annotated[str, typer.Option("--syntax", "-s", help="Highlighting hint, e.g. python")] = "",
    custom: Annotated[str, typer.Option("--custom", help="Alternate rendering marker; stores escaped text without highlighting")] = "",
    expire: Annotated[str, typer.Option("--expire", "-e", help="never, volatile, or a duration like 1h")] = "never",
    words: Annotated[Optional[str], typer.Option("--words-file", help="Word list for identifiers")] = None,
    ):
    """Store a document and print its identifier."""
    settings = _settings(overrides={"words_file": words})
    try:
        content = typer.get_text_stream("stdin").read() if path == "-" else Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        _fail(f"Couldn't read {path}", e)
    doc = Document(content=content, syntax=syntax, custom=custom, expiration=_expiration(expire))

    with _engine(settings) as engine:
        try:
            engine.store(doc)
        except SnipbinError as e:
            _fail("Upload rejected", e)
    typer.echo(doc.id)


def get_cmd(
    doc_id: Annotated[str, typer.Argument(help="Document identifier")],
    raw: Annotated[bool, typer.Option("--raw", help="Strip markup and print plain text")] = False,
    ):
    """Print a stored document."""
    settings = _settings()
    with _engine(settings) as engine:
        try:
            doc = engine.request(doc_id, raw=raw)
        except LookupError:
            _fail(f"No document named {doc_id}")
        except (SnipbinError, ValueError) as e:
            _fail(f"Couldn't read {doc_id}", e)
    typer.echo(doc.content, nl=False)


def delete_cmd(
    doc_id: Annotated[str, typer.Argument(help="Document identifier")],
    ):
    """Delete a stored document."""
    settings = _settings()
    with _engine(settings) as engine:
        try:
            engine.delete(doc_id)
        except LookupError:
            _fail(f"No document named {doc_id}")
    typer.echo(f"Deleted {doc_id}")


def name_cmd(
    count: Annotated[int, typer.Option("--count", "-n", min=1, help="How many names to print")] = 1,
    words: Annotated[Optional[str], typer.Option("--words-file", help="Word list for identifiers")] = None,
    ):
    """Print random identifiers without storing anything."""
    settings = _settings(overrides={"words_file": words})
    try:
        names = NameGenerator.from_file(settings.words_file) if settings.words_file else NameGenerator()
    except (OSError, ValueError) as e:
        _fail(f"Couldn't load word list {settings.words_file}", e)
    for _ in range(count):
        typer.echo(names.generate())
