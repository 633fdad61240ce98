"""Document store engine: write and read paths over an encrypted keyed blob store"""

import logging
from datetime import datetime
from typing import Callable, Optional

from snipbin.config import Settings
from snipbin.core import crypto
from snipbin.core.errors import DecryptionError, DocumentExpired, DocumentNotFound, HighlightError, SpamRejected
from snipbin.core.models import Document
from snipbin.core.names import NameGenerator, generate_safe_name
from snipbin.core.normalize import normalize_content
from snipbin.core.render import SpamFilter, escape_html, highlight, strip_html
from snipbin.core.utils.hashing import sha256
from snipbin.core.utils.timestamps import (
    VOLATILE, format_timestamp, is_volatile, parse_timestamp, round_to_second, utcnow,
)
from snipbin.crud.repo import BlobStore, StoredRecord


logger = logging.getLogger(__name__)


class DocumentEngine:
    """Assigns identifiers, renders, encrypts and persists documents, and reverses that on read.

    Volatile documents are deleted by the read that finds them. That read
    still returns the content. The background view counter plays no part in
    the decision.
    """

    def __init__(
        self,
        store: BlobStore,
        names: Optional[NameGenerator] = None,
        spam_filter: Optional[SpamFilter] = None,
        max_filesize: int = 0,
        allow_legacy_plaintext: bool = True,
        clock: Callable[[], datetime] = utcnow,
        ):
        self.repo = store
        self.names = names or NameGenerator()
        self.spam_filter = spam_filter or SpamFilter()
        self.max_filesize = max_filesize
        self.allow_legacy_plaintext = allow_legacy_plaintext
        self.clock = clock

    def render(self, doc: Document) -> str:
        """Highlighted HTML, or escaped HTML for custom documents. Highlighter failure falls back to escaping."""
        if doc.custom:
            return escape_html(doc.content)
        try:
            return highlight(doc.content, doc.syntax)
        except HighlightError as e:
            logger.warning("Skipped syntax highlighting for the following reason: %s", e)
            return escape_html(doc.content)

    def store(self, doc: Document) -> Document:
        """Assign doc.id and doc.upload, then persist the encrypted rendered content.

        Raises ContentRejected / SpamRejected before anything is encrypted or
        written. Persistence errors propagate unchanged. doc is only updated
        once the record has been written.
        """
        expiration = doc.expiration
        if expiration is not None:
            expiration = VOLATILE if is_volatile(expiration) else round_to_second(expiration)
        staged = doc.model_copy(update={
            "content": normalize_content(doc.content, self.max_filesize),
            "syntax": "" if doc.syntax == "none" else doc.syntax,
            "expiration": expiration,
        })

        rendered = self.render(staged)
        try:
            self.spam_filter.check(staged, rendered)
        except SpamRejected as e:
            logger.warning("Spam filter hit for document: %s", e)
            raise

        staged.id = generate_safe_name(self.names, self.repo.exists)
        staged.upload = round_to_second(self.clock())
        key = crypto.derive_key(staged.id, staged.upload)
        self.repo.put(sha256(staged.id), StoredRecord(
            content=crypto.encrypt(rendered.encode("utf-8"), key),
            custom=staged.custom,
            syntax=staged.syntax,
            upload=format_timestamp(staged.upload),
            expiration=format_timestamp(expiration) if expiration is not None else None,
            views=0,
        ))

        for name in ("id", "content", "syntax", "upload", "expiration"):
            setattr(doc, name, getattr(staged, name))
        return doc

    def _decrypt(self, doc_id: str, record: StoredRecord, upload: datetime) -> str:
        try:
            return crypto.decrypt(record.content, crypto.derive_key(doc_id, upload)).decode("utf-8")
        except DecryptionError as e:
            text = crypto.legacy_plaintext(record.content) if self.allow_legacy_plaintext else None
            if text is not None:
                # Written before encryption was introduced
                logger.debug("Serving legacy plaintext record")
                return text
            logger.error("AES error: %s", e)
            raise

    def request(self, doc_id: str, raw: bool = False) -> Document:
        """Fetch, decrypt and return a document.

        Raises DocumentNotFound (quietly), DocumentExpired for past hard
        expirations, and DecryptionError when authentication fails.
        """
        key = sha256(doc_id)
        try:
            record = self.repo.get(key)
        except DocumentNotFound:
            raise
        except Exception as e:
            logger.warning("Error retrieving document: %s", e)
            raise

        self.repo.increment_views(key)

        upload = parse_timestamp(record.upload)
        doc = Document(
            id=doc_id,
            content=self._decrypt(doc_id, record, upload),
            syntax=record.syntax,
            custom=record.custom,
            upload=upload,
            views=record.views,
        )

        if record.expiration is not None:
            doc.expiration = parse_timestamp(record.expiration)
            if is_volatile(doc.expiration):
                try:
                    self.repo.delete(key)
                except Exception as e:
                    logger.error("Couldn't delete volatile document: %s", e)
            elif doc.expiration < self.clock():
                raise DocumentExpired("the document has expired")

        if raw:
            doc.content = strip_html(doc.content)
        return doc

    def delete(self, doc_id: str) -> None:
        if not self.repo.delete(sha256(doc_id)):
            raise DocumentNotFound(doc_id)


def build_engine(settings: Settings, store: BlobStore) -> DocumentEngine:
    """Wire an engine from settings: word list, spam filter, size limit."""
    names = NameGenerator.from_file(settings.words_file) if settings.words_file else NameGenerator()
    return DocumentEngine(
        store,
        names=names,
        spam_filter=SpamFilter(settings.spam_patterns, settings.max_links),
        max_filesize=settings.max_filesize,
        allow_legacy_plaintext=settings.allow_legacy_plaintext,
    )
