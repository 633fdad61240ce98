"""Document entity passed through the store and read paths"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class Document(BaseModel):
    """A hosted text snippet and its metadata.

    id and upload are assigned by DocumentEngine.store(). Before storage,
    content is the raw user input; after retrieval it is the rendered form,
    or plain text when raw retrieval was requested.
    """
    id: str = ""
    content: str = ""
    syntax: str = ""                        # highlighting hint; empty = none
    custom: str = ""                        # non-empty = stored pre-escaped, no highlighting
    upload: Optional[datetime] = None
    expiration: Optional[datetime] = None   # None = never; <= epoch = volatile
    views: int = 0
