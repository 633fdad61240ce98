"""Error taxonomy for the document store engine"""


class SnipbinError(Exception):
    """Base class for all engine errors."""


class ContentRejected(SnipbinError):
    """Input rejected before anything is encrypted or persisted (binary or oversized content)."""


class SpamRejected(ContentRejected):
    """The spam filter vetoed the write."""


class DocumentNotFound(SnipbinError, LookupError):
    """No record exists for the requested identifier. Never logged."""


class DocumentExpired(SnipbinError):
    """The document's hard expiration has passed; no content is returned."""


class DecryptionError(SnipbinError):
    """Ciphertext failed authentication (tampered data or wrong key)."""


class HighlightError(SnipbinError):
    """The highlighter could not render the content; recovered on write."""


class RandomnessExhausted(SystemExit):
    """The system randomness source failed repeatedly.

    Subclasses SystemExit so ordinary ``except Exception`` handlers cannot
    swallow it: continuing with degraded randomness would weaken every
    identifier, and with it every derived key.
    """
