"""Per-document key derivation and authenticated encryption.

The key is never stored. It is re-derived on every read with scrypt from the
identifier (password) and the formatted upload timestamp (salt), then used
for AES-GCM. A 24 byte key selects AES-192. Ciphertext layout: nonce || ct || tag.
"""

import os
from datetime import datetime
from typing import Optional

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt

from snipbin.core.errors import DecryptionError
from snipbin.core.utils.timestamps import format_timestamp


SCRYPT_N = 16384
SCRYPT_R = 8
SCRYPT_P = 1
KEY_LENGTH = 24
NONCE_SIZE = 12
TAG_SIZE = 16


def derive_key(doc_id: str, upload: datetime) -> bytes:
    kdf = Scrypt(
        salt=format_timestamp(upload).encode("utf-8"),
        length=KEY_LENGTH, n=SCRYPT_N, r=SCRYPT_R, p=SCRYPT_P,
    )
    return kdf.derive(doc_id.encode("utf-8"))


def encrypt(plaintext: bytes, key: bytes) -> bytes:
    nonce = os.urandom(NONCE_SIZE)
    return nonce + AESGCM(key).encrypt(nonce, plaintext, None)


def decrypt(data: bytes, key: bytes) -> bytes:
    """Raises DecryptionError if data was tampered with or the key is wrong."""
    if len(data) < NONCE_SIZE + TAG_SIZE:
        raise DecryptionError("message authentication failed: ciphertext too short")
    try:
        return AESGCM(key).decrypt(data[:NONCE_SIZE], data[NONCE_SIZE:], None)
    except InvalidTag as e:
        raise DecryptionError("message authentication failed") from e


def looks_like_plaintext(data: bytes) -> bool:
    """Heuristic for records written before encryption: they never contain NUL bytes."""
    return b"\x00" not in data


def legacy_plaintext(data: bytes) -> Optional[str]:
    """The text of a pre-encryption record, or None if data can't be one (NUL bytes or invalid UTF-8)."""
    if not looks_like_plaintext(data):
        return None
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return None
