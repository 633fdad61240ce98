"""Unit tests for core/crypto.py"""

from datetime import datetime, timedelta, timezone

import pytest

from snipbin.core.crypto import (
    KEY_LENGTH, NONCE_SIZE, decrypt, derive_key, encrypt, legacy_plaintext, looks_like_plaintext,
)
from snipbin.core.errors import DecryptionError


NOW = datetime(2024, 5, 17, 12, 30, 45, tzinfo=timezone.utc)


@pytest.fixture(name="key", scope="module")
def key_fixture():
    return derive_key("cornflake-peddling-bp0q", NOW)


def test_derive_key_length(key):
    assert len(key) == KEY_LENGTH


def test_derive_key_is_deterministic(key):
    """The same (identifier, upload) pair always yields the same key."""
    assert derive_key("cornflake-peddling-bp0q", NOW) == key


def test_derive_key_depends_on_identifier(key):
    assert derive_key("cornflake-peddling-bp0r", NOW) != key


def test_derive_key_depends_on_upload_second(key):
    """One second of drift in the upload timestamp changes the key."""
    assert derive_key("cornflake-peddling-bp0q", NOW + timedelta(seconds=1)) != key


def test_derive_key_ignores_subsecond_precision(key):
    """Only the formatted whole-second timestamp is used as salt."""
    assert derive_key("cornflake-peddling-bp0q", NOW + timedelta(microseconds=250)) == key


def test_encrypt_decrypt_round_trip(key):
    plaintext = "<pre><code>print('hi')\n</code></pre>".encode("utf-8")
    assert decrypt(encrypt(plaintext, key), key) == plaintext


def test_encrypt_uses_fresh_nonce(key):
    """Encrypting twice gives different ciphertexts."""
    assert encrypt(b"same", key) != encrypt(b"same", key)


def test_ciphertext_layout(key):
    """nonce || ciphertext || 16 byte tag."""
    data = encrypt(b"hello", key)
    assert len(data) == NONCE_SIZE + len(b"hello") + 16


def test_decrypt_with_wrong_upload_fails(key):
    """A key derived from an upload one second off fails authentication."""
    data = encrypt(b"secret", key)
    wrong = derive_key("cornflake-peddling-bp0q", NOW - timedelta(seconds=1))
    with pytest.raises(DecryptionError, match="authentication"):
        decrypt(data, wrong)


def test_decrypt_tampered_ciphertext_fails(key):
    data = bytearray(encrypt(b"secret", key))
    data[-1] ^= 0x01
    with pytest.raises(DecryptionError):
        decrypt(bytes(data), key)


def test_decrypt_short_input_fails(key):
    """Input shorter than nonce + tag is rejected rather than passed to AES-GCM."""
    with pytest.raises(DecryptionError, match="too short"):
        decrypt(b"hi\n", key)


@pytest.mark.parametrize("data,expected", [
    (b"plain old text\n", True),
    (b"\x00\x01\x02", False),
    (b"", True),
])
def test_looks_like_plaintext(data, expected):
    assert looks_like_plaintext(data) is expected


@pytest.mark.parametrize("data,expected", [
    (b"<pre>old text</pre>\n", "<pre>old text</pre>\n"),
    (b"\x00old", None),
    (b"\xff\xfe\xfd", None),
])
def test_legacy_plaintext(data, expected):
    """Only NUL-free, valid UTF-8 bytes are accepted as pre-encryption text."""
    assert legacy_plaintext(data) == expected
