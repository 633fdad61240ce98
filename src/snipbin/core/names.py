"""Human-readable random identifiers, e.g. "cornflake-peddling-bp0q"."""

import logging
import secrets
import string
from pathlib import Path
from typing import Callable, Sequence

from snipbin.core.errors import RandomnessExhausted
from snipbin.core.utils.hashing import sha256


logger = logging.getLogger(__name__)

CHARACTERS = tuple(string.ascii_lowercase + string.digits)
DRAWS = 6
WORD_DRAWS = 2
SEPARATED_DRAWS = 3
MAX_DRAW_ATTEMPTS = 10


def parse_words(text: str) -> tuple[str, ...]:
    """Lowercase and trim each line, dropping blanks and '#' comments. Raises ValueError if nothing remains."""
    words = []
    for line in text.split("\n"):
        word = line.strip().lower()
        if word and not word.startswith("#"):
            words.append(word)
    if not words:
        raise ValueError("word list doesn't contain any words")
    return tuple(words)


def load_words(path: str | Path) -> tuple[str, ...]:
    """Read a newline-delimited word list file."""
    words = parse_words(Path(path).read_text(encoding="utf-8"))
    logger.debug("%d words loaded from %s", len(words), path)
    return words


class NameGenerator:
    """Draws identifiers from an immutable word list and a lowercase alphanumeric alphabet.

    With words: two words, then four characters after a hyphen. Without words:
    six characters and no hyphens.
    """

    def __init__(self, words: Sequence[str] = (), randbelow: Callable[[int], int] = secrets.randbelow):
        self.words = tuple(words)
        self._randbelow = randbelow

    @classmethod
    def from_file(cls, path: str | Path) -> "NameGenerator":
        return cls(load_words(path))

    def _draw(self, pool: Sequence[str]) -> str:
        error = None
        for _ in range(MAX_DRAW_ATTEMPTS):
            try:
                return pool[self._randbelow(len(pool))]
            except Exception as e:
                error = e
        logger.critical("Randomness source failed %d times in a row: %s", MAX_DRAW_ATTEMPTS, error)
        raise RandomnessExhausted(f"randomness source failed: {error}") from error

    def generate(self) -> str:
        text = ""
        for i in range(DRAWS):
            if i < WORD_DRAWS and self.words:
                draw = self._draw(self.words)
            else:
                draw = self._draw(CHARACTERS)
            if i < SEPARATED_DRAWS and self.words:
                text += "-" + draw
            else:
                text += draw
        return text.removeprefix("-")


def generate_safe_name(names: NameGenerator, exists: Callable[[str], bool]) -> str:
    """Generate names until one's hashed key is not already taken in the store."""
    while True:
        name = names.generate()
        if not exists(sha256(name)):
            return name
        logger.info("Identifier collision, drawing again")
