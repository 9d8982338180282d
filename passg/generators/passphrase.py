#!/usr/bin/env python3
"""
Passphrase Generator
====================
Builds passphrases from a caller-supplied wordlist.

Words are chosen by shuffling the full index range and keeping the first N
indices, so no word repeats. The chosen indices then go through the
entropic shuffle: one shuffle, then for each prime offset 3, 5, 7 a left
rotation, a reversal on even iterations, and another shuffle.

Advanced passphrases capitalize each word and join them with a random
digit+symbol separator ("Rocket7%Harbor2~Velvet"); simple ones are lowercase
words joined by spaces.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

from ..errors import InvalidOptions, WordlistUnavailable
from ..resources import wordlist_handle
from ..settings import get_setting
from ..strength import EntropyResult, estimate_passphrase_entropy
from .entropy import SecureRandom, get_rng
from .pools import SEPARATOR_DIGITS, SEPARATOR_SYMBOLS

logger = logging.getLogger(__name__)

PRIME_OFFSETS = (3, 5, 7)


@dataclass
class PassphraseOptions:
    """Options for one passphrase; unset fields come from app.yaml."""
    word_count: Optional[int] = None
    advanced: Optional[bool] = None

    def __post_init__(self):
        cfg = get_setting("passphrase", {}) or {}
        if self.word_count is None:
            self.word_count = cfg.get("word_count")
        if self.advanced is None:
            self.advanced = cfg.get("advanced")

        missing = [
            name for name, value in (
                ("word_count", self.word_count),
                ("advanced", self.advanced),
            )
            if value is None
        ]
        if missing:
            raise ValueError(f"passphrase settings missing in app.yaml: {', '.join(missing)}")

        if isinstance(self.word_count, bool) or not isinstance(self.word_count, int):
            raise InvalidOptions(f"Word count must be an integer, got {self.word_count!r}")
        if self.word_count < 1:
            raise InvalidOptions(f"Word count must be at least 1, got {self.word_count}")
        self.advanced = bool(self.advanced)


def entropic_shuffle(items: Sequence[Any], rng: SecureRandom = None) -> List[Any]:
    """
    Compound shuffle: shuffle, then per prime offset rotate left by
    (prime % len), reverse on even iterations, and reshuffle.
    """
    rng = rng or get_rng()
    if len(items) < 2:
        return list(items)

    result = rng.shuffle(items)
    for idx, prime in enumerate(PRIME_OFFSETS):
        offset = prime % len(result)
        rotated = result[offset:] + result[:offset]
        if idx % 2 == 0:
            rotated.reverse()
        result = rng.shuffle(rotated)
    return result


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:]


class PassphraseGenerator:
    """
    Passphrase builder bound to one wordlist.

    Args:
        wordlist: Word sequence, zero-argument provider, Future, or
                  LazyResource. None uses the process-wide handle
                  (configured path or fallback list). Providers run once.
        rng: Random source (defaults to the process-wide SecureRandom)
    """

    def __init__(self, wordlist=None, rng: SecureRandom = None):
        self.rng = rng or get_rng()
        self._wordlist = wordlist_handle(wordlist)

    @property
    def words(self) -> Sequence[str]:
        """The resolved wordlist."""
        try:
            words = self._wordlist.get()
        except OSError as e:
            raise WordlistUnavailable(f"Wordlist could not be loaded: {e}") from e
        if not words:
            raise WordlistUnavailable("Wordlist not loaded")
        return words

    def select(self, word_count: int) -> List[str]:
        """Pick `word_count` distinct words in entropic-shuffled order."""
        words = self.words
        if len(words) < word_count:
            raise WordlistUnavailable(
                f"Wordlist has {len(words)} words, {word_count} requested")

        indices = self.rng.shuffle(range(len(words)))[:word_count]
        return [words[i] for i in entropic_shuffle(indices, self.rng)]

    def separators(self, count: int) -> List[str]:
        """`count` separators of one digit plus one symbol."""
        return [
            self.rng.pick(SEPARATOR_DIGITS) + self.rng.pick(SEPARATOR_SYMBOLS)
            for _ in range(count)
        ]

    def generate(self, options: PassphraseOptions = None) -> str:
        """Generate a passphrase for the given options (defaults from app.yaml)."""
        options = options or PassphraseOptions()
        selected = [w.lower() for w in self.select(options.word_count)]

        if not options.advanced:
            return ' '.join(selected)

        separators = self.separators(len(selected) - 1)
        parts = []
        for i, word in enumerate(selected):
            parts.append(_capitalize(word))
            if i < len(separators):
                parts.append(separators[i])
        return ''.join(parts)

    def entropy(self, options: PassphraseOptions = None) -> EntropyResult:
        """Analytic entropy of passphrases drawn from this wordlist."""
        options = options or PassphraseOptions()
        return estimate_passphrase_entropy(options.word_count, len(self.words), options.advanced)


def generate_passphrase(wordlist, options: PassphraseOptions = None,
                        rng: SecureRandom = None, **overrides) -> str:
    """
    Generate a passphrase from `wordlist`.

    Raises WordlistUnavailable when the list is empty or shorter than the
    requested word count.
    """
    if options is None:
        options = PassphraseOptions(**overrides)
    elif overrides:
        raise InvalidOptions("Pass either options or keyword overrides, not both")
    if wordlist is None:
        raise WordlistUnavailable("No wordlist supplied")
    return PassphraseGenerator(wordlist, rng).generate(options)


__all__ = [
    'PRIME_OFFSETS',
    'PassphraseOptions',
    'PassphraseGenerator',
    'entropic_shuffle',
    'generate_passphrase',
]
