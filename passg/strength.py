#!/usr/bin/env python3
"""
Strength Estimation
===================
Entropy estimates for generated secrets.

Passwords are measured: the alphabet size is guessed from the character
classes present, floored at the number of distinct characters, and repeated
characters cost REPETITION_PENALTY bits per extra occurrence.

Passphrases are not measured from the string. Their entropy is analytic:
log2(wordlist size) per word, plus log2(SEPARATOR_SPACE) per separator in
advanced mode.
"""

import math
from collections import Counter
from dataclasses import dataclass
from enum import Enum

from .errors import InvalidOptions
from .generators.pools import CharacterClass, SEPARATOR_DIGITS, SEPARATOR_SYMBOLS, classify

REPETITION_PENALTY = 1.5

# (bucket, size) added to the pool guess once per bucket present
CLASS_POOL_SIZES = {
    CharacterClass.LOWERCASE: ("lowercase", 26),
    CharacterClass.UPPERCASE: ("uppercase", 26),
    CharacterClass.NUMBERS: ("numbers", 10),
    CharacterClass.SYMBOLS: ("symbols", 33),
    CharacterClass.EXTENDED_SYMBOLS: ("symbols", 33),
    CharacterClass.NON_LATIN: ("unicode", 100),
    CharacterClass.EMOJI: ("unicode", 100),
}

# One separator is a digit followed by a symbol.
SEPARATOR_SPACE = len(SEPARATOR_DIGITS) * len(SEPARATOR_SYMBOLS)


class StrengthLabel(Enum):
    """Verdict bands for an entropy estimate."""
    WEAK = "Weak"
    STRONG = "Strong"
    VERY_STRONG = "Very Strong"
    QUANTUM_RESISTANT = "Quantum Resistant"

    @classmethod
    def from_bits(cls, bits: int) -> 'StrengthLabel':
        for threshold, label in LABEL_THRESHOLDS:
            if bits >= threshold:
                return label
        return cls.WEAK


LABEL_THRESHOLDS = (
    (150, StrengthLabel.QUANTUM_RESISTANT),
    (100, StrengthLabel.VERY_STRONG),
    (60, StrengthLabel.STRONG),
)


@dataclass(frozen=True)
class EntropyResult:
    """Estimated strength of one secret."""
    bits: int
    label: StrengthLabel

    def meter_percent(self, scale_bits: int = 128) -> int:
        """Fill level of a strength meter that is full at `scale_bits`."""
        return min(100, round(self.bits / scale_bits * 100))

    def to_dict(self) -> dict:
        return {"bits": self.bits, "label": self.label.value}


def _result(bits: float) -> EntropyResult:
    bits = max(0, round(bits))
    return EntropyResult(bits=bits, label=StrengthLabel.from_bits(bits))


def estimate_pool_size(password: str) -> int:
    """Alphabet size guessed from the classes present in `password`."""
    buckets = {}
    for char in set(password):
        bucket, size = CLASS_POOL_SIZES[classify(char)]
        buckets[bucket] = size
    return max(sum(buckets.values()), len(set(password)))


def repetition_penalty(password: str) -> float:
    """REPETITION_PENALTY bits for every occurrence beyond the first."""
    counts = Counter(password)
    return sum((n - 1) * REPETITION_PENALTY for n in counts.values() if n > 1)


def estimate_password_entropy(password: str) -> EntropyResult:
    """
    Estimate the entropy of a finished password.

    bits = round(log2(max(2, pool)) * length - penalty), floored at 0
    """
    if not password:
        return EntropyResult(bits=0, label=StrengthLabel.WEAK)
    pool = estimate_pool_size(password)
    raw = math.log2(max(2, pool)) * len(password) - repetition_penalty(password)
    return _result(raw)


def estimate_passphrase_entropy(word_count: int, wordlist_size: int, advanced: bool = False) -> EntropyResult:
    """Analytic passphrase entropy for a uniformly chosen word sequence."""
    if word_count < 1:
        raise InvalidOptions(f"Word count must be at least 1, got {word_count}")
    if wordlist_size < 1:
        raise InvalidOptions(f"Wordlist size must be at least 1, got {wordlist_size}")

    bits = word_count * math.log2(wordlist_size)
    if advanced and word_count > 1:
        bits += (word_count - 1) * math.log2(SEPARATOR_SPACE)
    return _result(bits)


__all__ = [
    'REPETITION_PENALTY',
    'SEPARATOR_SPACE',
    'StrengthLabel',
    'LABEL_THRESHOLDS',
    'EntropyResult',
    'estimate_pool_size',
    'repetition_penalty',
    'estimate_password_entropy',
    'estimate_passphrase_entropy',
]
