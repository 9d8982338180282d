#!/usr/bin/env python3
"""
Entropy Module for Secret Generation
====================================
Provides unbiased, cryptographically secure randomness for every generator.

Features:
- Bounded integer draws with rejection sampling (no modulo bias)
- Float draws in [0, 1) from a single 32-bit word
- Single-item pick, Fisher-Yates shuffle, k-of-n sampling
- Loud failure when the operating system has no secure source

All raw material comes from os.urandom() in 32-bit words. A different byte
source can be injected (tests script draws this way); it is never replaced
by a non-cryptographic generator.
"""

import os
from typing import Any, Callable, List, Optional, Sequence

from ..errors import RandomUnavailable


# =============================================================================
# Constants
# =============================================================================

WORD_BYTES = 4
WORD_SPACE = 1 << 32

# sample() draws sparse indices instead of copying the population when
# SPARSE_SAMPLE_RATIO * k < len(population).
SPARSE_SAMPLE_RATIO = 4


def system_bytes(count: int) -> bytes:
    """Read `count` bytes from the operating system CSPRNG."""
    try:
        return os.urandom(count)
    except NotImplementedError as e:
        raise RandomUnavailable("Secure random number generation is not supported.") from e


# =============================================================================
# Secure Random Number Generator
# =============================================================================

class SecureRandom:
    """
    Unbiased random draws over a cryptographically secure byte source.

    Every draw consumes whole 32-bit words. Integer draws reject words at or
    above the largest multiple of the modulus that fits in 2**32, so each
    residue is equally likely.

    Usage:
        rng = SecureRandom()
        rng.randbelow(6)          # 0..5
        rng.shuffle("abcdef")     # new list, input untouched
        rng.sample(words, 4)      # 4 distinct elements
    """

    def __init__(self, source: Optional[Callable[[int], bytes]] = None):
        """
        Args:
            source: Callable returning the requested number of secure bytes.
                    Defaults to os.urandom().
        """
        self._source = source or system_bytes

    def _word(self) -> int:
        """Draw one unsigned 32-bit value."""
        try:
            data = self._source(WORD_BYTES)
        except (NotImplementedError, OSError) as e:
            raise RandomUnavailable(f"Secure random source failed: {e}") from e
        if data is None or len(data) != WORD_BYTES:
            raise RandomUnavailable("Secure random source returned a short read")
        return int.from_bytes(data, 'big')

    def randbelow(self, n: int) -> int:
        """Return a uniformly distributed integer in [0, n)."""
        if n <= 0:
            raise ValueError(f"Upper bound must be positive, got {n}")
        limit = (WORD_SPACE // n) * n
        value = self._word()
        while value >= limit:
            value = self._word()
        return value % n

    def random(self) -> float:
        """Return random float in [0.0, 1.0)."""
        return self._word() / WORD_SPACE

    def randint(self, a: int, b: int) -> int:
        """Return random integer N such that a <= N <= b."""
        return a + self.randbelow(b - a + 1)

    def chance(self, probability: float) -> bool:
        """Return True with the given probability."""
        return self.random() < probability

    def pick(self, pool: Sequence[Any]) -> Any:
        """
        Return one element of `pool`.

        An empty pool yields "" rather than raising; callers that cannot
        accept an empty result must check the pool first.
        """
        if not pool:
            return ""
        return pool[self.randbelow(len(pool))]

    def shuffle(self, seq: Sequence[Any]) -> List[Any]:
        """Return a new list with the elements of `seq` in random order."""
        items = list(seq)
        for i in range(len(items) - 1, 0, -1):
            j = self.randbelow(i + 1)
            items[i], items[j] = items[j], items[i]
        return items

    def sample(self, population: Sequence[Any], k: int) -> List[Any]:
        """
        Return k distinct elements (by position) from population.

        Strategies:
        - k >= len: full shuffle
        - sparse (SPARSE_SAMPLE_RATIO * k < len): random indices, redrawn on
          collision, without copying the population
        - otherwise: partial Fisher-Yates over the first k slots of a copy

        Each k-subset, in each order, is equally likely under all three.
        """
        if not population or k <= 0:
            return []
        n = len(population)
        if k >= n:
            return self.shuffle(population)

        if SPARSE_SAMPLE_RATIO * k < n:
            chosen = []
            seen = set()
            while len(chosen) < k:
                idx = self.randbelow(n)
                if idx in seen:
                    continue
                seen.add(idx)
                chosen.append(population[idx])
            return chosen

        items = list(population)
        for i in range(k):
            j = i + self.randbelow(n - i)
            items[i], items[j] = items[j], items[i]
        return items[:k]


# Global instance
_secure_random = SecureRandom()

def get_rng() -> SecureRandom:
    """Get the process-wide secure random number generator."""
    return _secure_random


# =============================================================================
# Module-level convenience functions
# =============================================================================

def randbelow(n: int) -> int:
    """Get an unbiased random integer in [0, n)."""
    return _secure_random.randbelow(n)

def random() -> float:
    """Get a secure random float in [0.0, 1.0)."""
    return _secure_random.random()

def randint(a: int, b: int) -> int:
    """Get a secure random integer in [a, b]."""
    return _secure_random.randint(a, b)

def pick(pool: Sequence[Any]) -> Any:
    """Get a secure random element from pool ("" when empty)."""
    return _secure_random.pick(pool)

def shuffle(seq: Sequence[Any]) -> List[Any]:
    """Get a shuffled copy of seq."""
    return _secure_random.shuffle(seq)

def sample(population: Sequence[Any], k: int) -> List[Any]:
    """Get k distinct random elements."""
    return _secure_random.sample(population, k)


__all__ = [
    # Core RNG
    'SecureRandom',
    'get_rng',
    'system_bytes',
    'WORD_SPACE',
    'SPARSE_SAMPLE_RATIO',
    # Convenience functions
    'randbelow',
    'random',
    'randint',
    'pick',
    'shuffle',
    'sample',
]
