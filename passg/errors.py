#!/usr/bin/env python3
"""
Error Taxonomy
==============
Exceptions raised by the generation engine.

- RandomUnavailable: no secure entropy source; fatal, never recovered
- InvalidOptions: bad caller input (length, word count, class, style)
- WordlistUnavailable: empty or undersized wordlist, failed provider
- ResourceExhausted: a bounded retry loop hit its cap; handled internally
"""


class PassGError(Exception):
    """Base class for all PassG errors."""


class RandomUnavailable(PassGError, RuntimeError):
    """The operating system cannot provide cryptographically secure bytes."""


class InvalidOptions(PassGError, ValueError):
    """Generation options are out of range or unknown."""


class WordlistUnavailable(PassGError, LookupError):
    """The wordlist is missing, empty, or smaller than requested."""


class ResourceExhausted(PassGError):
    """A bounded retry loop ran out of attempts."""

    def __init__(self, message: str, attempts: int = 0, best=None):
        super().__init__(message)
        self.attempts = attempts
        self.best = best


__all__ = [
    'PassGError',
    'RandomUnavailable',
    'InvalidOptions',
    'WordlistUnavailable',
    'ResourceExhausted',
]
