#!/usr/bin/env python3
"""
Shared Resources
================
Write-once handles for the inputs the engine does not build itself: the
passphrase wordlist and the optional emoji list.

A LazyResource wraps either a ready value, a zero-argument provider, or a
concurrent.futures.Future. The provider runs at most once, behind a lock;
afterwards the cached value is served read-only.

Usage:
    from passg.resources import LazyResource, load_wordlist

    words = LazyResource(lambda: load_wordlist("eff_large_wordlist.txt"), "wordlist")
    words.get()   # loads
    words.get()   # cached
"""

import logging
import threading
from concurrent.futures import Future
from pathlib import Path
from typing import Any, Callable, List, Optional, Union

from .errors import WordlistUnavailable
from .generators.pools import builtin_emoji
from .settings import get_setting, resolve_path

logger = logging.getLogger(__name__)

_UNSET = object()

# Used when no wordlist path is configured.
FALLBACK_WORDS = (
    "abandon", "ability", "able", "about", "above", "absent", "absorb",
    "abstract", "absurd", "abuse", "access", "accident", "account", "accuse",
    "achieve", "acid", "acoustic", "acquire", "across", "act", "action",
    "actor", "actress", "actual", "adapt", "add", "addict", "address",
    "adjust", "admit", "adult", "advance",
)


class LazyResource:
    """Once-initialized handle around a value, provider, or future."""

    def __init__(self, source: Union[Any, Callable[[], Any], Future], name: str = "resource"):
        self.name = name
        self._lock = threading.Lock()
        if isinstance(source, Future) or callable(source):
            self._source = source
            self._value = _UNSET
        else:
            self._source = None
            self._value = source

    @classmethod
    def of(cls, source, name: str = "resource") -> 'LazyResource':
        """Wrap `source` unless it already is a handle."""
        if isinstance(source, cls):
            return source
        return cls(source, name)

    @property
    def loaded(self) -> bool:
        return self._value is not _UNSET

    def get(self) -> Any:
        """Return the value, resolving the provider on first use."""
        if self._value is not _UNSET:
            return self._value
        with self._lock:
            if self._value is _UNSET:
                logger.debug(f"Resolving {self.name}")
                source = self._source
                if isinstance(source, Future):
                    value = source.result()
                else:
                    value = source()
                self._value = value
                self._source = None
        return self._value


# =============================================================================
# File Loaders
# =============================================================================

def load_wordlist(path: Union[str, Path]) -> List[str]:
    """
    Load a wordlist file.

    Accepts the EFF dice format ("11111\\tabacus") or one word per line.
    Blank lines and '#' comments are skipped; the last whitespace-separated
    token of each line is kept, lowercased, de-duplicated in order.
    """
    filepath = Path(path)
    if not filepath.exists():
        raise WordlistUnavailable(f"Wordlist not found: {filepath}")

    words = []
    with open(filepath, 'r', encoding='utf-8') as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith('#'):
                continue
            word = line.split()[-1].lower()
            if word:
                words.append(word)

    words = list(dict.fromkeys(words))
    if not words:
        raise WordlistUnavailable(f"No words loaded from wordlist: {filepath}")
    logger.debug(f"Loaded {len(words)} words from {filepath}")
    return words


def load_emoji(path: Union[str, Path]) -> List[str]:
    """Load one emoji glyph per line."""
    filepath = Path(path)
    if not filepath.exists():
        raise FileNotFoundError(f"Emoji list not found: {filepath}")
    with open(filepath, 'r', encoding='utf-8') as f:
        glyphs = [line.strip() for line in f if line.strip() and not line.startswith('#')]
    return list(dict.fromkeys(glyphs))


def _configured_wordlist() -> List[str]:
    path = get_setting("passphrase.wordlist_path")
    if not path:
        return list(FALLBACK_WORDS)
    return load_wordlist(resolve_path(path))


def _configured_emoji() -> List[str]:
    path = get_setting("emoji.path")
    if not path:
        return list(builtin_emoji())
    return load_emoji(resolve_path(path))


# Process-wide handles
_default_wordlist = LazyResource(_configured_wordlist, "wordlist")
_default_emoji = LazyResource(_configured_emoji, "emoji list")


def default_wordlist() -> LazyResource:
    """Get the process-wide wordlist handle (configured path or fallback)."""
    return _default_wordlist


def default_emoji() -> LazyResource:
    """Get the process-wide emoji handle (configured path or built-in range)."""
    return _default_emoji


def wordlist_handle(wordlist: Optional[Any] = None) -> LazyResource:
    """Handle for an explicit wordlist/provider, or the default one."""
    if wordlist is None:
        return _default_wordlist
    return LazyResource.of(wordlist, "wordlist")


__all__ = [
    'LazyResource',
    'FALLBACK_WORDS',
    'load_wordlist',
    'load_emoji',
    'default_wordlist',
    'default_emoji',
    'wordlist_handle',
]
