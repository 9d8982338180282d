#!/usr/bin/env python3
"""
Character Pools
===============
The symbol sets passwords and separators are drawn from.

Pools are built once per (class, exclusion set) and are immutable. Every
pool carries its CharacterClass, so membership questions ("which class does
this character belong to?") are answered from the pools themselves rather
than re-derived per character.

Pool kinds:
- Literal: an ordered tuple of distinct symbols (letters, digits, symbols,
  loaded emoji)
- Range: a tuple of inclusive code-point ranges (the combined non-Latin
  scripts), drawn from without materializing the ranges
"""

import logging
import string
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple

from ..errors import InvalidOptions

logger = logging.getLogger(__name__)


# =============================================================================
# Character Classes
# =============================================================================

class CharacterClass(Enum):
    """Character classes a universal password can draw from."""
    LOWERCASE = "lowercase"
    UPPERCASE = "uppercase"
    NUMBERS = "numbers"
    SYMBOLS = "symbols"
    EXTENDED_SYMBOLS = "extended_symbols"
    NON_LATIN = "non_latin"
    EMOJI = "emoji"

    @classmethod
    def parse(cls, value) -> 'CharacterClass':
        """Accept an enum member or a name like 'nonLatin' / 'non-latin'."""
        if isinstance(value, cls):
            return value
        raw = str(value).strip()
        # camelCase -> snake_case
        snake = ''.join('_' + c.lower() if c.isupper() else c for c in raw).lstrip('_')
        for key in (raw.lower(), snake):
            key = key.replace('-', '_')
            for member in cls:
                if member.value == key:
                    return member
        valid = ', '.join(m.value for m in cls)
        raise InvalidOptions(f"Unknown character class '{value}'. Valid classes: {valid}")


CLASS_DESCRIPTIONS = {
    CharacterClass.LOWERCASE: "Latin lowercase letters a-z",
    CharacterClass.UPPERCASE: "Latin uppercase letters A-Z",
    CharacterClass.NUMBERS: "Digits 0-9",
    CharacterClass.SYMBOLS: "Common symbols !@#$%^&*+-_=?:|",
    CharacterClass.EXTENDED_SYMBOLS: "Brackets, quotes, slashes and other ASCII punctuation",
    CharacterClass.NON_LATIN: "Greek, Cyrillic, Hebrew, Arabic, Devanagari, Thai, Hangul, Kana, CJK, math",
    CharacterClass.EMOJI: "Emoji glyphs",
}


# =============================================================================
# Literal Alphabets
# =============================================================================

LOWERCASE = string.ascii_lowercase
UPPERCASE = string.ascii_uppercase
NUMBERS = string.digits
SYMBOLS = "!@#$%^&*+-_=?:|"
EXTENDED_SYMBOLS = "~;.,'\"`/\\()[]{}<>"

# Basic mode drops glyphs that are easy to misread (0/O/o, 1/l/I/i, L).
LOOKALIKES = "01iIlLoO"
BASIC_LOWERCASE = "abcdefghjkmnpqrstuvwxyz"
BASIC_UPPERCASE = "ABCDEFGHJKMNPQRSTUVWXYZ"
BASIC_NUMBERS = "23456789"
BASIC_SYMBOLS = "!@#$%^&*+-_=?:|~;.{}<>[]()/\\'`"

# Passphrase separators: one digit followed by one of 16 symbols.
SEPARATOR_DIGITS = string.digits
SEPARATOR_SYMBOLS = "!@#$%^&*+-_=?:|~"

_LITERALS = {
    CharacterClass.LOWERCASE: LOWERCASE,
    CharacterClass.UPPERCASE: UPPERCASE,
    CharacterClass.NUMBERS: NUMBERS,
    CharacterClass.SYMBOLS: SYMBOLS,
    CharacterClass.EXTENDED_SYMBOLS: EXTENDED_SYMBOLS,
}


def unique_chars(text: Iterable[str]) -> Tuple[str, ...]:
    """De-duplicate preserving first occurrence."""
    return tuple(dict.fromkeys(text))


# =============================================================================
# Script Ranges
# =============================================================================

@dataclass(frozen=True)
class ScriptRange:
    """Inclusive code-point range of one script block."""
    name: str
    start: int
    end: int

    @property
    def size(self) -> int:
        return self.end - self.start + 1

    def __contains__(self, char: str) -> bool:
        return len(char) == 1 and self.start <= ord(char) <= self.end


NON_LATIN_RANGES = (
    ScriptRange("latin1", 0x00A1, 0x00FF),
    ScriptRange("latinext", 0x0100, 0x017F),
    ScriptRange("greek", 0x0370, 0x03FF),
    ScriptRange("cyrillic", 0x0400, 0x04FF),
    ScriptRange("hebrew", 0x0590, 0x05FF),
    ScriptRange("arabic", 0x0600, 0x06FF),
    ScriptRange("devanagari", 0x0900, 0x097F),
    ScriptRange("thai", 0x0E00, 0x0E7F),
    ScriptRange("hangul", 0x1100, 0x11FF),
    ScriptRange("math", 0x2200, 0x22FF),
    ScriptRange("hiragana", 0x3040, 0x309F),
    ScriptRange("katakana", 0x30A0, 0x30FF),
    ScriptRange("cjk", 0x4E00, 0x9FBF),
)

EMOJI_RANGE = ScriptRange("emoji", 0x1F300, 0x1F64F)
VARIATION_SELECTOR = "\ufe0f"


@lru_cache(maxsize=1)
def builtin_emoji() -> Tuple[str, ...]:
    """Every printable code point of the Misc Symbols/Emoticons blocks."""
    return tuple(
        chr(cp) for cp in range(EMOJI_RANGE.start, EMOJI_RANGE.end + 1)
        if chr(cp).isprintable()
    )


# =============================================================================
# Pools
# =============================================================================

@dataclass(frozen=True)
class CharacterPool:
    """
    Immutable pool for one character class.

    Literal pools hold `symbols`; range pools hold `ranges`. Exclusions are
    applied to literal pools at construction and to range pools at draw
    time (see PasswordGenerator).
    """
    char_class: CharacterClass
    symbols: Tuple[str, ...] = ()
    ranges: Tuple[ScriptRange, ...] = ()

    @property
    def is_range(self) -> bool:
        return bool(self.ranges)

    def __len__(self) -> int:
        if self.ranges:
            return sum(r.size for r in self.ranges)
        return len(self.symbols)

    def __contains__(self, char: str) -> bool:
        if self.ranges:
            return any(char in r for r in self.ranges)
        return char in self.symbols

    def available(self, excluded: FrozenSet[str] = frozenset()) -> int:
        """Code points left once `excluded` is removed."""
        return len(self) - sum(1 for c in excluded if c in self)


@lru_cache(maxsize=64)
def literal_pool(char_class: CharacterClass, excluded: FrozenSet[str] = frozenset()) -> CharacterPool:
    """Build the filtered literal pool for an ASCII class."""
    alphabet = _LITERALS.get(char_class)
    if alphabet is None:
        raise InvalidOptions(f"{char_class.value} is not a literal ASCII class")
    return CharacterPool(
        char_class=char_class,
        symbols=tuple(c for c in alphabet if c not in excluded),
    )


def emoji_pool(emoji: Optional[Sequence[str]] = None, excluded: FrozenSet[str] = frozenset()) -> CharacterPool:
    """
    Build the emoji pool from a loaded list (or the built-in range).

    Password length counts code points, so only glyphs that are a single
    code point once U+FE0F is stripped are kept. Modifier and ZWJ sequences
    are dropped.
    """
    glyphs = builtin_emoji() if not emoji else emoji
    singles = [g.replace(VARIATION_SELECTOR, "") for g in glyphs]
    kept = tuple(g for g in unique_chars(singles) if len(g) == 1 and g not in excluded)
    dropped = len(glyphs) - sum(1 for g in singles if len(g) == 1)
    if dropped:
        logger.debug(f"Dropped {dropped} multi-code-point emoji glyphs")
    return CharacterPool(char_class=CharacterClass.EMOJI, symbols=kept)


NON_LATIN_POOL = CharacterPool(char_class=CharacterClass.NON_LATIN, ranges=NON_LATIN_RANGES)


def build_pools(classes: Iterable[CharacterClass],
                excluded: FrozenSet[str] = frozenset(),
                emoji: Optional[Sequence[str]] = None) -> List[CharacterPool]:
    """
    Resolve enabled classes to non-empty pools, in CharacterClass order.

    Classes whose pool is empty after exclusions are dropped, including a
    range pool whose every code point is excluded.
    """
    enabled = {CharacterClass.parse(c) for c in classes}
    pools = []
    for char_class in CharacterClass:
        if char_class not in enabled:
            continue
        if char_class is CharacterClass.NON_LATIN:
            pool = NON_LATIN_POOL
        elif char_class is CharacterClass.EMOJI:
            pool = emoji_pool(emoji, excluded)
        else:
            pool = literal_pool(char_class, excluded)
        if pool.available(excluded):
            pools.append(pool)
    return pools


@lru_cache(maxsize=1)
def basic_pool() -> Tuple[str, ...]:
    """The lookalike-free Basic mode alphabet."""
    return unique_chars(BASIC_LOWERCASE + BASIC_UPPERCASE + BASIC_NUMBERS + BASIC_SYMBOLS)


# =============================================================================
# Classification
# =============================================================================

def _ascii_classes() -> Dict[str, CharacterClass]:
    table = {}
    for char_class, alphabet in _LITERALS.items():
        for c in alphabet:
            table[c] = char_class
    return table


_ASCII_CLASS_TABLE = _ascii_classes()


def classify(char: str) -> CharacterClass:
    """
    Return the class a single character belongs to.

    ASCII characters outside every literal pool (space, controls) count as
    symbols; anything above U+007F is emoji when it falls in the emoji block
    and non-Latin otherwise.
    """
    found = _ASCII_CLASS_TABLE.get(char)
    if found is not None:
        return found
    if char and ord(char[0]) < 0x80:
        return CharacterClass.SYMBOLS
    if char and char[0] in EMOJI_RANGE:
        return CharacterClass.EMOJI
    return CharacterClass.NON_LATIN


__all__ = [
    'CharacterClass',
    'CLASS_DESCRIPTIONS',
    'CharacterPool',
    'ScriptRange',
    'NON_LATIN_RANGES',
    'NON_LATIN_POOL',
    'EMOJI_RANGE',
    'LOWERCASE',
    'UPPERCASE',
    'NUMBERS',
    'SYMBOLS',
    'EXTENDED_SYMBOLS',
    'LOOKALIKES',
    'SEPARATOR_DIGITS',
    'SEPARATOR_SYMBOLS',
    'basic_pool',
    'builtin_emoji',
    'literal_pool',
    'emoji_pool',
    'build_pools',
    'classify',
    'unique_chars',
]
