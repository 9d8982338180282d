#!/usr/bin/env python3
"""
Password Generator
==================
Two construction algorithms over the secure RNG:

- Basic: shuffle a fixed lookalike-free alphabet and take the first L
  characters. No repeats; L is clamped to the alphabet size.
- Universal: split L evenly across the enabled character classes (the
  remainder goes to randomly chosen classes), fill each class from its
  pool, then shuffle the whole password so class boundaries vanish.

Usage:
    from passg.generators.password import PasswordGenerator, PasswordOptions

    gen = PasswordGenerator()
    gen.basic(14)
    gen.universal(16, classes=['lowercase', 'uppercase', 'non_latin'])
    gen.generate(PasswordOptions(length=12, mode='universal', excluded_symbols='|'))
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Iterable, List, Optional, Sequence, Set, Tuple

from ..errors import InvalidOptions, ResourceExhausted
from ..resources import LazyResource, default_emoji
from ..settings import get_setting
from .entropy import SecureRandom, get_rng
from .pools import CharacterClass, CharacterPool, basic_pool, build_pools

logger = logging.getLogger(__name__)

# Attempts to find an unused character in a range pool before accepting a repeat.
RANGE_RETRY_LIMIT = 50


class PasswordMode(Enum):
    """Password construction algorithm."""
    BASIC = "basic"
    UNIVERSAL = "universal"

    @classmethod
    def parse(cls, value) -> 'PasswordMode':
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        # The web UI called universal mode "advanced".
        if key == "advanced":
            return cls.UNIVERSAL
        for member in cls:
            if member.value == key:
                return member
        raise InvalidOptions(f"Unknown password mode '{value}'. Valid modes: basic, universal")


def _validate_length(length) -> int:
    if isinstance(length, bool) or not isinstance(length, int):
        raise InvalidOptions(f"Password length must be an integer, got {length!r}")
    if length <= 0:
        raise InvalidOptions(f"Password length must be positive, got {length}")
    return length


@dataclass
class PasswordOptions:
    """Options for one password generation; unset fields come from app.yaml."""
    length: Optional[int] = None
    mode: Optional[PasswordMode] = None
    enabled_classes: Optional[FrozenSet[CharacterClass]] = None
    excluded_symbols: Optional[FrozenSet[str]] = None

    def __post_init__(self):
        cfg = get_setting("password", {}) or {}
        if self.length is None:
            self.length = cfg.get("length")
        if self.mode is None:
            self.mode = cfg.get("mode")
        if self.enabled_classes is None:
            self.enabled_classes = cfg.get("classes")
        if self.excluded_symbols is None:
            self.excluded_symbols = cfg.get("excluded", "")

        missing = [
            name for name, value in (
                ("length", self.length),
                ("mode", self.mode),
                ("classes", self.enabled_classes),
            )
            if value is None
        ]
        if missing:
            raise ValueError(f"password settings missing in app.yaml: {', '.join(missing)}")

        self.length = _validate_length(self.length)
        self.mode = PasswordMode.parse(self.mode)
        self.enabled_classes = frozenset(CharacterClass.parse(c) for c in self.enabled_classes)
        self.excluded_symbols = frozenset(self.excluded_symbols or ())


class PasswordGenerator:
    """
    Builds passwords from the secure RNG.

    Args:
        rng: Random source (defaults to the process-wide SecureRandom)
        emoji: Emoji glyph list, provider, or LazyResource for the emoji
               class (defaults to the process-wide emoji handle)
    """

    def __init__(self, rng: SecureRandom = None, emoji=None):
        self.rng = rng or get_rng()
        self._emoji = default_emoji() if emoji is None else LazyResource.of(emoji, "emoji list")

    # -------------------------------------------------------------------------
    # Basic mode
    # -------------------------------------------------------------------------

    def basic(self, length: int) -> str:
        """
        Lookalike-free password with no repeated characters.

        Lengths above the alphabet size are clamped, so the result can be
        shorter than requested.
        """
        length = _validate_length(length)
        pool = basic_pool()
        if length > len(pool):
            logger.debug(f"Basic length {length} clamped to pool size {len(pool)}")
            length = len(pool)
        return ''.join(self.rng.shuffle(pool)[:length])

    # -------------------------------------------------------------------------
    # Universal mode
    # -------------------------------------------------------------------------

    def pools_for(self, classes: Iterable, excluded: Iterable[str] = ()) -> List[CharacterPool]:
        """Resolve class names to non-empty pools (emoji loaded only if asked)."""
        classes = {CharacterClass.parse(c) for c in classes}
        emoji = self._emoji.get() if CharacterClass.EMOJI in classes else None
        return build_pools(classes, frozenset(excluded), emoji)

    def allocate(self, length: int, class_count: int) -> List[int]:
        """
        Quota per class: length // class_count each, with the remainder
        handed one apiece to randomly chosen classes.
        """
        if class_count <= 0:
            raise InvalidOptions("At least one character class is required")
        base, remainder = divmod(length, class_count)
        quotas = [base] * class_count
        for idx in self.rng.shuffle(range(class_count))[:remainder]:
            quotas[idx] += 1
        return quotas

    def universal(self, length: int, classes: Iterable = None, excluded: Iterable[str] = ()) -> str:
        """
        Multi-class password with an even, randomized split across classes.

        A range class that yields no drawable character is dropped and the
        quotas are rebuilt over the rest. Falls back to basic mode when no
        enabled class has any characters left after exclusions.
        """
        length = _validate_length(length)
        if classes is None:
            classes = get_setting("password.classes", [])
        excluded = frozenset(excluded)
        pools = self.pools_for(classes, excluded)

        while pools:
            quotas = self.allocate(length, len(pools))
            logger.debug("Quota: " + ", ".join(
                f"{p.char_class.value}={q}" for p, q in zip(pools, quotas)))

            chars, spent = self._fill(pools, quotas, excluded)
            if spent is None:
                return ''.join(self.rng.shuffle(chars))
            logger.debug(f"No drawable {spent.char_class.value} character, dropping the class")
            pools = [p for p in pools if p is not spent]

        logger.debug("No usable character class, falling back to basic mode")
        return self.basic(length)

    def _fill(self, pools: List[CharacterPool], quotas: List[int],
              excluded: FrozenSet[str]) -> Tuple[List[str], Optional[CharacterPool]]:
        """Draw every quota; stops at the first range pool with nothing drawable."""
        chars: List[str] = []
        used: Set[str] = set()
        for pool, count in zip(pools, quotas):
            if count == 0:
                continue
            if pool.is_range:
                for _ in range(count):
                    char = self._draw_from_ranges(pool, used, excluded)
                    if char is None:
                        return chars, pool
                    chars.append(char)
                    used.add(char)
            else:
                drawn = self._draw_literal(pool, count)
                chars.extend(drawn)
                used.update(drawn)
        return chars, None

    def _draw_literal(self, pool: CharacterPool, count: int) -> List[str]:
        """Unique draws while the pool lasts, independent picks beyond it."""
        if count <= len(pool.symbols):
            return self.rng.sample(pool.symbols, count)
        drawn = self.rng.shuffle(pool.symbols)
        drawn.extend(self.rng.pick(pool.symbols) for _ in range(count - len(pool.symbols)))
        return drawn

    def _draw_from_ranges(self, pool: CharacterPool, used: Set[str],
                          excluded: FrozenSet[str]) -> Optional[str]:
        """Unused character if possible, else a repeat, else None."""
        try:
            return self._unused_range_char(pool, used, excluded)
        except ResourceExhausted as e:
            if e.best is None:
                return None
            logger.debug(f"{e}; accepting a repeated character")
            return e.best

    def _unused_range_char(self, pool: CharacterPool, used: Set[str], excluded: FrozenSet[str]) -> str:
        """
        Pick a range uniformly, then a code point in it. Excluded and
        non-printable code points are redrawn, as are characters already in
        the password; after RANGE_RETRY_LIMIT attempts ResourceExhausted
        carries the first repeated candidate seen (None if every draw was
        excluded).
        """
        best = None
        for _ in range(RANGE_RETRY_LIMIT):
            script = self.rng.pick(pool.ranges)
            char = chr(script.start + self.rng.randbelow(script.size))
            if char in excluded or not char.isprintable():
                continue
            if char in used:
                if best is None:
                    best = char
                continue
            return char
        raise ResourceExhausted(
            f"No unused {pool.char_class.value} character after {RANGE_RETRY_LIMIT} attempts",
            attempts=RANGE_RETRY_LIMIT,
            best=best,
        )

    # -------------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------------

    def generate(self, options: PasswordOptions = None) -> str:
        """Generate a password for the given options (defaults from app.yaml)."""
        options = options or PasswordOptions()
        if options.mode is PasswordMode.BASIC:
            return self.basic(options.length)
        return self.universal(options.length, options.enabled_classes, options.excluded_symbols)


# =============================================================================
# Module-level convenience functions
# =============================================================================

def generate_basic(length: int, rng: SecureRandom = None) -> str:
    """Generate a Basic mode password."""
    return PasswordGenerator(rng).basic(length)


def generate_universal(length: int,
                       classes: Iterable = None,
                       excluded: Iterable[str] = (),
                       emoji: Optional[Sequence[str]] = None,
                       rng: SecureRandom = None) -> str:
    """Generate a Universal mode password."""
    return PasswordGenerator(rng, emoji=emoji).universal(length, classes, excluded)


def generate_password(options: PasswordOptions = None, **overrides) -> str:
    """
    Generate a password.

    Either pass a PasswordOptions or keyword overrides
    (length=, mode=, enabled_classes=, excluded_symbols=).
    """
    if options is None:
        options = PasswordOptions(**overrides)
    elif overrides:
        raise InvalidOptions("Pass either options or keyword overrides, not both")
    return PasswordGenerator().generate(options)


__all__ = [
    'PasswordMode',
    'PasswordOptions',
    'PasswordGenerator',
    'RANGE_RETRY_LIMIT',
    'generate_basic',
    'generate_universal',
    'generate_password',
]
