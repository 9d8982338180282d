#!/usr/bin/env python3
"""
Username Generator
==================
Style-dispatched handle construction.

Styles:
- professional: first/last name handles (jane.doe, jdoe, doe.jane, ...)
- gamer: adjective+noun or keyword, leetspeak, tags and numbers
- random: modern adjective+noun combos ("NovaGrid42")

Tables come from lexicon/usernames.yaml. Every choice and coin flip uses
the secure RNG.

Usage:
    gen = UsernameGenerator()
    gen.generate(UsernameOptions(style='professional', keyword='Jane Doe'))
"""

import re
import yaml
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from ..errors import InvalidOptions
from ..settings import get_setting
from .entropy import SecureRandom, get_rng


LEXICON_DIR = Path(__file__).parent / "lexicon"

LEET_PROBABILITY = 0.4
PREFIX_PROBABILITY = 0.5
SUFFIX_PROBABILITY = 0.5
NUMBER_PROBABILITY = 0.6
SHORT_NUMBER_PROBABILITY = 0.5
SHORT_HANDLE_LENGTH = 12


# =============================================================================
# Lexicon
# =============================================================================

@dataclass
class UsernameLexicon:
    """Container for the loaded username tables."""
    adjectives: List[str]
    nouns: List[str]
    prefixes: List[str]
    suffixes: List[str]
    leet: Dict[str, List[str]]
    modern_adjectives: List[str]
    modern_nouns: List[str]
    first_names: List[str]
    last_names: List[str]
    styles: List[Dict[str, str]]
    raw: Dict[str, Any]


def _load_yaml(filename: str) -> Dict[str, Any]:
    """Load a YAML file from the lexicon directory."""
    filepath = LEXICON_DIR / filename
    if not filepath.exists():
        raise FileNotFoundError(f"Lexicon not found: {filepath}")

    with open(filepath, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f)


@lru_cache(maxsize=1)
def load_lexicon() -> UsernameLexicon:
    """Load the username lexicon."""
    raw = _load_yaml('usernames.yaml')
    return UsernameLexicon(
        adjectives=[str(w) for w in raw.get('adjectives', [])],
        nouns=[str(w) for w in raw.get('nouns', [])],
        prefixes=[str(w) for w in raw.get('prefixes', [])],
        suffixes=[str(w) for w in raw.get('suffixes', [])],
        leet={k: [str(r) for r in v] for k, v in raw.get('leet', {}).items()},
        modern_adjectives=[str(w) for w in raw.get('modern_adjectives', [])],
        modern_nouns=[str(w) for w in raw.get('modern_nouns', [])],
        first_names=[str(w) for w in raw.get('first_names', [])],
        last_names=[str(w) for w in raw.get('last_names', [])],
        styles=raw.get('styles', []),
        raw=raw,
    )


# =============================================================================
# Options
# =============================================================================

class UsernameStyle(Enum):
    """Username construction style."""
    PROFESSIONAL = "professional"
    GAMER = "gamer"
    RANDOM = "random"

    @classmethod
    def parse(cls, value) -> 'UsernameStyle':
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        for member in cls:
            if member.value == key:
                return member
        valid = ', '.join(m.value for m in cls)
        raise InvalidOptions(f"Unknown username style '{value}'. Valid styles: {valid}")


@dataclass
class UsernameOptions:
    """Options for one username; an unset style comes from app.yaml."""
    style: Optional[UsernameStyle] = None
    keyword: str = ""

    def __post_init__(self):
        if self.style is None:
            self.style = get_setting("username.style")
        if self.style is None:
            raise ValueError("username settings missing in app.yaml: style")
        self.style = UsernameStyle.parse(self.style)
        self.keyword = self.keyword or ""


def sanitize_keyword(keyword: str) -> str:
    """Keep ASCII letters, digits and whitespace; trim."""
    return re.sub(r'[^a-zA-Z0-9\s]', '', keyword or "").strip()


def sanitize_name(value: str) -> str:
    """Lowercase and keep only a-z and 0-9."""
    return re.sub(r'[^a-z0-9]', '', (value or "").lower())


def capitalize(value: str) -> str:
    return value[:1].upper() + value[1:]


# =============================================================================
# Generator
# =============================================================================

class UsernameGenerator:
    """
    Builds usernames in one of three styles.

    Args:
        rng: Random source (defaults to the process-wide SecureRandom)
        lexicon: Tables to draw from (defaults to lexicon/usernames.yaml)
    """

    def __init__(self, rng: SecureRandom = None, lexicon: UsernameLexicon = None):
        self.rng = rng or get_rng()
        self.lexicon = lexicon or load_lexicon()

    def generate(self, options: UsernameOptions = None) -> str:
        options = options or UsernameOptions()
        seed = sanitize_keyword(options.keyword)

        if options.style is UsernameStyle.PROFESSIONAL:
            return self.professional(seed)
        if options.style is UsernameStyle.GAMER:
            return self.gamer(seed)
        return self.modern(seed)

    def pick_style(self, styles: Iterable) -> UsernameStyle:
        """Choose uniformly among several enabled styles."""
        parsed = [UsernameStyle.parse(s) for s in styles]
        if not parsed:
            return UsernameStyle.parse(get_setting("username.style", "random"))
        return self.rng.pick(parsed)

    # -------------------------------------------------------------------------
    # Professional
    # -------------------------------------------------------------------------

    def professional(self, seed: str = "") -> str:
        """
        Name-based handle. Two keyword tokens become first and last name;
        one token becomes either (coin flip) and is paired with a stock name.
        """
        lex = self.lexicon
        if seed:
            parts = seed.split()
            if len(parts) >= 2:
                first = sanitize_name(parts[0])
                last = sanitize_name(parts[-1])
                if first and last:
                    return self.format_professional(first, last)

            sanitized = sanitize_name(seed)
            if sanitized:
                if self.rng.chance(0.5):
                    first = sanitize_name(self.rng.pick(lex.first_names))
                    return self.format_professional(first, sanitized)
                last = sanitize_name(self.rng.pick(lex.last_names))
                return self.format_professional(sanitized, last)

        first = sanitize_name(self.rng.pick(lex.first_names))
        last = sanitize_name(self.rng.pick(lex.last_names))
        return self.format_professional(first, last)

    def format_professional(self, first: str, last: str) -> str:
        """One of six handle patterns, chosen uniformly."""
        first = first or "user"
        last = last or "team"
        patterns = [
            f"{first}.{last}",
            f"{first}_{last}",
            f"{first}{last}",
            f"{last}.{first}",
            f"{first[0]}{last}",
            f"{first}.{last}{self.rng.randint(10, 49)}",
        ]
        return self.rng.pick(patterns)

    # -------------------------------------------------------------------------
    # Gamer
    # -------------------------------------------------------------------------

    def gamer(self, seed: str = "") -> str:
        lex = self.lexicon
        base = sanitize_name(seed) if seed else ""
        if not base:
            base = self.rng.pick(lex.adjectives) + self.rng.pick(lex.nouns)

        base = self.leetspeak(base, LEET_PROBABILITY)

        if self.rng.chance(PREFIX_PROBABILITY):
            base = self.rng.pick(lex.prefixes) + base
        if self.rng.chance(SUFFIX_PROBABILITY):
            base = base + self.rng.pick(lex.suffixes)
        if self.rng.chance(NUMBER_PROBABILITY):
            base += str(self.rng.randint(100, 1098))
        return base

    def leetspeak(self, text: str, intensity: float = 0.5) -> str:
        """Replace each mappable letter with probability `intensity`."""
        leet = self.lexicon.leet
        result = []
        for char in text:
            replacements = leet.get(char.lower())
            if replacements and self.rng.chance(intensity):
                result.append(self.rng.pick(replacements))
            else:
                result.append(char)
        return ''.join(result)

    # -------------------------------------------------------------------------
    # Random
    # -------------------------------------------------------------------------

    def modern(self, seed: str = "") -> str:
        """Modern adjective/noun combo, built around the keyword if any."""
        lex = self.lexicon
        cleaned = sanitize_name(seed) if seed else ""
        if cleaned:
            if self.rng.chance(0.5):
                return capitalize(cleaned) + self.rng.pick(lex.modern_nouns)
            return self.rng.pick(lex.modern_adjectives) + capitalize(cleaned)

        handle = self.rng.pick(lex.modern_adjectives) + self.rng.pick(lex.modern_nouns)
        if len(handle) < SHORT_HANDLE_LENGTH and self.rng.chance(SHORT_NUMBER_PROBABILITY):
            handle += str(self.rng.randint(10, 99))
        return handle


def list_styles() -> List[Dict[str, str]]:
    """Style metadata (value, label, description)."""
    return list(load_lexicon().styles)


def generate_username(options: UsernameOptions = None, rng: SecureRandom = None, **overrides) -> str:
    """Generate a username (keyword overrides: style=, keyword=)."""
    if options is None:
        options = UsernameOptions(**overrides)
    elif overrides:
        raise InvalidOptions("Pass either options or keyword overrides, not both")
    return UsernameGenerator(rng).generate(options)


__all__ = [
    'UsernameStyle',
    'UsernameOptions',
    'UsernameLexicon',
    'UsernameGenerator',
    'load_lexicon',
    'list_styles',
    'sanitize_keyword',
    'sanitize_name',
    'generate_username',
]
