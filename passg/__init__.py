#!/usr/bin/env python3
"""
PassG - Password, Passphrase & Username Generator
=================================================

Generates high-entropy secrets from a cryptographically secure source and
estimates their strength.

Quick Start
-----------
    from passg import PassG

    pg = PassG()

    # Passwords
    pg.password(length=14)
    pg.password(length=16, mode="universal", enabled_classes=["lowercase", "non_latin"])

    # Passphrases (configured wordlist or the bundled fallback)
    pg.passphrase(word_count=5, advanced=True)

    # Usernames
    pg.username(style="professional", keyword="Jane Doe")

    # Strength
    pg.estimate("hG7qL2zA!x")

Modules
-------
    passg.generators - RNG primitive, pools, password/passphrase/username engines
    passg.strength   - Entropy estimation
    passg.resources  - Once-initialized wordlist/emoji handles and loaders
    passg.settings   - app.yaml settings
    passg.errors     - Exception taxonomy

CLI Usage
---------
    python -m passg password -l 16 --universal
    python -m passg passphrase -w 5 --advanced
    python -m passg username --style gamer -k neo
"""

__version__ = "1.2.0"
__author__ = "PassG"

# =============================================================================
# Submodule Imports
# =============================================================================

from . import errors
from . import settings
from . import generators
from . import strength
from . import resources

from .errors import (
    PassGError,
    RandomUnavailable,
    InvalidOptions,
    WordlistUnavailable,
    ResourceExhausted,
)
from .generators import (
    SecureRandom,
    get_rng,
    CharacterClass,
    PasswordMode,
    PasswordOptions,
    PasswordGenerator,
    PassphraseOptions,
    PassphraseGenerator,
    UsernameStyle,
    UsernameOptions,
    UsernameGenerator,
    generate_password,
    generate_passphrase,
    generate_username,
)
from .strength import (
    EntropyResult,
    StrengthLabel,
    estimate_password_entropy,
    estimate_passphrase_entropy,
)
from .resources import (
    LazyResource,
    FALLBACK_WORDS,
    load_wordlist,
    load_emoji,
    default_emoji,
    wordlist_handle,
)


# =============================================================================
# PassG Main Class
# =============================================================================

class PassG:
    """
    Main interface for secret generation.

    Owns one random source and the wordlist/emoji handles; generators are
    created on first use.

    Examples
    --------
        >>> pg = PassG(wordlist=["apple", "banana", "cherry", "date"])
        >>> pg.passphrase(word_count=3, advanced=False)
        'date apple cherry'
        >>> pg.estimate(pg.password(length=12)).label
        <StrengthLabel.STRONG: 'Strong'>
    """

    def __init__(self, rng: SecureRandom = None, wordlist=None, emoji=None):
        """
        Parameters
        ----------
        rng : SecureRandom, optional
            Random source. Defaults to the process-wide instance.
        wordlist : sequence, callable, Future or LazyResource, optional
            Passphrase words. Defaults to the configured wordlist.
        emoji : sequence, callable, Future or LazyResource, optional
            Emoji glyphs for the universal emoji class.
        """
        self.rng = rng or get_rng()
        self.wordlist = wordlist_handle(wordlist)
        self.emoji = default_emoji() if emoji is None else LazyResource.of(emoji, "emoji list")

        self._password_gen = None
        self._passphrase_gen = None
        self._username_gen = None

    # -------------------------------------------------------------------------
    # Generators
    # -------------------------------------------------------------------------

    def _get_password_gen(self) -> PasswordGenerator:
        if self._password_gen is None:
            self._password_gen = PasswordGenerator(self.rng, emoji=self.emoji)
        return self._password_gen

    def _get_passphrase_gen(self) -> PassphraseGenerator:
        if self._passphrase_gen is None:
            self._passphrase_gen = PassphraseGenerator(self.wordlist, self.rng)
        return self._passphrase_gen

    def _get_username_gen(self) -> UsernameGenerator:
        if self._username_gen is None:
            self._username_gen = UsernameGenerator(self.rng)
        return self._username_gen

    # -------------------------------------------------------------------------
    # Generation
    # -------------------------------------------------------------------------

    def password(self, options: PasswordOptions = None, **overrides) -> str:
        """Generate a password (see PasswordOptions for overrides)."""
        options = options or PasswordOptions(**overrides)
        return self._get_password_gen().generate(options)

    def passphrase(self, options: PassphraseOptions = None, **overrides) -> str:
        """Generate a passphrase (word_count=, advanced=)."""
        options = options or PassphraseOptions(**overrides)
        return self._get_passphrase_gen().generate(options)

    def username(self, options: UsernameOptions = None, **overrides) -> str:
        """Generate a username (style=, keyword=)."""
        options = options or UsernameOptions(**overrides)
        return self._get_username_gen().generate(options)

    def pick_style(self, styles) -> UsernameStyle:
        """Choose one of several enabled username styles."""
        return self._get_username_gen().pick_style(styles)

    # -------------------------------------------------------------------------
    # Strength
    # -------------------------------------------------------------------------

    def estimate(self, password: str) -> EntropyResult:
        """Estimate the entropy of a password."""
        return estimate_password_entropy(password)

    def passphrase_entropy(self, options: PassphraseOptions = None, **overrides) -> EntropyResult:
        """Analytic entropy of passphrases from this instance's wordlist."""
        options = options or PassphraseOptions(**overrides)
        return self._get_passphrase_gen().entropy(options)


# =============================================================================
# Public API
# =============================================================================

__all__ = [
    # Version
    '__version__',

    # Main class
    'PassG',

    # Errors
    'PassGError',
    'RandomUnavailable',
    'InvalidOptions',
    'WordlistUnavailable',
    'ResourceExhausted',

    # Generators
    'SecureRandom',
    'get_rng',
    'CharacterClass',
    'PasswordMode',
    'PasswordOptions',
    'PasswordGenerator',
    'PassphraseOptions',
    'PassphraseGenerator',
    'UsernameStyle',
    'UsernameOptions',
    'UsernameGenerator',

    # Public functions
    'generate_password',
    'generate_passphrase',
    'generate_username',
    'estimate_password_entropy',
    'estimate_passphrase_entropy',

    # Strength
    'EntropyResult',
    'StrengthLabel',

    # Resources
    'LazyResource',
    'FALLBACK_WORDS',
    'load_wordlist',
    'load_emoji',

    # Submodules
    'errors',
    'settings',
    'generators',
    'strength',
    'resources',
]
