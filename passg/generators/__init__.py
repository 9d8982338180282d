#!/usr/bin/env python3
"""
Secret Generators
=================
Provides the generation engine:
- entropy: unbiased secure random draws
- pools: character classes and their pools
- password: Basic (lookalike-free shuffle) and Universal (multi-class quota)
- passphrase: wordlist selection with the entropic shuffle
- username: professional, gamer and random handles
"""

from .entropy import (
    SecureRandom,
    get_rng,
)
from .pools import (
    CharacterClass,
    CharacterPool,
    ScriptRange,
    CLASS_DESCRIPTIONS,
    build_pools,
    classify,
)
from .password import (
    PasswordMode,
    PasswordOptions,
    PasswordGenerator,
    generate_basic,
    generate_universal,
    generate_password,
)
from .passphrase import (
    PassphraseOptions,
    PassphraseGenerator,
    entropic_shuffle,
    generate_passphrase,
)
from .username import (
    UsernameStyle,
    UsernameOptions,
    UsernameGenerator,
    list_styles,
    generate_username,
)

__all__ = [
    # Randomness
    'SecureRandom',
    'get_rng',
    # Pools
    'CharacterClass',
    'CharacterPool',
    'ScriptRange',
    'CLASS_DESCRIPTIONS',
    'build_pools',
    'classify',
    # Passwords
    'PasswordMode',
    'PasswordOptions',
    'PasswordGenerator',
    'generate_basic',
    'generate_universal',
    'generate_password',
    # Passphrases
    'PassphraseOptions',
    'PassphraseGenerator',
    'entropic_shuffle',
    'generate_passphrase',
    # Usernames
    'UsernameStyle',
    'UsernameOptions',
    'UsernameGenerator',
    'list_styles',
    'generate_username',
]
