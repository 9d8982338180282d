#!/usr/bin/env python3
"""
PassG CLI
=========
Command-line interface for secret generation and strength estimation.

Usage:
    passg password -l 16 --universal
    passg passphrase -w 5 --advanced
    passg username --style gamer --style random -k neo
    passg entropy "hG7qL2zA!x"
"""

import argparse
import json
import logging
import sys
from functools import partial

from passg import __version__
from passg.errors import PassGError
from passg.generators.password import PasswordMode
from passg.settings import get_limits, get_setting

# =============================================================================
# Constants
# =============================================================================

PASSWORD_MODES = ['basic', 'universal']

USERNAME_STYLES = ['professional', 'gamer', 'random']

# =============================================================================
# Utilities
# =============================================================================

class Output:
    """Handles CLI output with quiet mode support."""

    def __init__(self, quiet: bool = False):
        self.quiet = quiet

    def print(self, *args, **kwargs):
        if not self.quiet:
            print(*args, **kwargs)

    def value(self, text: str):
        """Print a generated value; shown even in quiet mode."""
        print(text)

    def error(self, msg: str):
        print(f"Error: {msg}", file=sys.stderr)

    def note(self, msg: str):
        if not self.quiet:
            print(f"Note: {msg}", file=sys.stderr)

    def json(self, data):
        print(json.dumps(data, indent=2, ensure_ascii=False))


def clamp_to_limits(value: int, limits, label: str, out: Output) -> int:
    """Clamp to configured (min, max), noting any change."""
    if limits is None:
        return value
    low, high = limits
    clamped = max(low, min(high, value))
    if clamped != value:
        out.note(f"{label} {value} outside {low}-{high}, using {clamped}")
    return clamped


def note_unused_in_basic(mode, args, out: Output):
    """Note --classes/--exclude given for a basic-mode run."""
    if PasswordMode.parse(mode) is not PasswordMode.BASIC:
        return
    ignored = [flag for flag, value in (("--classes", args.classes), ("--exclude", args.exclude)) if value]
    if ignored:
        out.note(f"{' and '.join(ignored)} only apply to universal mode; ignored in basic mode")


def split_list(value: str) -> list:
    """Split a comma-separated argument."""
    if not value:
        return []
    return [part.strip() for part in value.split(',') if part.strip()]


def emit(values: list, out: Output, args, title: str, entropies: list = None):
    """Print values as JSON, bare lines (quiet), or a Rich table."""
    if getattr(args, 'json', False):
        records = []
        for i, value in enumerate(values):
            record = {"value": value}
            if entropies:
                record.update(entropies[i].to_dict())
            records.append(record)
        out.json(records)
        return

    if out.quiet:
        for value in values:
            out.value(value)
        return

    from passg.ui import ResultsView

    view = ResultsView(title=title)
    for i, value in enumerate(values):
        view.add(value, entropies[i] if entropies else None)
    view.render()


# =============================================================================
# Commands
# =============================================================================

def cmd_password(args, out: Output):
    """Generate passwords."""
    from passg import PassG, PasswordOptions, estimate_password_entropy

    mode = 'universal' if args.universal else (args.mode or get_setting("password.mode"))
    length = args.length if args.length is not None else get_setting("password.length")
    if not args.no_limits:
        length = clamp_to_limits(length, get_limits("password", mode), "Length", out)

    note_unused_in_basic(mode, args, out)

    options = PasswordOptions(
        length=length,
        mode=mode,
        enabled_classes=split_list(args.classes) or None,
        excluded_symbols=args.exclude,
    )

    pg = PassG()
    values = [pg.password(options) for _ in range(args.count)]
    entropies = [estimate_password_entropy(v) for v in values]
    emit(values, out, args, f"Passwords ({options.mode.value})", entropies)
    return 0


def cmd_passphrase(args, out: Output):
    """Generate passphrases."""
    from passg import PassG, PassphraseOptions, load_wordlist

    words = args.words if args.words is not None else get_setting("passphrase.word_count")
    if not args.no_limits:
        words = clamp_to_limits(words, get_limits("passphrase"), "Word count", out)

    options = PassphraseOptions(word_count=words, advanced=args.advanced)

    wordlist = partial(load_wordlist, args.wordlist) if args.wordlist else None

    pg = PassG(wordlist=wordlist)
    values = [pg.passphrase(options) for _ in range(args.count)]

    if args.json:
        entropy = pg.passphrase_entropy(options)
        out.json({
            "passphrases": values,
            "wordlist_size": len(pg.wordlist.get()),
            **entropy.to_dict(),
        })
        return 0

    emit(values, out, args, "Passphrases")
    if args.verbose:
        entropy = pg.passphrase_entropy(options)
        out.print(f"\nEntropy: {entropy.bits} bits - {entropy.label.value} "
                  f"({len(pg.wordlist.get())} words in list)")
    return 0


def cmd_username(args, out: Output):
    """Generate usernames."""
    from passg import PassG

    pg = PassG()
    styles = args.style or [get_setting("username.style", "random")]
    values = []
    for _ in range(args.count):
        style = pg.pick_style(styles)
        values.append(pg.username(style=style, keyword=args.keyword or ""))

    emit(values, out, args, "Usernames")
    return 0


def cmd_entropy(args, out: Output):
    """Estimate the entropy of a password."""
    from passg import estimate_password_entropy

    result = estimate_password_entropy(args.password)
    if args.json:
        out.json({"length": len(args.password), **result.to_dict()})
        return 0
    if out.quiet:
        out.value(str(result.bits))
        return 0

    from passg.ui import render_entropy
    render_entropy(args.password, result)
    return 0


def cmd_styles(args, out: Output):
    """List username styles."""
    from passg.generators.username import list_styles

    for style in list_styles():
        out.print(f"  {style['value']:<14} {style['label']:<14} {style['description']}")
    return 0


def cmd_classes(args, out: Output):
    """List character classes for universal mode."""
    from passg.generators.pools import CLASS_DESCRIPTIONS

    defaults = set(get_setting("password.classes", []) or [])
    for char_class, description in CLASS_DESCRIPTIONS.items():
        marker = '*' if char_class.value in defaults else ' '
        out.print(f"{marker} {char_class.value:<18} {description}")
    out.print("\n* enabled by default")
    return 0


# =============================================================================
# Main
# =============================================================================

def main(argv=None):
    parser = argparse.ArgumentParser(
        prog='passg',
        description='PassG - Password, Passphrase & Username Generator',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s password -l 14
  %(prog)s password -l 16 --universal --classes lowercase,uppercase,non_latin
  %(prog)s password --universal --exclude '|\\`' -n 5
  %(prog)s passphrase -w 5 --advanced
  %(prog)s passphrase -w 6 --simple --wordlist eff_large_wordlist.txt
  %(prog)s username --style professional -k "Jane Doe"
  %(prog)s entropy "correct horse battery staple"
"""
    )

    parser.add_argument('--version', '-V', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--quiet', '-q', action='store_true', help='Print bare values only')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # --- password ---
    p = subparsers.add_parser('password', aliases=['pw', 'p'], help='Generate passwords')
    p.add_argument('-l', '--length', type=int, help='Password length (default from app.yaml)')
    p.add_argument('--mode', '-m', choices=PASSWORD_MODES, help='Construction mode')
    p.add_argument('--universal', '-u', action='store_true', help='Shortcut for --mode universal')
    p.add_argument('--classes', '-c', help='Comma-separated classes for universal mode')
    p.add_argument('--exclude', '-x', default=None, help='Characters to leave out (universal mode)')
    p.add_argument('--no-limits', action='store_true', help='Do not clamp length to app.yaml limits')
    p.add_argument('-n', '--count', type=int, default=1, help='Number of passwords (default: 1)')
    p.add_argument('--json', '-j', action='store_true', help='Output as JSON')

    # --- passphrase ---
    p = subparsers.add_parser('passphrase', aliases=['pp'], help='Generate passphrases')
    p.add_argument('-w', '--words', type=int, help='Words per passphrase (default from app.yaml)')
    adv = p.add_mutually_exclusive_group()
    adv.add_argument('--advanced', '-a', dest='advanced', action='store_true', default=None,
                     help='Capitalize words and use digit+symbol separators')
    adv.add_argument('--simple', '-s', dest='advanced', action='store_false',
                     help='Lowercase words separated by spaces')
    p.add_argument('--wordlist', help='Wordlist file (EFF dice format or one word per line)')
    p.add_argument('--no-limits', action='store_true', help='Do not clamp word count to app.yaml limits')
    p.add_argument('-n', '--count', type=int, default=1, help='Number of passphrases (default: 1)')
    p.add_argument('--json', '-j', action='store_true', help='Output as JSON')

    # --- username ---
    p = subparsers.add_parser('username', aliases=['user', 'u'], help='Generate usernames')
    p.add_argument('--style', choices=USERNAME_STYLES, action='append',
                   help='Style (repeat to pick randomly among several)')
    p.add_argument('-k', '--keyword', help='Keyword or name to build around')
    p.add_argument('-n', '--count', type=int, default=1, help='Number of usernames (default: 1)')
    p.add_argument('--json', '-j', action='store_true', help='Output as JSON')

    # --- entropy ---
    p = subparsers.add_parser('entropy', aliases=['score'], help='Estimate password entropy')
    p.add_argument('password', help='Password to score')
    p.add_argument('--json', '-j', action='store_true', help='Output as JSON')

    # --- styles ---
    subparsers.add_parser('styles', help='List username styles')

    # --- classes ---
    subparsers.add_parser('classes', help='List universal character classes')

    # Parse
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s %(name)s: %(message)s')

    if not args.command:
        parser.print_help()
        return 0

    # Handle aliases
    cmd_map = {
        'pw': 'password', 'p': 'password',
        'pp': 'passphrase',
        'user': 'username', 'u': 'username',
        'score': 'entropy',
    }
    command = cmd_map.get(args.command, args.command)

    # Output handler
    out = Output(quiet=getattr(args, 'quiet', False))

    if getattr(args, 'count', 1) < 1:
        out.error("Count must be at least 1")
        return 1

    # Dispatch
    commands = {
        'password': cmd_password,
        'passphrase': cmd_passphrase,
        'username': cmd_username,
        'entropy': cmd_entropy,
        'styles': cmd_styles,
        'classes': cmd_classes,
    }

    handler = commands.get(command)
    if handler:
        try:
            return handler(args, out)
        except KeyboardInterrupt:
            out.print("\nCancelled.")
            return 130
        except (PassGError, ValueError, OSError) as e:
            out.error(str(e))
            if args.verbose:
                import traceback
                traceback.print_exc()
            return 1

    parser.print_help()
    return 0


if __name__ == '__main__':
    sys.exit(main())
