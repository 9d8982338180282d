"""
Tests for CLI Commands
======================
Tests for the passg CLI interface in passg/cli.py.
"""

import json
import os
import pytest
import subprocess
import sys
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from passg.cli import main
from passg.generators.pools import basic_pool
from passg.resources import FALLBACK_WORDS


def run_cli(*args):
    env = dict(os.environ, PYTHONIOENCODING="utf-8")
    return subprocess.run(
        [sys.executable, "-m", "passg", *args],
        capture_output=True,
        text=True,
        encoding="utf-8",
        cwd=str(ROOT),
        env=env,
    )


class TestCLIBasic:
    """Basic CLI tests."""

    def test_version_flag(self):
        """Test --version flag."""
        result = run_cli("--version")
        assert result.returncode == 0
        assert "passg" in result.stdout.lower()

    def test_help_flag(self):
        """Test --help flag."""
        result = run_cli("--help")
        assert result.returncode == 0
        assert "password" in result.stdout
        assert "passphrase" in result.stdout
        assert "username" in result.stdout

    def test_password_help(self):
        result = run_cli("password", "--help")
        assert result.returncode == 0
        assert "--length" in result.stdout

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out.lower()


class TestCLIPassword:
    """Tests for the password command."""

    def test_quiet_basic(self, capsys):
        assert main(["-q", "password", "-l", "14"]) == 0
        value = capsys.readouterr().out.strip()
        assert len(value) == 14
        assert set(value) <= set(basic_pool())

    def test_length_clamped(self, capsys):
        assert main(["-q", "password", "-l", "40"]) == 0
        assert len(capsys.readouterr().out.strip()) == 20

    def test_no_limits(self, capsys):
        assert main(["-q", "password", "-l", "40", "--no-limits"]) == 0
        assert len(capsys.readouterr().out.strip()) == 40

    def test_count(self, capsys):
        assert main(["-q", "password", "-n", "3"]) == 0
        assert len(capsys.readouterr().out.strip().splitlines()) == 3

    def test_universal_json(self, capsys):
        code = main(["password", "-u", "-l", "12", "-c", "lowercase,numbers", "--json"])
        assert code == 0
        records = json.loads(capsys.readouterr().out)
        assert len(records) == 1
        value = records[0]["value"]
        assert len(value) == 12
        assert set(value) <= set("abcdefghijklmnopqrstuvwxyz0123456789")
        assert records[0]["label"] in ("Weak", "Strong", "Very Strong", "Quantum Resistant")

    def test_unknown_class(self, capsys):
        assert main(["password", "-u", "-c", "klingon"]) == 1
        assert "klingon" in capsys.readouterr().err

    def test_universal_flags_noted_in_basic_mode(self, capsys):
        assert main(["password", "--mode", "basic", "-c", "numbers", "-x", "ab", "--json"]) == 0
        captured = capsys.readouterr()
        assert "--classes and --exclude" in captured.err
        assert "basic mode" in captured.err

    def test_no_note_in_universal_mode(self, capsys):
        assert main(["password", "-u", "-c", "numbers", "--json"]) == 0
        assert "Note:" not in capsys.readouterr().err

    def test_zero_count(self, capsys):
        assert main(["password", "-n", "0"]) == 1

    def test_rich_table(self):
        result = run_cli("password", "-l", "12", "-n", "2")
        assert result.returncode == 0
        assert "bits" in result.stdout


class TestCLIPassphrase:
    """Tests for the passphrase command."""

    def test_quiet_simple(self, capsys):
        assert main(["-q", "passphrase", "-w", "4", "--simple"]) == 0
        words = capsys.readouterr().out.strip().split(" ")
        assert len(words) == 4
        assert set(words) <= set(FALLBACK_WORDS)

    def test_json(self, capsys):
        assert main(["passphrase", "-w", "3", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert len(data["passphrases"]) == 1
        assert data["wordlist_size"] == len(FALLBACK_WORDS)
        # 3 * log2(32) + 2 * log2(160)
        assert data["bits"] == 30

    def test_wordlist_file(self, tmp_path, capsys):
        path = tmp_path / "words.txt"
        path.write_text("11111\trocket\n11112\tharbor\n11113\tvelvet\n", encoding="utf-8")
        assert main(["-q", "passphrase", "-w", "3", "--simple", "--wordlist", str(path)]) == 0
        assert sorted(capsys.readouterr().out.split()) == ["harbor", "rocket", "velvet"]

    def test_missing_wordlist(self, tmp_path, capsys):
        code = main(["passphrase", "--wordlist", str(tmp_path / "missing.txt")])
        assert code == 1
        assert "Wordlist" in capsys.readouterr().err

    def test_undersized_wordlist(self, tmp_path, capsys):
        path = tmp_path / "words.txt"
        path.write_text("one\ntwo\n", encoding="utf-8")
        assert main(["passphrase", "-w", "3", "--wordlist", str(path)]) == 1


class TestCLIUsername:
    """Tests for the username command."""

    def test_professional(self, capsys):
        assert main(["-q", "username", "--style", "professional", "-k", "Jane Doe"]) == 0
        handle = capsys.readouterr().out.strip()
        assert "doe" in handle or "jane" in handle

    def test_multiple_styles(self, capsys):
        assert main(["-q", "username", "--style", "gamer", "--style", "random", "-n", "5"]) == 0
        assert len(capsys.readouterr().out.strip().splitlines()) == 5

    def test_invalid_style(self):
        result = run_cli("username", "--style", "ninja")
        assert result.returncode != 0


class TestCLIEntropy:
    """Tests for the entropy command."""

    def test_quiet(self, capsys):
        assert main(["-q", "entropy", "abcdefghij"]) == 0
        assert capsys.readouterr().out.strip() == "47"

    def test_json(self, capsys):
        assert main(["score", "aaaaaaaaaa", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data == {"length": 10, "bits": 34, "label": "Weak"}

    def test_rendered(self):
        result = run_cli("entropy", "correct horse battery staple")
        assert result.returncode == 0
        assert "Entropy" in result.stdout


class TestCLIListings:
    """Tests for the styles and classes listings."""

    def test_styles(self, capsys):
        assert main(["styles"]) == 0
        out = capsys.readouterr().out
        assert "professional" in out
        assert "gamer" in out

    def test_classes(self, capsys):
        assert main(["classes"]) == 0
        out = capsys.readouterr().out
        assert "* non_latin" in out
        assert "  emoji" in out
