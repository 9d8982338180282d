"""
Tests for Resources and Settings
================================
Tests wordlist/emoji loaders, lazy handles and app.yaml settings access.
"""

import pytest
import sys
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from passg.errors import WordlistUnavailable
from passg.resources import (
    FALLBACK_WORDS,
    LazyResource,
    default_wordlist,
    load_emoji,
    load_wordlist,
    wordlist_handle,
)
from passg.settings import (
    CONFIG_ENV_VAR,
    get_limits,
    get_setting,
    load_app_config,
    reload_settings,
    resolve_path,
)


class TestLoadWordlist:
    """Tests for load_wordlist()."""

    def test_eff_format(self, tmp_path):
        path = tmp_path / "eff.txt"
        path.write_text("11111\tabacus\n11112\tabdomen\n11113\tabdominal\n", encoding="utf-8")
        assert load_wordlist(path) == ["abacus", "abdomen", "abdominal"]

    def test_plain_format_with_comments(self, tmp_path):
        path = tmp_path / "words.txt"
        path.write_text("# my list\n\nRocket\nharbor\n  velvet  \nrocket\n", encoding="utf-8")
        assert load_wordlist(str(path)) == ["rocket", "harbor", "velvet"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(WordlistUnavailable):
            load_wordlist(tmp_path / "nope.txt")

    def test_only_comments(self, tmp_path):
        path = tmp_path / "empty.txt"
        path.write_text("# nothing here\n\n", encoding="utf-8")
        with pytest.raises(WordlistUnavailable):
            load_wordlist(path)


class TestLoadEmoji:
    """Tests for load_emoji()."""

    def test_loads_glyphs(self, tmp_path):
        path = tmp_path / "emoji.txt"
        path.write_text("\U0001F600\n\U0001F680\n\U0001F600\n\n", encoding="utf-8")
        assert load_emoji(path) == ["\U0001F600", "\U0001F680"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_emoji(tmp_path / "nope.txt")


class TestLazyResource:
    """Tests for LazyResource."""

    def test_value_is_loaded(self):
        handle = LazyResource(["a", "b"])
        assert handle.loaded
        assert handle.get() == ["a", "b"]

    def test_provider_deferred(self):
        calls = []
        handle = LazyResource(lambda: calls.append(1) or ["x"], "test")
        assert not handle.loaded
        assert calls == []
        assert handle.get() == ["x"]
        assert handle.get() == ["x"]
        assert calls == [1]
        assert handle.loaded

    def test_failed_provider_retried(self):
        attempts = []

        def provider():
            attempts.append(1)
            if len(attempts) == 1:
                raise OSError("first call fails")
            return ["ok"]

        handle = LazyResource(provider)
        with pytest.raises(OSError):
            handle.get()
        assert handle.get() == ["ok"]

    def test_wordlist_handle_default(self):
        assert wordlist_handle() is default_wordlist()
        assert wordlist_handle(None) is default_wordlist()

    def test_fallback_words(self):
        assert len(FALLBACK_WORDS) == 32
        assert len(set(FALLBACK_WORDS)) == 32


class TestSettings:
    """Tests for app.yaml access."""

    def test_config_loads(self):
        config = load_app_config()
        assert "password" in config
        assert "passphrase" in config

    def test_dotted_path(self):
        assert get_setting("password.length") == 12
        assert get_setting("password.limits.basic.max") == 20
        assert get_setting("passphrase.limits.min") == 3

    def test_missing_path_default(self):
        assert get_setting("password.nope", 7) == 7
        assert get_setting("nothing.here.at.all") is None

    def test_resolve_path(self, tmp_path):
        assert resolve_path("words.txt", tmp_path) == (tmp_path / "words.txt").resolve()
        assert resolve_path(str(tmp_path)) == tmp_path

    def test_resolve_path_requires_value(self):
        with pytest.raises(ValueError):
            resolve_path(None)

    def test_limits(self):
        assert get_limits("password", "basic") == (10, 20)
        assert get_limits("password", "universal") == (8, 18)
        assert get_limits("passphrase") == (3, 6)
        assert get_limits("username") is None


class TestConfigOverride:
    """Tests for the $PASSG_CONFIG override."""

    @pytest.fixture
    def override(self, tmp_path, monkeypatch):
        def use(text):
            path = tmp_path / "app.yaml"
            path.write_text(text, encoding="utf-8")
            monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
            return reload_settings

        yield use
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        reload_settings()

    def test_override_file(self, override):
        reload = override("password:\n  length: 30\n")
        reload()
        assert get_setting("password.length") == 30
        assert get_setting("passphrase.word_count") is None

    def test_non_mapping_rejected(self, override):
        reload = override("- just\n- a list\n")
        with pytest.raises(ValueError):
            reload()

    def test_missing_override(self, tmp_path, monkeypatch):
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "absent.yaml"))
        try:
            with pytest.raises(FileNotFoundError):
                reload_settings()
        finally:
            monkeypatch.delenv(CONFIG_ENV_VAR)
            reload_settings()
