"""Tests for storage layer -- paths, settings, preferences."""
import json
from pathlib import Path

import pytest
from pydantic import ValidationError


# =========================================================================
# atomic_write
# =========================================================================


class TestAtomicWrite:
    def test_atomic_write_text(self, tmp_path):
        from cryptoicons.storage.paths import atomic_write
        target = tmp_path / "test.txt"
        atomic_write(target, "hello world")
        assert target.read_text() == "hello world"

    def test_atomic_write_bytes(self, tmp_path):
        from cryptoicons.storage.paths import atomic_write
        target = tmp_path / "icon.svg"
        atomic_write(target, b"<svg/>", text_mode=False)
        assert target.read_bytes() == b"<svg/>"

    def test_atomic_write_overwrite(self, tmp_path):
        """Writing to an existing file should replace its content."""
        from cryptoicons.storage.paths import atomic_write
        target = tmp_path / "overwrite.txt"
        atomic_write(target, "first")
        atomic_write(target, "second")
        assert target.read_text() == "second"

    def test_atomic_write_creates_parents(self, tmp_path):
        """Parent directories should be created automatically."""
        from cryptoicons.storage.paths import atomic_write
        target = tmp_path / "a" / "b" / "deep.txt"
        atomic_write(target, "deep")
        assert target.read_text() == "deep"

    def test_atomic_write_binary_with_str(self, tmp_path):
        """Strings are encoded when text_mode=False."""
        from cryptoicons.storage.paths import atomic_write
        target = tmp_path / "encoded.bin"
        atomic_write(target, "string as bytes", text_mode=False)
        assert target.read_bytes() == b"string as bytes"

    def test_atomic_write_no_orphaned_tmp(self, tmp_path):
        """After a successful write, no .tmp file should remain."""
        from cryptoicons.storage.paths import atomic_write
        target = tmp_path / "clean.txt"
        atomic_write(target, "data")
        assert not target.with_suffix(target.suffix + ".tmp").exists()


# =========================================================================
# ViewerSettings
# =========================================================================


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("CRYPTOICONS_ICON_DIR", "CRYPTOICONS_SERVER_URL", "CRYPTOICONS_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestViewerSettings:
    def test_defaults(self, tmp_path, clean_env):
        from cryptoicons.storage.config import load_settings
        settings = load_settings(tmp_path / "settings.json")
        assert settings.icon_dir == Path("public") / "icons"
        assert settings.server_url is None
        assert settings.debounce_seconds == 0.3
        assert settings.toast_seconds == 3.0
        assert settings.page_size_options == (12, 24, 48, 96)
        assert settings.default_page_size == 24
        assert settings.resource_prefix == "/icons"

    def test_save_and_load(self, tmp_path, clean_env):
        from cryptoicons.storage.config import ViewerSettings, load_settings, save_settings
        path = tmp_path / "settings.json"
        save_settings(ViewerSettings(debounce_ms=150, port=8123), path)
        loaded = load_settings(path)
        assert loaded.debounce_ms == 150
        assert loaded.port == 8123

    def test_env_overrides_file(self, tmp_path, clean_env):
        from cryptoicons.storage.config import load_settings
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"server_url": "http://file", "log_level": "INFO"}))
        clean_env.setenv("CRYPTOICONS_SERVER_URL", "http://env")
        clean_env.setenv("CRYPTOICONS_LOG_LEVEL", "debug")
        clean_env.setenv("CRYPTOICONS_ICON_DIR", str(tmp_path))
        settings = load_settings(path)
        assert settings.server_url == "http://env"
        assert settings.log_level == "DEBUG"
        assert settings.icon_dir == tmp_path

    def test_corrupt_file_returns_defaults(self, tmp_path, clean_env):
        from cryptoicons.storage.config import load_settings
        path = tmp_path / "settings.json"
        path.write_text("{{invalid json")
        assert load_settings(path).debounce_ms == 300

    def test_invalid_values_return_defaults(self, tmp_path, clean_env):
        from cryptoicons.storage.config import load_settings
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"default_page_size": 7}))
        assert load_settings(path).default_page_size == 24

    def test_page_size_validation(self):
        from cryptoicons.storage.config import ViewerSettings
        with pytest.raises(ValidationError):
            ViewerSettings(page_size_options=(10, 20), default_page_size=15)
        with pytest.raises(ValidationError):
            ViewerSettings(page_size_options=(0, 24))

    def test_port_range(self):
        from cryptoicons.storage.config import ViewerSettings
        with pytest.raises(ValidationError):
            ViewerSettings(port=70000)


# =========================================================================
# PreferenceStore
# =========================================================================


class TestPreferenceStore:
    def test_missing_file_is_empty(self, tmp_path):
        from cryptoicons.storage.preferences import PreferenceStore
        prefs = PreferenceStore(tmp_path / "prefs.json")
        assert prefs.get("appearance", "dark_mode") is None
        assert prefs.get("appearance", "dark_mode", 42) == 42

    def test_set_persists(self, tmp_path):
        from cryptoicons.storage.preferences import PreferenceStore
        path = tmp_path / "prefs.json"
        PreferenceStore(path).set("window", "width", 1200)
        assert PreferenceStore(path).get("window", "width") == 1200
        assert json.loads(path.read_text()) == {"window": {"width": 1200}}

    def test_delete(self, tmp_path):
        from cryptoicons.storage.preferences import PreferenceStore
        prefs = PreferenceStore(tmp_path / "prefs.json")
        prefs.set("ns", "k", "v")
        prefs.delete("ns", "k")
        prefs.delete("ns", "missing")
        assert prefs.get("ns", "k") is None

    def test_dark_mode(self, tmp_path):
        from cryptoicons.storage.preferences import PreferenceStore
        path = tmp_path / "prefs.json"
        prefs = PreferenceStore(path)
        assert prefs.dark_mode() is False
        prefs.set_dark_mode(True)
        assert PreferenceStore(path).dark_mode() is True

    def test_corrupt_file_is_empty(self, tmp_path):
        from cryptoicons.storage.preferences import PreferenceStore
        path = tmp_path / "prefs.json"
        path.write_text("not json")
        assert PreferenceStore(path).dark_mode() is False


# =========================================================================
# SvgCache
# =========================================================================


class TestSvgCache:
    def test_save_and_get(self, tmp_path):
        from cryptoicons.storage.cache import SvgCache
        cache = SvgCache("https://icons.example", tmp_path)
        cache.save("/icons/Bitcoin%20%28BTC%29.svg", b"<svg/>")
        assert cache.get("/icons/Bitcoin%20%28BTC%29.svg") == b"<svg/>"

    def test_missing_entry(self, tmp_path):
        from cryptoicons.storage.cache import SvgCache
        assert SvgCache("https://icons.example", tmp_path).get("/icons/a.svg") is None

    def test_key_is_stable_across_instances(self, tmp_path):
        """A new session against the same server hits the same entry."""
        from cryptoicons.storage.cache import SvgCache
        SvgCache("https://icons.example/", tmp_path).save("/icons/a.svg", b"<svg/>")
        again = SvgCache("https://icons.example", tmp_path)
        assert again.get("/icons/a.svg") == b"<svg/>"
        assert len(list(tmp_path.iterdir())) == 1

    def test_servers_do_not_share_entries(self, tmp_path):
        from cryptoicons.storage.cache import SvgCache
        SvgCache("https://one.example", tmp_path).save("/icons/a.svg", b"one")
        assert SvgCache("https://two.example", tmp_path).get("/icons/a.svg") is None

    def test_save_leaves_no_tmp_file(self, tmp_path):
        from cryptoicons.storage.cache import SvgCache
        cache = SvgCache("https://icons.example", tmp_path / "svg")
        cache.save("/icons/a.svg", b"<svg/>")
        assert [p.suffix for p in (tmp_path / "svg").iterdir()] == [".svg"]

    def test_discard_removes_bad_entry(self, tmp_path):
        from cryptoicons.storage.cache import SvgCache
        cache = SvgCache("https://icons.example", tmp_path)
        cache.path_for("/icons/a.svg").write_bytes(b"<svg><pa")
        cache.discard("/icons/a.svg")
        assert cache.get("/icons/a.svg") is None
        cache.discard("/icons/a.svg")

    def test_failed_save_does_not_raise(self, tmp_path):
        from cryptoicons.storage.cache import SvgCache
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        cache = SvgCache("https://icons.example", blocker)
        cache.save("/icons/a.svg", b"<svg/>")
        assert cache.get("/icons/a.svg") is None
