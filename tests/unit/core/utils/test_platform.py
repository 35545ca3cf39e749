"""Tests for terminal capability checks."""

from unittest.mock import patch

from dibbla.core.utils.platform import icon, supports_unicode


class TestSupportsUnicode:
    def test_non_windows(self):
        with patch("dibbla.core.utils.platform.sys.platform", "linux"):
            assert supports_unicode()

    def test_legacy_windows_console(self, monkeypatch):
        for name in ("WT_SESSION", "TERM_PROGRAM", "ConEmuPID"):
            monkeypatch.delenv(name, raising=False)

        with patch("dibbla.core.utils.platform.sys.platform", "win32"):
            assert not supports_unicode()

    def test_windows_terminal(self, monkeypatch):
        monkeypatch.setenv("WT_SESSION", "1")

        with patch("dibbla.core.utils.platform.sys.platform", "win32"):
            assert supports_unicode()


class TestIcon:
    def test_fallback(self):
        with patch("dibbla.core.utils.platform.supports_unicode", return_value=False):
            assert icon("✅", "[OK]") == "[OK]"

    def test_emoji(self):
        with patch("dibbla.core.utils.platform.supports_unicode", return_value=True):
            assert icon("✅", "[OK]") == "✅"
