"""Terminal capability checks for icons and spinner glyphs."""

import os
import sys


def supports_unicode() -> bool:
    """Return True if the terminal likely renders Unicode emoji."""
    if sys.platform != "win32":
        return True
    # Windows Terminal, VSCode and ConEmu all do
    return bool(
        os.environ.get("WT_SESSION")
        or "vscode" in os.environ.get("TERM_PROGRAM", "")
        or os.environ.get("ConEmuPID")
    )


def icon(emoji: str, fallback: str) -> str:
    """Emoji on modern terminals, ASCII fallback on legacy Windows consoles."""
    return emoji if supports_unicode() else fallback
