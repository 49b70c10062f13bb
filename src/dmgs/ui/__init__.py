"""UI components for the DMG builder."""

from dmgs.ui.protocol import BuildUI
from dmgs.ui.simple import SimpleUI

__all__ = ["BuildUI", "SimpleUI"]


# Conditional import of TUI so SimpleUI works without loading textual
def get_tui_class() -> type:
    """Get the TUI class (lazy import)."""
    from dmgs.ui.app import BuildApp
    return BuildApp
