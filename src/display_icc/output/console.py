"""Rich Console factory and theme for display-icc output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

ICC_THEME = Theme(
    {
        "icc.ok": "bold green",
        "icc.error": "bold red",
        "icc.warning": "bold yellow",
        "icc.op": "bold cyan",
        "icc.key": "dim",
        "icc.id": "bold blue",
        "icc.path": "dim",
        "icc.name": "bold",
        "icc.primary": "bold magenta",
        "icc.space.rgb": "green",
        "icc.space.lab": "blue",
        "icc.space.unknown": "yellow",
    }
)

_COLOR_SPACE_STYLES: dict[str, str] = {
    "RGB": "icc.space.rgb",
    "Lab": "icc.space.lab",
    "Unknown": "icc.space.unknown",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=ICC_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_color_space(color_space: str) -> str:
    """Return the Rich style name for a ColorSpace value."""
    return _COLOR_SPACE_STYLES.get(color_space, "")
