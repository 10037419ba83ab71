"""
Utilities module for the combat engine.

Provides console printing with rich formatting and small numeric helpers
shared by the engine and the terminal front-end.
"""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.rule import Rule

# Shared console for every front-end print.
_console = Console(markup=True, width=120, force_jupyter=False)


def cprint(*args: Any, **kwargs: Any) -> None:
    """Prints rich markup through the shared console."""
    _console.print(*args, **kwargs)


def crule(*args: Any, **kwargs: Any) -> None:
    """
    Prints a horizontal rule through the shared console.

    Args:
        *args: Forwarded to `rich.rule.Rule`, usually the title.
        **kwargs: Forwarded to `rich.rule.Rule`, e.g. the style.

    """
    _console.print(Rule(*args, **kwargs))


def ccapture(content: Any) -> str:
    """
    Renders a renderable, such as a table, to a string of ANSI text.

    Args:
        content (Any): Markup text or a rich renderable.

    Returns:
        str: The rendered text, without a trailing newline.

    """
    with _console.capture() as capture:
        _console.print(content, markup=True, end="")
    return capture.get()


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamps value into [lower, upper]."""
    return max(lower, min(upper, value))


def ratio(current: float, maximum: float) -> float:
    """Returns current / maximum, or 0 when maximum is not positive."""
    if maximum <= 0:
        return 0.0
    return current / maximum


def make_bar(current: int, maximum: int, length: int = 10, color: str = "white") -> str:
    """
    Creates a visual progress bar representation.

    Args:
        current (int): The current value.
        maximum (int): The maximum value.
        length (int): The length of the bar in characters. Defaults to 10.
        color (str): The color for the filled portion. Defaults to "white".

    Returns:
        str: A formatted progress bar string.

    """
    # Compute the filled part of the bar.
    filled = int(clamp(ratio(current, maximum), 0.0, 1.0) * length)
    # Compute the empty part of the bar.
    empty = length - filled
    bar = f"[{color}]" + "█" * filled + "[/]"
    if empty > 0:
        bar += "[dim white]" + "░" * empty + "[/]"
    return bar
