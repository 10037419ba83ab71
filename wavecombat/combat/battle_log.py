"""
Battle log module for the combat engine.

The battle log is the player-facing, append-only record of what happened in
an encounter. Diagnostics go through catchery instead.
"""

from collections.abc import Callable, Iterator

LogListener = Callable[[str], None]


class BattleLog:
    """An ordered, append-only list of plain text lines with listeners."""

    def __init__(self) -> None:
        self._lines: list[str] = []
        self._listeners: list[LogListener] = []

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[str]:
        return iter(self._lines)

    def __contains__(self, line: object) -> bool:
        return line in self._lines

    @property
    def lines(self) -> tuple[str, ...]:
        return tuple(self._lines)

    def append(self, message: str) -> None:
        """
        Adds a line to the log and forwards it to every listener.

        Args:
            message (str): The line to add.

        """
        self._lines.append(message)
        for listener in self._listeners:
            listener(message)

    def subscribe(self, listener: LogListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: LogListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)
