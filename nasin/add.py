"""Form for entering a new task in the terminal interface.

Keys are given as strings: a single character is typed into the focused
field, and the names ``"Backspace"``, ``"Delete"``, ``"Left"``, ``"Right"``,
``"Home"`` and ``"End"`` edit it. Any other key is ignored.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from .scheduler import MAX_PRIORITY, Task

_UNSIGNED = re.compile(r"\+?[0-9]+")


def _parse_priority(text: str) -> int:
    """Parse a priority in 0..255, falling back to 1 for anything else."""
    if _UNSIGNED.fullmatch(text):
        value = int(text)
        if value <= MAX_PRIORITY:
            return value
    return 1


def _parse_deadline(text: str) -> datetime | None:
    """Local midnight of a ``YYYY-MM-DD`` date; ValueError if malformed."""
    day = datetime.strptime(text, "%Y-%m-%d")
    return day.astimezone()


class Focus(Enum):
    """The field of the form that receives typed keys."""

    NAME = "Name"
    PRIORITY = "Priority"
    DATE = "Date"


@dataclass
class _TextField:
    value: str = ""
    cursor: int = 0

    def clear(self) -> None:
        self.value = ""
        self.cursor = 0

    def handle_key(self, key: str) -> None:
        if len(key) == 1:
            if key.isprintable():
                self.value = self.value[: self.cursor] + key + self.value[self.cursor :]
                self.cursor += 1
        elif key == "Backspace":
            if self.cursor > 0:
                self.value = self.value[: self.cursor - 1] + self.value[self.cursor :]
                self.cursor -= 1
        elif key == "Delete":
            self.value = self.value[: self.cursor] + self.value[self.cursor + 1 :]
        elif key == "Left":
            self.cursor = max(self.cursor - 1, 0)
        elif key == "Right":
            self.cursor = min(self.cursor + 1, len(self.value))
        elif key == "Home":
            self.cursor = 0
        elif key == "End":
            self.cursor = len(self.value)


_ORDER = (Focus.NAME, Focus.PRIORITY, Focus.DATE)


@dataclass
class Popup:
    """Name, priority and date inputs for a new task."""

    current: Focus = Focus.NAME
    name: _TextField = field(default_factory=_TextField)
    priority: _TextField = field(default_factory=_TextField)
    date: _TextField = field(default_factory=_TextField)

    def _field(self, focus: Focus) -> _TextField:
        return {
            Focus.NAME: self.name,
            Focus.PRIORITY: self.priority,
            Focus.DATE: self.date,
        }[focus]

    def reset(self) -> None:
        """Clear every field and focus the name again."""
        self.current = Focus.NAME
        for focus in _ORDER:
            self._field(focus).clear()

    def focus_down(self) -> None:
        """Focus the next field, stopping at the last one."""
        index = _ORDER.index(self.current)
        self.current = _ORDER[min(index + 1, len(_ORDER) - 1)]

    def focus_up(self) -> None:
        """Focus the previous field, stopping at the first one."""
        index = _ORDER.index(self.current)
        self.current = _ORDER[max(index - 1, 0)]

    def handle_key(self, key: str) -> None:
        """Pass a key to the focused field."""
        self._field(self.current).handle_key(key)

    def to_task(self) -> Task | None:
        """The task described by the form, or None if the date is malformed."""
        priority = _parse_priority(self.priority.value)
        deadline = None
        if self.date.value:
            try:
                deadline = _parse_deadline(self.date.value)
            except ValueError:
                return None
        return Task.create(self.name.value, priority, deadline)

    def _prefix(self, focus: Focus) -> str:
        marker = ">" if focus is self.current else " "
        return f"{marker} {focus.value}: "

    def lines(self) -> list[str]:
        """One display line per field, the focused one marked with ``>``."""
        return [self._prefix(focus) + self._field(focus).value for focus in _ORDER]

    def _cursor_position(self) -> tuple[int, int]:
        row = _ORDER.index(self.current)
        column = len(self._prefix(self.current)) + self._field(self.current).cursor
        return row, column