"""Task list with ageing priorities, persisted as JSON."""

from __future__ import annotations

import json
import os
import re
import sys
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Iterable

MAX_PRIORITY = 255
_MAX_AGE = 2**32 - 1

_FRACTION = re.compile(r"\.(\d+)")


def _user_data_dir() -> Path:
    if sys.platform.startswith("win"):
        appdata = os.environ.get("APPDATA")
        return Path(appdata) if appdata else Path.home() / "AppData" / "Roaming"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support"
    xdg = os.environ.get("XDG_DATA_HOME")
    if xdg and Path(xdg).is_absolute():
        return Path(xdg)
    return Path.home() / ".local" / "share"


def data_path() -> Path:
    """Return the task file in the user's data directory, creating it if needed."""
    directory = _user_data_dir() / "nasin"
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / "tasks.json"
    path.touch(exist_ok=True)
    return path


def _local(moment: datetime) -> datetime:
    """Return ``moment`` as an aware datetime in the local time zone."""
    return moment.astimezone()


def priority_from_deadline(deadline: datetime, now: datetime | None = None) -> int:
    """Priority derived from whole days left until ``deadline``, clamped to 1..255."""
    if now is None:
        now = datetime.now().astimezone()
    diff = _local(deadline) - _local(now)
    micros = diff // timedelta(microseconds=1)
    per_day = 86_400_000_000
    days = abs(micros) // per_day
    if micros < 0:
        days = -days
    return max(1, min(days + 1, MAX_PRIORITY))


def _format_datetime(moment: datetime) -> str:
    return _local(moment).isoformat()


def _parse_datetime(text: str) -> datetime:
    if not isinstance(text, str):
        raise ValueError(f"invalid deadline: {text!r}")
    normalized = text.strip()
    if normalized.endswith(("Z", "z")):
        normalized = normalized[:-1] + "+00:00"
    normalized = _FRACTION.sub(
        lambda m: "." + m.group(1)[:6].ljust(6, "0"), normalized, count=1
    )
    try:
        parsed = datetime.fromisoformat(normalized)
    except ValueError as exc:
        raise ValueError(f"invalid deadline: {text!r}") from exc
    if parsed.tzinfo is None:
        raise ValueError(f"deadline has no time zone offset: {text!r}")
    return _local(parsed)


def _field(data: dict[str, Any], key: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise ValueError(f"missing field `{key}`") from None


def _int_field(data: dict[str, Any], key: str, upper: int) -> int:
    value = _field(data, key)
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= upper:
        raise ValueError(f"invalid value for `{key}`: {value!r}")
    return value


@dataclass(eq=False)
class Task:
    """A single task; lower priority values come first."""

    name: str
    priority: int
    paused: bool = False
    deadline: datetime | None = None
    age: int = 0
    base_priority: int = 0

    @classmethod
    def create(cls, name: str, priority: int, deadline: datetime | None = None) -> Task:
        """Make a fresh task; a deadline overrides the given priority."""
        if deadline is not None:
            deadline = _local(deadline)
            priority = priority_from_deadline(deadline)
        return cls(
            name=name,
            priority=priority,
            paused=False,
            deadline=deadline,
            age=0,
            base_priority=priority,
        )

    def promote(self) -> None:
        """Raise an unpaused task's urgency by one step and clear its age."""
        if not self.paused:
            self.age = 0
            self.priority = max(self.priority - 1, 1)

    def reset(self) -> None:
        """Restore the base priority and clear the age."""
        self.age = 0
        self.priority = self.base_priority

    def _order_key(self) -> tuple:
        if self.paused:
            return (1,)
        return (0, self.priority, -self.age)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Task):
            return NotImplemented
        return (
            self.paused == other.paused
            and self.name == other.name
            and self.age == other.age
            and self.priority == other.priority
            and self.base_priority == other.base_priority
        )

    def __lt__(self, other: Task) -> bool:
        return self._order_key() < other._order_key()

    __hash__ = None  # type: ignore[assignment]

    def to_dict(self) -> dict[str, Any]:
        """Serialisable form of the task."""
        return {
            "name": self.name,
            "priority": self.priority,
            "paused": self.paused,
            "deadline": None if self.deadline is None else _format_datetime(self.deadline),
            "age": self.age,
            "base_priority": self.base_priority,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Task:
        """Build a task from its serialised form, raising ValueError if malformed."""
        if not isinstance(data, dict):
            raise ValueError("task must be an object")
        name = _field(data, "name")
        if not isinstance(name, str):
            raise ValueError(f"invalid value for `name`: {name!r}")
        paused = _field(data, "paused")
        if not isinstance(paused, bool):
            raise ValueError(f"invalid value for `paused`: {paused!r}")
        raw_deadline = data.get("deadline")
        return cls(
            name=name,
            priority=_int_field(data, "priority", MAX_PRIORITY),
            paused=paused,
            deadline=None if raw_deadline is None else _parse_datetime(raw_deadline),
            age=_int_field(data, "age", _MAX_AGE),
            base_priority=_int_field(data, "base_priority", MAX_PRIORITY),
        )


def _last_oldest(candidates: Iterable[Task]) -> Task | None:
    """The task with the greatest age; the last one wins a tie."""
    oldest: Task | None = None
    for task in candidates:
        if oldest is None or task.age >= oldest.age:
            oldest = task
    return oldest


@dataclass
class Tasks:
    """An ordered task list bound to the file it is saved in."""

    tasks: list[Task] = field(default_factory=list)
    path: Path | None = None

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> Tasks:
        """Read tasks from ``path`` (the user data file by default)."""
        file_path = data_path() if path is None else Path(path)
        if not file_path.exists():
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.touch()
        text = file_path.read_text(encoding="utf-8")
        if not text:
            return cls(path=file_path)
        try:
            document = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValueError(f"malformed task file {file_path}: {exc}") from exc
        if not isinstance(document, dict) or not isinstance(document.get("tasks"), list):
            raise ValueError(f"malformed task file {file_path}: missing task list")
        loaded = cls(tasks=[Task.from_dict(item) for item in document["tasks"]], path=file_path)

        modified = False
        for task in loaded.tasks:
            if task.deadline is not None:
                new_priority = priority_from_deadline(task.deadline)
                if task.base_priority != new_priority:
                    modified = True
                task.base_priority = new_priority
                task.priority = min(task.priority, task.base_priority)
        if modified:
            loaded.tasks.sort()
        return loaded

    def save(self) -> None:
        """Write the task list to its file."""
        file_path = data_path() if self.path is None else Path(self.path)
        document = {"tasks": [task.to_dict() for task in self.tasks]}
        file_path.write_text(json.dumps(document, separators=(",", ":")), encoding="utf-8")

    def _age_all(self) -> None:
        for task in self.tasks:
            task.age += 1

    def step(self) -> None:
        """Move past the current task: it goes back to its base priority,
        the others age, and the oldest unpaused one is promoted."""
        if not self.tasks:
            return
        self.tasks.sort()
        current = self.tasks.pop(0)
        self._age_all()
        if len(self.tasks) == 1:
            oldest: Task | None = self.tasks[0]
        else:
            oldest = _last_oldest(task for task in self.tasks if not task.paused)
        if oldest is not None:
            oldest.promote()
        current.reset()
        self.tasks.append(current)
        self.tasks.sort()
        self.save()

    def step_and_finish(self) -> None:
        """Drop the current task, age the rest and promote the oldest."""
        if not self.tasks:
            return
        self.tasks.sort()
        self.tasks.pop(0)
        if not self.tasks:
            self.save()
            return
        self._age_all()
        oldest = _last_oldest(self.tasks)
        if oldest is not None:
            oldest.promote()
        self.tasks.sort()
        self.save()

    def remove(self, task: Task) -> None:
        """Remove the first task equal to ``task``."""
        for index, candidate in enumerate(self.tasks):
            if candidate == task:
                del self.tasks[index]
                self.save()
                return
        if not self.tasks:
            self.save()

    def add(self, task: Task) -> None:
        """Insert a task and keep the list ordered."""
        self.tasks.append(task)
        self.tasks.sort()
        self.save()

    def toggle_pause(self, task: Task) -> None:
        """Flip the paused flag of every task equal to ``task``."""
        for candidate in self.tasks:
            if candidate == task:
                candidate.paused = not candidate.paused
        self.tasks.sort()
        self.save()