"""Terminal interface for the task list."""

from __future__ import annotations

import argparse
import curses
import locale
from typing import Any

from .add import Popup
from .scheduler import Task, Tasks

_CHAR_KEYS = {
    "\x1b": "Esc",
    "\n": "Enter",
    "\r": "Enter",
    "\t": "Tab",
    "\x7f": "Backspace",
    "\b": "Backspace",
}

_CODE_KEYS = {
    curses.KEY_UP: "Up",
    curses.KEY_DOWN: "Down",
    curses.KEY_LEFT: "Left",
    curses.KEY_RIGHT: "Right",
    curses.KEY_HOME: "Home",
    curses.KEY_END: "End",
    curses.KEY_BACKSPACE: "Backspace",
    curses.KEY_DC: "Delete",
    curses.KEY_ENTER: "Enter",
    curses.KEY_BTAB: "BackTab",
}

_MAIN_HELP = (
    (" Down ", False),
    ("<j/Down>", True),
    (" Up ", False),
    ("<k/Up>", True),
    (" Step ", False),
    ("<s>", True),
    (" Finish ", False),
    ("<f>", True),
    (" Toggle Pause ", False),
    ("<p>", True),
    (" Remove ", False),
    ("<d>", True),
    (" Add ", False),
    ("<a>", True),
    (" Quit ", False),
    ("<q/Esc> ", True),
)

_POPUP_HELP = (
    (" Next ", False),
    ("<Tab>", True),
    (" Previous ", False),
    ("<S-Tab>", True),
    (" Add ", False),
    ("<Enter>", True),
    (" Quit ", False),
    ("<Esc> ", True),
)

_HEADER = ("P?", "Name", "Priority", "Deadline")
_SPACING = 1


def _key_name(key: Any) -> str | None:
    """Translate a key read from curses into the names the app understands."""
    if isinstance(key, str):
        return _CHAR_KEYS.get(key, key)
    return _CODE_KEYS.get(key)


def _put(screen: Any, y: int, x: int, text: str, limit: int, attr: int = 0) -> None:
    if limit <= 0 or y < 0 or x < 0 or not text:
        return
    try:
        screen.addnstr(y, x, text, limit, attr)
    except curses.error:
        pass


def _column_widths(inner_width: int) -> tuple[int, int, int, int]:
    rest = max(inner_width - 3 - 3 * _SPACING, 0)
    name = rest * 2 // 4
    priority = rest // 4
    return 3, name, priority, rest - name - priority


def task_to_row(task: Task) -> tuple[str, str, str, str]:
    """Cells of the table row for ``task``: paused flag, name, priority, deadline."""
    paused = "[P]" if task.paused else "[ ]"
    deadline = "-" if task.deadline is None else task.deadline.strftime("%Y-%m-%d")
    return paused, task.name, str(task.priority), deadline


class App:
    """State and key handling of the terminal interface."""

    def __init__(self, tasks: Tasks | None = None) -> None:
        self.tasks = Tasks.load() if tasks is None else tasks
        self.selected = 0
        self.exit = False
        self.add_popup_open = False
        self.add_popup = Popup()
        self._styles = {
            "bold": curses.A_BOLD,
            "key": curses.A_BOLD,
            "highlight": curses.A_REVERSE,
        }

    def handle_key(self, key: str) -> None:
        """React to one key press."""
        if self.add_popup_open:
            if key == "Esc":
                self.add_popup_open = False
                self.add_popup.reset()
            elif key == "Enter":
                task = self.add_popup.to_task()
                if task is not None:
                    self.tasks.add(task)
                self.add_popup.reset()
                self.add_popup_open = False
            elif key in ("Tab", "Down"):
                self.add_popup.focus_down()
            elif key in ("BackTab", "Up"):
                self.add_popup.focus_up()
            else:
                self.add_popup.handle_key(key)
            return
        if key in ("q", "Esc"):
            self.exit = True
        elif key in ("j", "Down"):
            self.select_down()
        elif key in ("k", "Up"):
            self.select_up()
        elif key == "s":
            self.step()
        elif key == "f":
            self.finish()
        elif key == "p":
            self.pause()
        elif key == "d":
            self.remove()
        elif key == "a":
            self.add_popup_open = True

    def select_down(self) -> None:
        """Move the selection down, stopping at the last task."""
        self.selected = max(min(self.selected + 1, len(self.tasks.tasks) - 1), 0)

    def select_up(self) -> None:
        """Move the selection up, stopping at the first task."""
        self.selected = max(self.selected - 1, 0)

    def step(self) -> None:
        """Step the task list."""
        self.tasks.step()

    def finish(self) -> None:
        """Finish the current task."""
        self.tasks.step_and_finish()

    def _selected_task(self) -> Task | None:
        if 0 <= self.selected < len(self.tasks.tasks):
            return self.tasks.tasks[self.selected]
        return None

    def pause(self) -> None:
        """Toggle the paused state of the selected task, if there is one."""
        task = self._selected_task()
        if task is not None:
            self.tasks.toggle_pause(Task.from_dict(task.to_dict()))

    def remove(self) -> None:
        """Remove the selected task, if there is one."""
        task = self._selected_task()
        if task is not None:
            self.tasks.remove(Task.from_dict(task.to_dict()))

    def _draw_frame(self, screen: Any, height: int, width: int, title: str, help_items) -> None:
        if height < 2 or width < 2:
            return
        _put(screen, 0, 0, "┏" + "━" * (width - 2) + "┓", width)
        for y in range(1, height - 1):
            _put(screen, y, 0, "┃", 1)
            _put(screen, y, width - 1, "┃", 1)
        _put(screen, height - 1, 0, "┗" + "━" * (width - 2) + "┛", width)
        start = max((width - len(title)) // 2, 1)
        _put(screen, 0, start, title, width - 1 - start, self._styles["bold"])
        x = 1
        for text, is_key in help_items:
            room = width - 1 - x
            if room <= 0:
                break
            attr = self._styles["key"] if is_key else 0
            _put(screen, height - 1, x, text, room, attr)
            x += len(text)

    def _draw_row(self, screen: Any, y: int, cells, inner_width: int, attr: int) -> None:
        if attr:
            _put(screen, y, 1, " " * inner_width, inner_width, attr)
        x = 1
        for cell, width in zip(cells, _column_widths(inner_width)):
            _put(screen, y, x, cell, min(width, inner_width + 1 - x), attr)
            x += width + _SPACING

    def render(self, screen: Any) -> None:
        """Draw the task table, or the add form when it is open."""
        screen.erase()
        height, width = screen.getmaxyx()
        inner_width = width - 2
        if self.add_popup_open:
            self._draw_frame(screen, height, width, " Add Task... ", _POPUP_HELP)
            for row, line in enumerate(self.add_popup.lines(), start=1):
                if row < height - 1:
                    _put(screen, row, 1, line, inner_width)
            row, column = self.add_popup._cursor_position()
            if 1 + row < height - 1 and 1 + column < width - 1:
                try:
                    screen.move(1 + row, 1 + column)
                except curses.error:
                    pass
        else:
            self._draw_frame(screen, height, width, " Nasin ", _MAIN_HELP)
            if height > 2:
                self._draw_row(screen, 1, _HEADER, inner_width, self._styles["bold"])
            for index, task in enumerate(self.tasks.tasks):
                y = index + 2
                if y >= height - 1:
                    break
                attr = self._styles["highlight"] if index == self.selected else 0
                self._draw_row(screen, y, task_to_row(task), inner_width, attr)
        screen.refresh()

    def _setup_styles(self) -> None:
        try:
            if curses.has_colors():
                curses.start_color()
                curses.use_default_colors()
                curses.init_pair(1, curses.COLOR_BLACK, curses.COLOR_YELLOW)
                curses.init_pair(2, curses.COLOR_BLUE, -1)
                self._styles["highlight"] = curses.color_pair(1)
                self._styles["key"] = curses.color_pair(2) | curses.A_BOLD
        except curses.error:
            pass

    def run(self, screen: Any) -> None:
        """Draw and handle keys until the user quits."""
        self._setup_styles()
        while not self.exit:
            try:
                curses.curs_set(1 if self.add_popup_open else 0)
            except curses.error:
                pass
            self.render(screen)
            key = _key_name(screen.get_wch())
            if key is not None:
                self.handle_key(key)


def main(argv: list[str] | None = None) -> int:
    """Start the terminal interface."""
    parser = argparse.ArgumentParser(prog="nasin-tui", description="Terminal task scheduler.")
    parser.parse_args(argv)
    locale.setlocale(locale.LC_ALL, "")
    app = App()
    try:
        curses.wrapper(app.run)
    except KeyboardInterrupt:
        return 130
    return 0