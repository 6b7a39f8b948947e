"""Windowed interface for the task list."""

from __future__ import annotations

import argparse
import re
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any

from .scheduler import MAX_PRIORITY, Task, Tasks

_UNSIGNED = re.compile(r"\+?[0-9]+")
_DATE_FORMAT = "%Y-%m-%d"


def build_subtitle(task: Task) -> str:
    """Second line of a task's row: its priority and, if set, its deadline."""
    out = f"Priority: {task.priority}"
    if task.deadline is not None:
        out += f" Deadline: {task.deadline.strftime(_DATE_FORMAT)}"
    return out


def parse_priority(text: str) -> int:
    """Parse a priority in 0..255; anything else gives 1."""
    if _UNSIGNED.fullmatch(text):
        value = int(text)
        if value <= MAX_PRIORITY:
            return value
    return 1


@dataclass(frozen=True)
class Row:
    """What one line of the task list shows."""

    task: Task
    title: str
    subtitle: str
    paused: bool


class MainWindow:
    """The task list window and its add-task dialog.

    Without a Tk root the window keeps only its state, which is what the
    widgets are drawn from.
    """

    def __init__(self, tasks: Tasks | None = None, root: Any = None) -> None:
        self.tasks = Tasks.load() if tasks is None else tasks
        self.root = root
        self.rows: list[Row] = []
        self.dialog_open = False
        self._list_frame: Any = None
        self._canvas: Any = None
        self._dialog: Any = None
        self._dialog_vars: dict[str, Any] = {}
        if root is not None:
            self._build(root)
        self.refresh()

    # ----- widgets -------------------------------------------------------

    def _build(self, root: Any) -> None:
        import tkinter as tk
        from tkinter import ttk

        root.title("Nasin")
        toolbar = ttk.Frame(root)
        toolbar.pack(side=tk.TOP, fill=tk.X)
        ttk.Button(toolbar, text="Add", command=self.open_add_dialog).pack(side=tk.LEFT)
        ttk.Button(toolbar, text="Step", command=self.step).pack(side=tk.LEFT)
        ttk.Button(toolbar, text="Finish", command=self.step_and_finish).pack(side=tk.LEFT)

        viewport = ttk.Frame(root)
        viewport.pack(side=tk.TOP, fill=tk.BOTH, expand=True)
        canvas = tk.Canvas(viewport, height=400, highlightthickness=0)
        scrollbar = ttk.Scrollbar(viewport, orient=tk.VERTICAL, command=canvas.yview)
        canvas.configure(yscrollcommand=scrollbar.set)
        scrollbar.pack(side=tk.RIGHT, fill=tk.Y)
        canvas.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)

        inner = ttk.Frame(canvas, padding=32)
        window_id = canvas.create_window((0, 0), window=inner, anchor="nw")
        inner.bind(
            "<Configure>", lambda _event: canvas.configure(scrollregion=canvas.bbox("all"))
        )
        canvas.bind(
            "<Configure>", lambda event: canvas.itemconfigure(window_id, width=event.width)
        )
        self._canvas = canvas
        self._list_frame = inner

    def _draw_rows(self) -> None:
        import tkinter as tk
        from tkinter import ttk

        for child in self._list_frame.winfo_children():
            child.destroy()
        for row in self.rows:
            frame = ttk.Frame(self._list_frame, padding=6, relief=tk.GROOVE)
            frame.pack(side=tk.TOP, fill=tk.X)
            text = ttk.Frame(frame)
            text.pack(side=tk.LEFT, fill=tk.X, expand=True)
            ttk.Label(text, text=row.title, font=("TkDefaultFont", 10, "bold")).pack(anchor="w")
            ttk.Label(text, text=row.subtitle).pack(anchor="w")
            ttk.Button(
                frame,
                text="Delete",
                command=lambda task=row.task: self._remove_task(task),
            ).pack(side=tk.RIGHT)
            ttk.Button(
                frame,
                text="Resume" if row.paused else "Pause",
                command=lambda task=row.task: self._toggle_pause(task),
            ).pack(side=tk.RIGHT)

    def _build_dialog(self) -> None:
        import tkinter as tk
        from tkinter import ttk

        dialog = tk.Toplevel(self.root)
        dialog.title("Add Task")
        dialog.transient(self.root)
        dialog.protocol("WM_DELETE_WINDOW", self._close_dialog)

        name = tk.StringVar()
        priority = tk.StringVar()
        date_on = tk.BooleanVar(value=False)
        date = tk.StringVar(value=datetime.now().strftime(_DATE_FORMAT))
        status = tk.StringVar()

        body = ttk.Frame(dialog, padding=12)
        body.pack(fill=tk.BOTH, expand=True)
        ttk.Label(body, text="Name").grid(row=0, column=0, sticky="w")
        ttk.Entry(body, textvariable=name).grid(row=0, column=1, sticky="ew")
        ttk.Label(body, text="Priority").grid(row=1, column=0, sticky="w")
        ttk.Entry(body, textvariable=priority).grid(row=1, column=1, sticky="ew")
        date_entry = ttk.Entry(body, textvariable=date, state="disabled")

        def on_toggle() -> None:
            date_entry.configure(state="normal" if date_on.get() else "disabled")

        ttk.Checkbutton(body, text="Date", variable=date_on, command=on_toggle).grid(
            row=2, column=0, sticky="w"
        )
        date_entry.grid(row=2, column=1, sticky="ew")
        ttk.Label(body, textvariable=status).grid(row=3, column=0, columnspan=2, sticky="w")
        body.columnconfigure(1, weight=1)

        def on_create() -> None:
            deadline = None
            if date_on.get():
                try:
                    deadline = datetime.strptime(date.get(), _DATE_FORMAT).astimezone()
                except ValueError:
                    status.set("Date must be YYYY-MM-DD")
                    return
            status.set("")
            self.create_task(name.get(), priority.get(), deadline)
            name.set("")
            priority.set("")
            date_on.set(False)
            on_toggle()

        ttk.Button(dialog, text="Create Task", command=on_create).pack(
            side=tk.BOTTOM, fill=tk.X, padx=12, pady=(0, 12)
        )
        self._dialog = dialog
        self._dialog_vars = {"name": name, "priority": priority, "date_on": date_on}

    def _close_dialog(self) -> None:
        self.dialog_open = False
        if self._dialog is not None:
            try:
                self._dialog.grab_release()
            except Exception:
                pass
            self._dialog.withdraw()

    # ----- actions -------------------------------------------------------

    def refresh(self) -> None:
        """Rebuild the rows from the current task list."""
        self.rows = [
            Row(task=task, title=task.name, subtitle=build_subtitle(task), paused=task.paused)
            for task in self.tasks.tasks
        ]
        if self._list_frame is not None:
            self._draw_rows()

    def open_add_dialog(self) -> None:
        """Show the add-task dialog."""
        self.dialog_open = True
        if self.root is None:
            return
        if self._dialog is None:
            self._build_dialog()
        self._dialog.deiconify()
        self._dialog.lift()
        try:
            self._dialog.grab_set()
        except Exception:
            pass

    def create_task(
        self, name: str, priority_text: str, deadline: datetime | None = None
    ) -> Task | None:
        """Add a task from the dialog's values and close the dialog.

        Nothing is added when the priority comes out as 0; None is returned then.
        """
        priority = parse_priority(priority_text)
        if priority < 1:
            return None
        task = Task.create(name, priority, deadline)
        self.tasks.add(task)
        self.refresh()
        self._close_dialog()
        return task

    def step(self) -> None:
        """Step the task list."""
        self.tasks.step()
        self.refresh()

    def step_and_finish(self) -> None:
        """Finish the current task."""
        self.tasks.step_and_finish()
        self.refresh()

    def _toggle_pause(self, task: Task) -> None:
        self.tasks.toggle_pause(replace(task))
        self.refresh()

    def _remove_task(self, task: Task) -> None:
        self.tasks.remove(replace(task))
        self.refresh()


def main(argv: list[str] | None = None) -> int:
    """Open the task window."""
    parser = argparse.ArgumentParser(prog="nasin", description="Task scheduler.")
    parser.parse_args(argv)
    import tkinter as tk

    root = tk.Tk()
    MainWindow(root=root)
    root.mainloop()
    return 0