from datetime import datetime, timedelta

import pytest

from nasin.gui import MainWindow, build_subtitle, parse_priority
from nasin.scheduler import Task, Tasks, priority_from_deadline


@pytest.fixture
def window(tmp_path):
    return MainWindow(tasks=Tasks(path=tmp_path / "tasks.json"))


def test_subtitle_without_deadline():
    assert build_subtitle(Task.create("a", 3)) == "Priority: 3"


def test_subtitle_with_deadline():
    task = Task(name="a", priority=2, deadline=datetime(2030, 1, 5, 12).astimezone())
    assert build_subtitle(task) == "Priority: 2 Deadline: 2030-01-05"


@pytest.mark.parametrize(
    "text, expected",
    [("5", 5), ("255", 255), ("0", 0), ("+7", 7), ("", 1), ("abc", 1), ("256", 1), ("-1", 1)],
)
def test_parse_priority(text, expected):
    assert parse_priority(text) == expected


def test_create_task_adds_and_saves(window, tmp_path):
    window.open_add_dialog()
    assert window.dialog_open
    task = window.create_task("write", "4", None)
    assert task.name == "write"
    assert task.priority == 4
    assert not window.dialog_open
    assert [row.title for row in window.rows] == ["write"]
    reloaded = Tasks.load(tmp_path / "tasks.json")
    assert [t.name for t in reloaded.tasks] == ["write"]


def test_create_task_rejects_zero_priority(window):
    window.open_add_dialog()
    assert window.create_task("nope", "0", None) is None
    assert window.tasks.tasks == []
    assert window.rows == []
    assert window.dialog_open


def test_create_task_bad_priority_defaults_to_one(window):
    task = window.create_task("x", "many", None)
    assert task.priority == 1


def test_create_task_with_deadline(window):
    deadline = (datetime.now() + timedelta(days=10, hours=2)).astimezone()
    task = window.create_task("due", "9", deadline)
    assert task.deadline == deadline
    assert task.priority == priority_from_deadline(deadline)


def test_rows_follow_task_order(window):
    window.create_task("low", "5", None)
    window.create_task("high", "2", None)
    assert [row.title for row in window.rows] == [t.name for t in window.tasks.tasks]
    assert [row.subtitle for row in window.rows] == [
        build_subtitle(t) for t in window.tasks.tasks
    ]
    assert window.rows[0].title == "high"


def test_step_keeps_all_tasks(window):
    window.create_task("a", "1", None)
    window.create_task("b", "3", None)
    window.step()
    assert sorted(row.title for row in window.rows) == ["a", "b"]
    assert [row.title for row in window.rows] == [t.name for t in window.tasks.tasks]


def test_step_on_empty_list(window):
    window.step()
    window.step_and_finish()
    assert window.rows == []


def test_step_and_finish_removes_first(window):
    window.create_task("first", "1", None)
    window.create_task("second", "6", None)
    window.step_and_finish()
    assert [row.title for row in window.rows] == ["second"]
    assert len(window.tasks.tasks) == 1


def test_refresh_reflects_paused_state(window):
    window.create_task("a", "2", None)
    window.tasks.tasks[0].paused = True
    window.refresh()
    assert window.rows[0].paused is True