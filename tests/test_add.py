from datetime import date

import pytest

from nasin.add import Focus, Popup
from nasin.scheduler import MAX_PRIORITY


def type_text(popup, text):
    for character in text:
        popup.handle_key(character)


def test_starts_on_name():
    assert Popup().current is Focus.NAME


def test_focus_down_stops_at_date():
    popup = Popup()
    popup.focus_down()
    assert popup.current is Focus.PRIORITY
    popup.focus_down()
    assert popup.current is Focus.DATE
    popup.focus_down()
    assert popup.current is Focus.DATE


def test_focus_up_stops_at_name():
    popup = Popup()
    popup.focus_down()
    popup.focus_down()
    popup.focus_up()
    assert popup.current is Focus.PRIORITY
    popup.focus_up()
    assert popup.current is Focus.NAME
    popup.focus_up()
    assert popup.current is Focus.NAME


def test_typing_goes_to_focused_field():
    popup = Popup()
    type_text(popup, "Laundry")
    popup.focus_down()
    type_text(popup, "4")
    task = popup.to_task()
    assert task.name == "Laundry"
    assert task.priority == 4
    assert task.base_priority == 4
    assert task.deadline is None


@pytest.mark.parametrize("text", ["", "abc", "300", "-2", " 3"])
def test_bad_priority_defaults_to_one(text):
    popup = Popup()
    popup.focus_down()
    type_text(popup, text)
    assert popup.to_task().priority == 1


def test_zero_priority_is_accepted():
    popup = Popup()
    popup.focus_down()
    type_text(popup, "0")
    assert popup.to_task().priority == 0


def test_highest_priority_is_accepted():
    popup = Popup()
    popup.focus_down()
    type_text(popup, str(MAX_PRIORITY))
    assert popup.to_task().priority == MAX_PRIORITY


def test_invalid_date_gives_no_task():
    popup = Popup()
    type_text(popup, "x")
    popup.focus_down()
    popup.focus_down()
    type_text(popup, "tomorrow")
    assert popup.to_task() is None


def test_far_date_sets_deadline_and_priority():
    popup = Popup()
    type_text(popup, "Plan")
    popup.focus_down()
    type_text(popup, "3")
    popup.focus_down()
    type_text(popup, "2099-01-01")
    task = popup.to_task()
    assert task.deadline.date() == date(2099, 1, 1)
    assert task.deadline.hour == 0
    assert task.deadline.tzinfo is not None
    assert task.priority == MAX_PRIORITY


def test_editing_keys():
    popup = Popup()
    type_text(popup, "abc")
    popup.handle_key("Backspace")
    popup.handle_key("Home")
    popup.handle_key("x")
    popup.handle_key("End")
    popup.handle_key("Left")
    popup.handle_key("Delete")
    assert popup.name.value == "xa"


def test_named_keys_are_not_typed():
    popup = Popup()
    popup.handle_key("Enter")
    popup.handle_key("Up")
    assert popup.name.value == ""


def test_reset_clears_fields():
    popup = Popup()
    type_text(popup, "abc")
    popup.focus_down()
    type_text(popup, "2")
    popup.focus_down()
    type_text(popup, "2099-01-01")
    popup.reset()
    assert popup.current is Focus.NAME
    assert (popup.name.value, popup.priority.value, popup.date.value) == ("", "", "")
    assert popup.name.cursor == 0


def test_lines_show_values_and_focus():
    popup = Popup()
    type_text(popup, "Read")
    popup.focus_down()
    lines = popup.lines()
    assert len(lines) == 3
    assert "Name" in lines[0] and "Read" in lines[0]
    assert lines[1].startswith(">")
    assert not lines[0].startswith(">")
    assert "Date" in lines[2]