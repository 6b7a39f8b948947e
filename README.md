# nasin

nasin keeps a list of tasks and tells you which one to work on next.

- Tasks are ordered by priority: a lower number comes first.
- Among tasks with the same priority, the one that has waited longest comes
  first.
- Paused tasks always sink to the bottom of the list.
- A task with a deadline takes its priority from the number of whole days
  left until that deadline, plus one. The result is kept between 1 and 255.
- Each time the list is loaded, the priority of every task with a deadline is
  worked out again. A task that gets closer to its deadline moves up.

The list is stored as JSON in a file named `nasin/tasks.json` inside your user
data directory. The file is created if it is missing, and the list is saved
after every change. The data directory is:

| System  | Data directory                                         |
|---------|--------------------------------------------------------|
| Linux   | `$XDG_DATA_HOME`, or `~/.local/share`                  |
| macOS   | `~/Library/Application Support`                        |
| Windows | `%APPDATA%`                                            |

## Installing

```
pip install .
```

Python 3.10 or newer is needed. There are no third-party dependencies:

- The window uses `tkinter`.
- The terminal interface uses `curses`. Python on Windows does not ship
  `curses`, so `nasin-tui` needs a system that has it.

## Window

```
nasin
```

opens a window listing your tasks.

The toolbar has three buttons:

- **Add** opens the "Add Task" dialog.
- **Step** rotates the current task.
- **Finish** removes the current task.

Each row shows the task's name and its priority. A task with a deadline also
shows that deadline. Each row has two buttons:

- **Pause** or **Resume**, depending on the task's state.
- **Delete**.

The "Add Task" dialog has these fields:

- **Name**.
- **Priority**. An empty priority counts as 1, and so does anything that is
  not a whole number from 0 to 255. A priority of 0 is refused: no task is
  added and the dialog stays open.
- **Date**. Tick it to give the task a deadline, written as `YYYY-MM-DD`. The
  deadline then sets the priority. A date that does not parse shows a message
  and nothing is added.

**Create Task** adds the task, clears the fields and closes the dialog.

## Terminal

```
nasin-tui
```

shows the same list as a table with four columns: paused flag (`[P]` or
`[ ]`), name, priority and deadline (`-` if there is none). The selected row
is highlighted.

| Key            | Action                            |
|----------------|-----------------------------------|
| `j` / Down     | move the selection down           |
| `k` / Up       | move the selection up             |
| `s`            | step: rotate the current task     |
| `f`            | finish the current task           |
| `p`            | pause or resume the selected task |
| `d`            | delete the selected task          |
| `a`            | open the add form                 |
| `q` / Esc      | quit                              |

The add form has three fields: Name, Priority and Date.

- Tab or Down moves to the next field. Shift-Tab or Up moves to the previous
  one.
- Left, Right, Home, End, Backspace and Delete edit the focused field.
- Enter adds the task. Esc cancels.
- The priority is read the same way as in the window: anything that is not a
  whole number from 0 to 255 counts as 1.
- The date is written as `YYYY-MM-DD`. A date that does not parse means no
  task is added.

## How stepping works

**Step**:

1. Sorts the list.
2. Takes the task at the top.
3. Ages every other task by one.
4. Promotes the oldest task that is not paused: it moves one priority step
   closer to the top (never below 1) and its age is cleared. If two tasks are
   equally old, the one later in the list is promoted.
5. Puts the taken task back with its original priority and sorts again.

**Finish** does the same, but the top task is removed instead of being put
back. Paused tasks are never promoted.

## Using it from Python

```python
from nasin.scheduler import Task, Tasks

tasks = Tasks.load("my-tasks.json")    # omit the path to use the data file
tasks.add(Task.create("write report", 2, None))
tasks.step()
print([task.name for task in tasks.tasks])
```

### Module `nasin.scheduler`

`Task` holds these fields: `name`, `priority`, `paused`, `deadline`, `age` and
`base_priority`. It has these methods:

- `Task.create(name, priority, deadline)` makes a new task. A deadline, if
  given, overrides the priority.
- `promote()` moves an unpaused task one priority step up.
- `reset()` restores the base priority and clears the age.
- `to_dict()` and `Task.from_dict(data)` convert the task to and from its
  JSON form.

`Tasks` holds the list and the file it is saved in. It has these methods:

- `Tasks.load(path)` reads the list from a file.
- `save()` writes the list to its file.
- `step()` and `step_and_finish()` rotate or finish the current task, as
  described above.
- `add(task)` adds a task.
- `remove(task)` removes the first equal task.
- `toggle_pause(task)` pauses or resumes every equal task.

A task file that is not valid makes `Tasks.load` raise `ValueError`.

The module also has two functions:

- `priority_from_deadline(deadline, now)` gives the priority for a deadline.
- `data_path()` returns the default task file, creating it if needed.

### The interfaces

The interfaces can be driven without a screen:

- `nasin.tui.App` takes key names such as `"j"`, `"Enter"` or `"Esc"` through
  `handle_key(key)`.
- `nasin.add.Popup` is the add form. `lines()` gives its display lines.
- `nasin.gui.MainWindow(tasks)` works without a Tk root. It keeps the rows it
  would draw in `rows`, and `create_task(name, priority_text, deadline)` adds
  a task as the dialog does.

## Running the tests

```
pip install '.[test]'
pytest
```