[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nasin"
version = "0.1.0"
description = "A small task scheduler that rotates through your tasks by priority, age and deadline"
requires-python = ">=3.10"
dependencies = []
keywords = ["tasks", "scheduler", "todo", "priority", "deadline", "tui", "curses", "tkinter"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Environment :: Console :: Curses",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Scheduling",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
nasin = "nasin.gui:main"
nasin-tui = "nasin.tui:main"

[tool.hatch.build.targets.wheel]
packages = ["nasin"]

[tool.pytest.ini_options]
addopts = "-ra"
