"""Task scheduler that orders tasks by priority, waiting time and deadline, with curses and Tk front ends."""

__version__ = "0.1.0"
__all__ = ["__version__"]