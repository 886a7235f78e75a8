"""Persistent command history, kept by readline between sessions."""
import os
import readline
import sys

from mishell.config import HISTORY_FILE, MAX_HISTORY


def load_history(path=HISTORY_FILE):
    if not os.path.exists(path):
        return
    try:
        readline.read_history_file(path)
    except OSError as e:
        print(f"-mishell: history: cannot read {path}: {e.strerror}", file=sys.stderr)
    readline.set_history_length(MAX_HISTORY)


def save_history(path=HISTORY_FILE):
    readline.set_history_length(MAX_HISTORY)
    try:
        readline.write_history_file(path)
    except OSError as e:
        print(f"-mishell: history: cannot write {path}: {e.strerror}", file=sys.stderr)


def history_lines():
    """
    Entries of the current history, oldest first.
    Returns: list of (number, line)
    """
    count = readline.get_current_history_length()
    return [(i, readline.get_history_item(i)) for i in range(1, count + 1)]


def show_history():
    for number, line in history_lines():
        print(f"{number}\t{line}")
