import os
import readline
import sys

from mishell.builtin import BUILTINS


def command_names(bin_dir):
    """Builtin names plus the regular files of bin_dir."""
    names = set(BUILTINS)
    try:
        with os.scandir(bin_dir) as entries:
            for entry in entries:
                try:
                    if entry.is_file():
                        names.add(entry.name)
                except OSError:
                    continue
    except OSError:
        pass
    return names


def complete(prefix, bin_dir):
    """
    Complete a command name.
    Returns: sorted candidates, or just [prefix] on an exact match
    """
    names = command_names(bin_dir)
    if prefix and prefix in names:
        return [prefix]
    return sorted(name for name in names if name.startswith(prefix))


def show_completions(command, session):
    """Print the candidates for a line ending in `?`"""
    matches = complete(command.name, session.bin_dir)
    if not matches:
        print(f"no completions for '{command.name}'")
    for name in matches:
        print(name)
    return matches


def make_completer(session):
    """Adapt complete() to the readline completer protocol."""
    cache = {}

    def completer(text, state):
        if state == 0:
            cache["matches"] = complete(text, session.bin_dir)
        matches = cache.get("matches", [])
        return matches[state] if state < len(matches) else None

    return completer


# readline key bindings for an interactive terminal
KEY_BINDINGS = (
    "tab: complete",
    "set editing-mode emacs",
    "set show-all-if-ambiguous on",
    "\\e[A: previous-history",
    "\\e[B: next-history",
    "\\e[1;5D: backward-word",
    "\\e[1;5C: forward-word",
)


def init_readline(session):
    """Hook command completion into readline when stdin is a terminal."""
    if not sys.stdin.isatty():
        return
    readline.set_completer(make_completer(session))
    readline.set_completer_delims(" \t|<>")
    for binding in KEY_BINDINGS:
        readline.parse_and_bind(binding)
