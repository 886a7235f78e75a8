import os

from mishell import config
from mishell.command import Status
from mishell.errors import reason
from mishell.fileutils import (execute_countlines, execute_hdiff, execute_scoutword,
                               mkdir_command, rmdir_command)
from mishell.history import show_history
from mishell.psvis import execute_psvis, unload_module

# dispatch() result for names that are not builtins
NOT_BUILTIN = None


def builtin_help(command, session):
    """Print help message"""
    print(f"""{config.SYSNAME} help:
 Built-in commands:
  cd [dir]                 : change directory
  exit                     : exit shell
  help                     : print this help
  history                  : show command history
  pmon                     : show background jobs
  hdiff [-a | -b] f1 f2    : compare two files as text or binary
  mkdir <dir>              : create a directory
  rmdir <dir>              : remove an empty directory
  countlines <file>        : count lines in a file
  scoutword <word> <file>  : count occurrences of a word
  psvis <pid>              : show the process tree of a pid

Features:
  Pipes using |
  Redirection using > >> <
  Background with & (run command in background)
  Command completion with a trailing ?
  Executables are looked up in {session.bin_dir}
""")
    return Status.SUCCESS


def builtin_cd(command, session):
    """Change directory"""
    argv = command.argv
    path = argv[1] if len(argv) > 1 else os.path.expanduser("~")
    try:
        os.chdir(path)
    except (OSError, ValueError) as e:
        print(f"-{config.SYSNAME}: {command.name}: {reason(e)}")
    return Status.SUCCESS


def builtin_exit(command, session):
    if session.kernel_loaded:
        unload_module(session)
    return Status.EXIT


def builtin_history(command, session):
    """Show command history"""
    show_history()
    return Status.SUCCESS


def builtin_pmon(command, session):
    """Process monitor - show background jobs"""
    session.jobs.show()
    return Status.SUCCESS


BUILTINS = {
    "cd": builtin_cd,
    "exit": builtin_exit,
    "help": builtin_help,
    "history": builtin_history,
    "pmon": builtin_pmon,
    "hdiff": execute_hdiff,
    "mkdir": mkdir_command,
    "rmdir": rmdir_command,
    "countlines": execute_countlines,
    "scoutword": execute_scoutword,
    "psvis": execute_psvis,
}


def is_builtin(name):
    return name in BUILTINS


def dispatch(command, session):
    """
    Run a builtin in-process. Redirects and pipes are ignored.
    Returns: Status, or NOT_BUILTIN if the name is not a builtin
    """
    handler = BUILTINS.get(command.name)
    if handler is None:
        return NOT_BUILTIN
    return handler(command, session)
