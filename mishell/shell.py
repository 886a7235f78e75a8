import argparse
import logging
import os
import socket
import sys

from mishell import config
from mishell.command import Status
from mishell.completion import init_readline, show_completions
from mishell.executor import execute
from mishell.history import load_history, save_history
from mishell.job_control import JobTable
from mishell.parser import parse_command
from mishell.psvis import unload_module

logger = logging.getLogger(__name__)


class Session:
    """Per-shell state handed to the executor and the builtins."""

    def __init__(self, bin_dir=config.BIN_DIR, debug=False):
        self.bin_dir = bin_dir
        self.debug = debug
        self.jobs = JobTable()
        self.kernel_loaded = False
        self.last_status = 0


def prompt():
    """Generate shell prompt"""
    user = os.getenv("USER") or os.getenv("USERNAME") or "user"
    return f"{user}@{socket.gethostname()}:{os.getcwd()} {config.SYSNAME}$ "


def process_line(line, session):
    """
    Parse and run one input line.
    Returns: Status
    """
    command = parse_command(line)
    if session.debug:
        print(command.describe())

    if command.auto_complete:
        show_completions(command, session)
        return Status.SUCCESS
    return execute(command, session)


def main_loop(session):
    """Main shell loop"""
    init_readline(session)
    load_history()

    try:
        while True:
            session.jobs.reap()
            try:
                line = input(prompt())
            except EOFError:
                print()
                break
            except KeyboardInterrupt:
                print()
                continue

            status = process_line(line, session)
            logger.debug("status %s, last exit code %d", status.name, session.last_status)
            if status == Status.EXIT:
                break
    finally:
        save_history()
        if session.kernel_loaded:
            unload_module(session)
        session.jobs.cleanup()

    return session.last_status


def parse_args(args=None):
    parser = argparse.ArgumentParser(
        prog=config.SYSNAME,
        description="mishell - a small command interpreter with pipes, redirects and background jobs"
    )
    parser.add_argument(
        "--bin-dir",
        metavar="DIR",
        default=config.BIN_DIR,
        help=f"directory executables are looked up in (default: {config.BIN_DIR})"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="log internals and dump every parsed command"
    )
    return parser.parse_args(args)


def main(args=None):
    args = parse_args(args)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(name)s: %(message)s"
    )
    session = Session(bin_dir=args.bin_dir, debug=args.debug)
    sys.exit(main_loop(session))
