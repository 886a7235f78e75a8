import logging
import os
import subprocess
import sys

from mishell.builtin import NOT_BUILTIN, dispatch
from mishell.command import Redirect, Status
from mishell.config import SYSNAME
from mishell.errors import MishellError, PipeWiringError, RedirectionError, SpawnError, reason

logger = logging.getLogger(__name__)

EXIT_NOT_FOUND = 127


def execute(command, session):
    """
    Run one parsed line: builtins in-process, anything else as a pipeline.
    Returns: Status
    """
    if not command.name or command.auto_complete:
        return Status.SUCCESS

    status = dispatch(command, session)
    if status is not NOT_BUILTIN:
        return status
    return execute_pipeline(command, session)


def resolve_executable(name, bin_dir):
    """
    Fixed-prefix lookup: the name is appended to bin_dir as is.
    There is no PATH search and no support for absolute or relative names.
    """
    return f"{bin_dir}/{name}"


def open_redirects(command, opened_files):
    """
    Open the redirect targets of one stage.
    Files are appended to opened_files so the caller can close them.
    Returns: (stdin_f, stdout_f), either may be None
    """
    stdin_f = stdout_f = None
    path = None
    try:
        path = command.redirects[Redirect.IN]
        if path is not None:
            stdin_f = open(os.path.expanduser(path), "rb")
            opened_files.append(stdin_f)

        path = command.redirects[Redirect.OUT]
        if path is not None:
            stdout_f = open(os.path.expanduser(path), "wb")
            opened_files.append(stdout_f)

        # with both > and >> on one stage, >> gets the output
        path = command.redirects[Redirect.APPEND]
        if path is not None:
            stdout_f = open(os.path.expanduser(path), "ab")
            opened_files.append(stdout_f)
    except (OSError, ValueError) as e:
        raise RedirectionError(path, reason(e)) from e

    return stdin_f, stdout_f


def make_pipe():
    try:
        return os.pipe()
    except OSError as e:
        raise PipeWiringError(f"pipe: {e.strerror}") from e


def close_fd(fd):
    # None and subprocess.DEVNULL are not ours to close
    if fd is not None and fd >= 0:
        os.close(fd)


def spawn_stage(command, bin_dir, stdin=None, stdout=None, background=False):
    """
    Start one stage. argv[0] stays the bare name.
    Returns: Popen object
    """
    if not command.name:
        raise SpawnError(command.name, "command not found")

    path = resolve_executable(command.name, bin_dir)
    logger.debug("spawning %s as %s", command.argv, path)
    try:
        return subprocess.Popen(
            command.argv,
            executable=path,
            stdin=stdin,
            stdout=stdout,
            # keep background jobs out of the terminal's Ctrl+C
            preexec_fn=os.setpgrp if background else None
        )
    except FileNotFoundError:
        raise SpawnError(command.name, "command not found")
    except PermissionError:
        raise SpawnError(command.name, "permission denied")
    except (OSError, ValueError) as e:
        # ValueError: arguments holding a NUL byte
        raise SpawnError(command.name, reason(e)) from e


def wait_uninterrupted(proc):
    """Foreground waits are not cancelled by Ctrl+C."""
    while True:
        try:
            return proc.wait()
        except KeyboardInterrupt:
            continue


def abort(procs):
    for p in procs:
        if p.poll() is None:
            p.kill()
    for p in procs:
        p.wait()


def execute_pipeline(command, session):
    """
    Spawn every stage of the chain, wired by pipes and redirects.
    Returns: Status
    """
    stages = command.stages()
    procs, opened_files = [], []
    prev_read = None  # read end waiting for the next stage

    sys.stdout.flush()
    try:
        for idx, stage in enumerate(stages):
            last = idx == len(stages) - 1
            stdin_f, stdout_f = open_redirects(stage, opened_files)

            write_fd = next_read = None
            if not last:
                if stdout_f is None:
                    next_read, write_fd = make_pipe()
                else:
                    # output went to a file, nothing left for the next stage
                    next_read = subprocess.DEVNULL

            try:
                proc = spawn_stage(
                    stage, session.bin_dir,
                    stdin=stdin_f if stdin_f is not None else prev_read,
                    stdout=stdout_f if stdout_f is not None else write_fd,
                    background=command.background
                )
            finally:
                # the child holds its own copies now; ours would keep the pipe open
                close_fd(write_fd)
                close_fd(prev_read)
                prev_read = next_read
            procs.append(proc)

    except MishellError as e:
        print(f"-{SYSNAME}: {e}")
        abort(procs)
        if isinstance(e, SpawnError):
            session.last_status = EXIT_NOT_FOUND
            return Status.NOT_FOUND
        session.last_status = 1
        return Status.UNKNOWN

    finally:
        close_fd(prev_read)
        for f in opened_files:
            f.close()

    if command.background:
        session.jobs.add(procs, command)
        return Status.SUCCESS

    exit_code = wait_uninterrupted(procs[-1])
    # earlier stages may outlive the last one; reap them later
    leftover = [p for p in procs[:-1] if p.poll() is None]
    if leftover:
        session.jobs.add(leftover, command, quiet=True)

    session.last_status = exit_code
    if exit_code < 0:
        print(f"-{SYSNAME}: process terminated by signal {-exit_code}")
    elif exit_code != 0:
        print(f"-{SYSNAME}: process exited with code {exit_code}")
    return Status.SUCCESS
