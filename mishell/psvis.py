"""psvis: show the process tree of a pid through a kernel helper module.

The tree walk happens inside the helper; the shell only loads it with the
target pid, then relays the kernel log where the helper writes its output.
Whether the helper is loaded is tracked on the session.
"""
import logging
import subprocess

from mishell import config
from mishell.command import Status

logger = logging.getLogger(__name__)


def run_privileged(args):
    """
    Run a helper command through sudo and wait for it.
    Returns: CompletedProcess
    """
    logger.debug("running %s %s", config.SUDO, " ".join(args))
    return subprocess.run([config.SUDO] + args, capture_output=True, text=True)


def relay(result):
    if result.stdout:
        print(result.stdout, end="")
    if result.stderr:
        print(result.stderr, end="")


def clear_kernel_log():
    relay(run_privileged(["dmesg", "-C"]))


def print_kernel_log():
    relay(run_privileged(["dmesg"]))


def load_module(session, pid):
    if session.kernel_loaded:
        unload_module(session)
    result = run_privileged(["insmod", config.PSVIS_MODULE, f"PID={pid}"])
    relay(result)
    session.kernel_loaded = result.returncode == 0
    return session.kernel_loaded


def unload_module(session):
    relay(run_privileged(["rmmod", config.PSVIS_MODULE]))
    session.kernel_loaded = False


def execute_psvis(command, session):
    """psvis <pid>"""
    argv = command.argv
    if len(argv) != 2:
        print("Invalid argument number!")
        return Status.UNKNOWN

    try:
        pid = int(argv[1])
    except ValueError:
        pid = 0
    if pid <= 0:
        print("Invalid parameter!")
        return Status.UNKNOWN

    try:
        clear_kernel_log()
        if not load_module(session, pid):
            print(f"psvis: could not load {config.PSVIS_MODULE}")
            return Status.UNKNOWN
        print_kernel_log()
    except OSError as e:
        print(f"psvis: {config.SUDO}: {e.strerror}")
        return Status.UNKNOWN
    return Status.SUCCESS
