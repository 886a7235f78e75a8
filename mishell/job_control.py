import logging

import psutil

logger = logging.getLogger(__name__)


class Job:
    """The processes of one background line, keyed by its last stage."""

    def __init__(self, procs, command, quiet=False):
        self.procs = procs
        self.command = command
        self.quiet = quiet
        self.pid = procs[-1].pid

    def done(self):
        # poll() also reaps the zombie
        return all(p.poll() is not None for p in self.procs)

    def __str__(self):
        return str(self.command)


class JobTable:
    """Background jobs of one session: pid -> Job"""

    def __init__(self):
        self.jobs = {}

    def __len__(self):
        return len(self.jobs)

    def __contains__(self, pid):
        return pid in self.jobs

    def add(self, procs, command, quiet=False):
        """Register processes; quiet jobs are stages a foreground line left behind."""
        job = Job(procs, command, quiet)
        self.jobs[job.pid] = job
        if not quiet:
            print(f"[{job.pid}] started in background: {job}")
        return job

    def reap(self):
        """
        Collect finished jobs without blocking.
        Returns: list of pids that finished
        """
        finished = [pid for pid, job in self.jobs.items() if job.done()]
        for pid in finished:
            job = self.jobs.pop(pid)
            logger.debug("reaped job %d, exit code %s", pid, job.procs[-1].returncode)
            if not job.quiet:
                print(f"[{pid}] finished: {job}")
        return finished

    def show(self):
        """Print background jobs with their process state"""
        if not self.jobs:
            print("No background jobs.")
            return

        print(f"{'PID':<8} {'Command'}")
        print("-" * 40)
        for pid, job in self.jobs.items():
            try:
                if psutil.pid_exists(pid):
                    status = psutil.Process(pid).status()
                    print(f"{pid:<8} {job}  [{status}]")
                else:
                    print(f"{pid:<8} {job}  [terminated]")
            except psutil.Error:
                print(f"{pid:<8} {job}  [unknown]")

    def cleanup(self):
        """Terminate jobs still running when the shell exits"""
        for pid, job in list(self.jobs.items()):
            running = [p for p in job.procs if p.poll() is None]
            for p in running:
                p.terminate()
            for p in running:
                p.wait()
            if running:
                print(f"Terminated background job [{pid}]")
            del self.jobs[pid]
