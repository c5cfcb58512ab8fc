import os

import psutil

from mysh.config import OUT_INDENT


class ProcessRegistry:
    """
    Background children started by this shell: pid -> Popen.

    A pid stays registered from a successful background spawn until it is
    terminated through the shell. Children that exit on their own are reaped
    but keep their entry. Terminated children move to a retired list that
    is polled until their exit status has been collected.
    """

    def __init__(self):
        self._jobs = {}
        self._retired = []

    def __contains__(self, pid):
        return pid in self._jobs

    def __len__(self):
        return len(self._jobs)

    def pids(self):
        return list(self._jobs)

    def add(self, proc):
        self._jobs[proc.pid] = proc
        print(f"{OUT_INDENT}PID: {proc.pid}")

    def remove(self, pid):
        """Drop pid from the registry. Returns its Popen, or None if it was not registered."""
        return self._jobs.pop(pid, None)

    def snapshot_and_clear(self):
        procs = list(self._jobs.values())
        self._jobs.clear()
        return procs

    def retire(self, proc):
        """Keep a signalled child around until it has been reaped"""
        if proc.poll() is None:
            self._retired.append(proc)

    def reap(self, pid=None):
        """Collect the exit status of finished children without blocking"""
        if pid is None:
            for proc in self._jobs.values():
                proc.poll()
            self._retired = [proc for proc in self._retired if proc.poll() is None]
            return
        proc = self._jobs.get(pid)
        if proc is not None:
            proc.poll()
            return
        if pid <= 0:
            return
        try:
            os.waitpid(pid, os.WNOHANG)
        except (ChildProcessError, OverflowError):
            # not our child
            pass

    def still_running(self):
        """Registered pids that are alive and not zombies"""
        alive = []
        for pid in self._jobs:
            try:
                if psutil.Process(pid).status() != psutil.STATUS_ZOMBIE:
                    alive.append(pid)
            except (psutil.NoSuchProcess, psutil.AccessDenied):
                continue
        return alive

    def report_leftovers(self):
        """Print background jobs that will keep running after the shell exits"""
        alive = self.still_running()
        if alive:
            pids = " ".join(str(pid) for pid in alive)
            print(f"{OUT_INDENT}Leaving {len(alive)} background processes running: {pids}")
