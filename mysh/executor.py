import os
import signal
import subprocess

from mysh.config import OUT_INDENT


def program_path(args, currentdir):
    """
    A lone program name is looked up in the tracked directory.
    With arguments the name is passed through unchanged.
    """
    if len(args) == 1:
        return os.path.join(currentdir, args[0])
    return args[0]


def spawn(args, currentdir, background=False):
    """
    Start args as a child process.
    Returns: Popen object or None
    """
    args = list(args)
    try:
        if background:
            # own process group so Ctrl+C at the prompt does not reach it
            return subprocess.Popen(
                args,
                executable=program_path(args, currentdir),
                preexec_fn=os.setpgrp
            )
        return subprocess.Popen(args, executable=program_path(args, currentdir))
    except (FileNotFoundError, PermissionError, NotADirectoryError, ValueError):
        print(f"{OUT_INDENT}Could not open: {args[0]}")
        return None
    except OSError as e:
        print(f"{OUT_INDENT}Failed forking child.. ({e})")
        return None


def run_foreground(args, currentdir):
    """
    Run args and block until the child exits.
    Returns: exit code, or None if it never started
    """
    p = spawn(args, currentdir)
    if p is None:
        return None

    while True:
        try:
            return p.wait()
        except KeyboardInterrupt:
            # the child got the SIGINT too; keep waiting for it
            print()


def run_background(args, currentdir, registry):
    """
    Start args without waiting and register it.
    Returns: pid, or None if it never started
    """
    registry.reap()
    p = spawn(args, currentdir, background=True)
    if p is None:
        return None
    registry.add(p)
    return p.pid


def send_term(pid):
    # 0 and negative ids address process groups, including our own
    if pid <= 0:
        return False
    try:
        os.kill(pid, signal.SIGTERM)
        return True
    except (ProcessLookupError, PermissionError):
        return False
    except (OverflowError, ValueError):
        # not a pid the OS could ever hand out
        return False


def terminate(pid, registry):
    """
    SIGTERM pid. Unregistered pids are still signalled but reported.
    Returns: True if pid was a registered background job
    """
    registry.reap(pid)
    proc = registry.remove(pid)
    if proc is None:
        send_term(pid)
        print(f"{OUT_INDENT}Could not terminate PID: {pid}")
        return False

    # a no-op once the child has been reaped, so a reused pid is never hit
    proc.send_signal(signal.SIGTERM)
    registry.retire(proc)
    return True


def terminate_all(registry):
    """SIGTERM every registered job and empty the registry"""
    procs = registry.snapshot_and_clear()
    for proc in procs:
        proc.send_signal(signal.SIGTERM)
        registry.retire(proc)

    pids = [proc.pid for proc in procs]
    listed = "".join(f" {pid}" for pid in pids)
    print(f"{OUT_INDENT}Exterminating {len(pids)} processes:{listed}")
    return pids
