import os

from mysh.builtin import builtin_help, builtin_movetodir, builtin_whereami, intro_message
from mysh.config import BUFFER_MAX, HISTORY_FILE, OUT_INDENT, PROMPT
from mysh.executor import run_background, run_foreground, terminate, terminate_all
from mysh.history import HistoryStore, add_to_readline, init_readline
from mysh.job_control import ProcessRegistry
from mysh.parser import Verb, parse, parse_int


class ShellSession:
    """
    Everything one shell instance owns: the tracked directory, the
    history, the background jobs and the run flag.
    """

    def __init__(self, currentdir=None, history_file=None):
        if currentdir is None:
            currentdir = os.getcwd()
        if history_file is None:
            history_file = HISTORY_FILE
        self.currentdir = currentdir.rstrip(os.sep) + os.sep
        self.history = HistoryStore(os.path.abspath(history_file))
        self.registry = ProcessRegistry()
        self.running = True

    def start(self):
        self.history.load()

    def shutdown(self):
        """Flush history. Background jobs are left running."""
        self.history.save()
        self.registry.report_leftovers()


def repeat_command(cmd):
    """
    Build the background command that `repeat n ...` launches.
    A leading verb keyword after the count is replaced by `background`.
    """
    words = cmd.arguments[1:]
    if parse(words[0]).verb_id is not None:
        words = words[1:]
    return parse(" ".join([Verb.RUN_BACKGROUND.keyword] + words))


def execute_command(session, cmd):
    """
    Run a parsed command against the session.
    Returns: True if the command was valid and carried out
    """
    if not cmd.is_valid():
        return False

    verb, args = cmd.verb_id, cmd.arguments

    if verb is Verb.CHANGE_DIR:
        newdir = builtin_movetodir(args[0], session.currentdir)
        if newdir is not None:
            session.currentdir = newdir

    elif verb is Verb.PWD:
        builtin_whereami(session.currentdir)

    elif verb is Verb.HISTORY:
        if not args:
            session.history.show()
        elif cmd.args_is("-c"):
            session.history.clear()
        else:
            return False

    elif verb is Verb.EXIT:
        session.running = False

    elif verb is Verb.REPLAY:
        index = parse_int(args[0])
        if index is None:
            return False
        target = session.history.find_by_replay_index(index, requester=cmd)
        if target is None:
            return False
        return execute_command(session, target)

    elif verb is Verb.RUN:
        run_foreground(args, session.currentdir)

    elif verb is Verb.RUN_BACKGROUND:
        run_background(args, session.currentdir, session.registry)

    elif verb is Verb.TERMINATE:
        pid = parse_int(args[0])
        if pid is None:
            return False
        terminate(pid, session.registry)

    elif verb is Verb.REPEAT:
        if repeat(session, cmd) is None:
            return False

    elif verb is Verb.TERMINATE_ALL:
        terminate_all(session.registry)

    return True


def repeat(session, cmd):
    """
    Launch the repeated background command n times.
    Returns: the new pids, or None if nothing could be launched
    """
    times = parse_int(cmd.arguments[0])
    if times is None or times < 0:
        return None

    bg = repeat_command(cmd)
    if not bg.is_valid():
        return None

    pids = []
    for _ in range(times):
        pid = run_background(bg.arguments, session.currentdir, session.registry)
        if pid is not None:
            pids.append(pid)
    return pids


def should_record(cmd):
    """byebye and history -c are never stored"""
    if cmd.verb_id is Verb.EXIT:
        return False
    if cmd.verb_id is Verb.HISTORY and cmd.args_is("-c"):
        return False
    return True


def run_line(session, line):
    """
    One read-eval step: help, dispatch, then the history decision.
    Returns: False once the shell should stop
    """
    session.registry.reap()

    if line == "help":
        builtin_help()
        return session.running

    cmd = parse(line)
    executed = execute_command(session, cmd)

    if executed:
        if should_record(cmd):
            session.history.append(cmd)
            add_to_readline(line)
    else:
        print(f"{OUT_INDENT}Invalid command: {line}")

    return session.running


def get_input():
    line = input(PROMPT)
    return line[:BUFFER_MAX - 1]


def main_loop():
    """Main shell loop"""
    session = ShellSession()

    intro_message()
    session.start()
    init_readline(session.history)

    try:
        while session.running:
            try:
                line = get_input()
            except EOFError:
                print()
                break
            except KeyboardInterrupt:
                print()
                continue

            if not line.strip():
                continue

            run_line(session, line)
    finally:
        session.shutdown()


if __name__ == "__main__":
    main_loop()
