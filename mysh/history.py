import os
import sys
from collections import deque

from mysh.config import HISTORY_FILE, HISTORY_SEPARATOR, OUT_INDENT
from mysh.parser import Verb, parse

try:
    import readline
except ImportError:
    readline = None


def init_readline(history):
    """Let the arrow keys walk the loaded history at the prompt"""
    if readline is None or not sys.stdin.isatty():
        return
    try:
        readline.clear_history()
        for raw_text in history.entries():
            readline.add_history(raw_text)
        readline.parse_and_bind("set editing-mode emacs")
    except Exception as e:
        print(f"Warning: Could not configure readline: {e}", file=sys.stderr)


def add_to_readline(line):
    if readline is not None:
        readline.add_history(line)


class HistoryStore:
    """
    Log of accepted commands, newest first.

    Replay indexes are positions in oldest-to-newest order and are
    recomputed on every listing or lookup, so they shift whenever the
    log changes.
    """

    def __init__(self, filename=HISTORY_FILE):
        self.filename = filename
        self._entries = deque()

    def __len__(self):
        return len(self._entries)

    def append(self, cmd):
        self._entries.appendleft(cmd)

    def _numbered(self):
        for index, cmd in enumerate(reversed(self._entries)):
            cmd.replay_index = index
            yield index, cmd

    def entries(self):
        """Raw texts, oldest first"""
        return [cmd.raw_text for cmd in reversed(self._entries)]

    def list_for_display(self):
        return [(index, cmd.raw_text) for index, cmd in self._numbered()]

    def show(self):
        """Print the log with freshly assigned replay indexes"""
        listing = self.list_for_display()
        if not listing:
            return
        print(f"{OUT_INDENT}History:")
        for index, raw_text in listing:
            print(f"{OUT_INDENT}{index}: {raw_text}")

    def find_by_replay_index(self, index, requester=None):
        """
        Return the command at replay position `index`, or None.
        A stored replay command is refused so replays cannot chain.
        """
        for position, cmd in self._numbered():
            if position != index:
                continue
            if cmd.verb_id is Verb.REPLAY:
                name = requester.verb if requester is not None else Verb.REPLAY.keyword
                print(f"{OUT_INDENT}Invalid command: {name} {cmd.raw_text}")
                return None
            return cmd
        return None

    def clear(self):
        """Empty the log and delete the history file"""
        self._entries.clear()
        try:
            os.remove(self.filename)
        except FileNotFoundError:
            pass
        except OSError as e:
            print(f"Warning: Could not delete history: {e}", file=sys.stderr)
        print(f"{OUT_INDENT}History Cleared")

    def load(self):
        """Read the history file if there is one; a missing file means no history"""
        if not os.path.exists(self.filename):
            return
        try:
            # undecodable bytes become U+FFFD rather than failing the load
            with open(self.filename, encoding="utf-8", errors="replace") as f:
                lines = f.read().splitlines()
        except OSError as e:
            print(f"Warning: Could not load history: {e}", file=sys.stderr)
            return

        for line in lines:
            for raw_text in line.split(HISTORY_SEPARATOR):
                # Entries only need to tokenize, not to be valid commands
                if not raw_text.split():
                    continue
                self.append(parse(raw_text))

    def save(self):
        """Write the log oldest first on one line; an empty log leaves the file alone"""
        if not self._entries:
            return
        try:
            with open(self.filename, "w", encoding="utf-8", errors="replace") as f:
                f.write(HISTORY_SEPARATOR.join(self.entries()) + "\n")
        except OSError as e:
            print(f"Warning: Could not save history: {e}", file=sys.stderr)
