from dataclasses import dataclass, field
from enum import Enum

from mysh.config import KEYWORDS


class Verb(Enum):
    CHANGE_DIR = 0
    PWD = 1
    HISTORY = 2
    EXIT = 3
    REPLAY = 4
    RUN = 5
    RUN_BACKGROUND = 6
    TERMINATE = 7
    REPEAT = 8
    TERMINATE_ALL = 9

    @property
    def keyword(self):
        return KEYWORDS[self.value]


VERBS = {keyword: Verb(i) for i, keyword in enumerate(KEYWORDS)}

# (min, max) argument count per verb; None means unbounded
ARITY = {
    Verb.CHANGE_DIR: (1, 1),
    Verb.PWD: (0, 0),
    Verb.HISTORY: (0, 1),
    Verb.EXIT: (0, 0),
    Verb.REPLAY: (1, 1),
    Verb.RUN: (1, None),
    Verb.RUN_BACKGROUND: (1, None),
    Verb.TERMINATE: (1, 1),
    Verb.REPEAT: (2, None),
    Verb.TERMINATE_ALL: (0, 0),
}


@dataclass
class Command:
    """
    One input line split into a verb and its arguments.
    Only replay_index changes after construction; the history store
    renumbers it every time it walks the log.
    """
    raw_text: str
    tokens: tuple
    verb_id: Verb = None
    replay_index: int = field(default=None, compare=False)

    @property
    def verb(self):
        return self.tokens[0] if self.tokens else ""

    @property
    def arguments(self):
        return list(self.tokens[1:])

    def has_args(self):
        return len(self.tokens) > 1

    def args_is(self, arg):
        return self.has_args() and self.tokens[1] == arg

    def has_correct_num_args(self):
        if self.verb_id is None:
            return False
        low, high = ARITY[self.verb_id]
        count = len(self.tokens) - 1
        return count >= low and (high is None or count <= high)

    def is_valid(self):
        return self.verb_id is not None and self.has_correct_num_args()


def parse(raw_text):
    """
    Parse one input line into a Command.
    An empty or all-blank line gives a Command with no tokens and no verb,
    which is never valid.
    """
    tokens = tuple(raw_text.split())
    verb_id = VERBS.get(tokens[0]) if tokens else None
    return Command(raw_text=raw_text, tokens=tokens, verb_id=verb_id)


def parse_int(text):
    """Return text as an int, or None if it is not one."""
    try:
        return int(text)
    except ValueError:
        return None
