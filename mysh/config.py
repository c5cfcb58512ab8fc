import os

# History is kept in the directory the shell was launched from
HISTORY_FILE = os.getenv("MYSH_HISTORY", "mysh_history.txt")
HISTORY_SEPARATOR = ","

PROMPT = os.getenv("MYSH_PROMPT", "# ")
OUT_INDENT = "  "

# Longest input line accepted, including the terminator
BUFFER_MAX = 1024

KEYWORDS = (
    "movetodir",
    "whereami",
    "history",
    "byebye",
    "replay",
    "start",
    "background",
    "dalek",
    "repeat",
    "dalekall",
)
