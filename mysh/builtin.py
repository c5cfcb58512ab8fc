import os

from mysh.config import KEYWORDS, OUT_INDENT


def intro_message():
    print("\t\t===== Welcome to my shell =====")
    print('Type "help" to list valid commands\n')


def builtin_help():
    """Print the valid commands"""
    print()
    print(f"{OUT_INDENT}The following are valid commands:")
    for keyword in KEYWORDS:
        print(f"{OUT_INDENT}{keyword}")
    print()


def resolve_dir(path, currentdir):
    """
    Paths starting with "/" are absolute and "." paths are relative to the
    tracked directory. Anything else names a subdirectory of it.
    """
    if path.startswith("/"):
        target = path
    else:
        target = os.path.join(currentdir, path)
    target = os.path.normpath(target)
    return target.rstrip(os.sep) + os.sep


def builtin_movetodir(path, currentdir):
    """
    Change the tracked directory.
    Returns: the new directory, or None if path cannot be opened
    """
    target = resolve_dir(path, currentdir)
    try:
        with os.scandir(target):
            pass
    except (OSError, ValueError):
        print(f"{OUT_INDENT}Directory {path}: not found")
        return None
    return target


def builtin_whereami(currentdir):
    print(currentdir)
