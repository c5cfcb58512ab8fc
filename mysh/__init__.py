"""mysh - a small shell with a fixed set of built-in verbs."""

__version__ = "1.0.0"
