"""Filtering, searching and highlighting of lines in plain-text log files."""

__version__ = "0.1.0"