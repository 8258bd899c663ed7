"""Interactive fuzzy selector for hosts in an SSH config file, and the parsing, ranking and drawing behind it."""

__version__ = "0.2.0"