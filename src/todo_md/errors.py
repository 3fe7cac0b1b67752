"""
Exceptions raised by the todo-md core.

Everything derives from TodoError so the CLI can report any core failure
with a single handler. The concrete classes also inherit the matching
built-in exception, so callers that only know about ValueError or OSError
still catch them.
"""

from pathlib import Path
from typing import Optional


class TodoError(Exception):
    """Base class for todo-md errors."""


class InvalidDueDateError(TodoError, ValueError):
    """A date token matched the date pattern but is not a calendar date."""

    def __init__(self, text: str, line_number: Optional[int] = None):
        self.text = text
        self.line_number = line_number
        where = f" on line {line_number}" if line_number else ""
        super().__init__(f"invalid due date '{text}'{where}")


class InvalidTaskInputError(TodoError, ValueError):
    """Input given to add could not be turned into a task line."""


class TaskFileNotFoundError(TodoError, FileNotFoundError):
    """The task file could not be read."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"task file not found or unreadable: {path}")


class TaskFileWriteError(TodoError, OSError):
    """Writing the task file failed; the file may not match the in-memory list."""

    def __init__(self, path: Path, cause: OSError):
        self.path = path
        self.cause = cause
        super().__init__(f"could not write {path}: {cause}")
