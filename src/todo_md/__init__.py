"""
todo-md: a task list kept as checkbox lines in a plain-text file.

Main API:
    from todo_md import PlainTaskFile, TodoList, get_dialect

    todos = TodoList.load(PlainTaskFile(Path("todo.md")), get_dialect("md"))
    todos.add(["buy", "milk", "#errand"])
    todos.done([1])

Task ids are positions in the file for one parse only; they are recomputed
whenever the file is read again.
"""

from .dialect import (
    CheckboxStyle,
    Dialect,
    LOGSEQ,
    MARKDOWN,
    get_dialect,
)
from .errors import (
    InvalidDueDateError,
    InvalidTaskInputError,
    TaskFileNotFoundError,
    TaskFileWriteError,
    TodoError,
)
from .formatting import format_task, render_task
from .models import Decision, Task
from .parser import parse_line, parse_lines
from .storage import PlainTaskFile, TaskFileInterface
from .store import TodoList

__all__ = [
    # Models
    'Task',
    'Decision',
    # Dialects
    'CheckboxStyle',
    'Dialect',
    'MARKDOWN',
    'LOGSEQ',
    'get_dialect',
    # Parsing / formatting
    'parse_lines',
    'parse_line',
    'format_task',
    'render_task',
    # File access
    'TaskFileInterface',
    'PlainTaskFile',
    # Store
    'TodoList',
    # Errors
    'TodoError',
    'InvalidDueDateError',
    'InvalidTaskInputError',
    'TaskFileNotFoundError',
    'TaskFileWriteError',
]
