"""
Rendering of tasks.

format_task is the single source of truth for how a task is written back
to the task file; parse_line(format_task(task)) gives back a task with the
same content. render_task is the coloured one-line form used for terminal
output.
"""

import os
import sys
from typing import List

from colorama import Fore, Style

from .dialect import Dialect
from .models import Task


def format_task(task: Task, dialect: Dialect) -> str:
    """
    Format a task as a task-file line.

    Layout: <marker> <title> <due date> <tags...> <mentions...>, empty parts
    omitted, single spaces between parts.

    A date glued to a tag, as in "foo 2024-01-01#tag", is not a standalone
    token, so the parser leaves it in the title. Formatting moves the tag to
    the end, which frees the date: the reparsed line has title "foo" and a
    due date. Such lines are only stable from the second rewrite on.

    Args:
        task: Task to format
        dialect: Dialect providing the open/done marker

    Returns:
        Line without trailing newline
    """
    parts: List[str] = [dialect.marker(task.completed), task.title]
    if task.due_date:
        parts.append(task.due_date.isoformat())
    parts.extend(task.tags)
    parts.extend(task.mentions)
    return " ".join(part for part in parts if part)


def use_color(stream=None) -> bool:
    """Colour only real terminals, and never when NO_COLOR is set."""
    if os.environ.get("NO_COLOR"):
        return False
    stream = stream or sys.stdout
    return hasattr(stream, "isatty") and stream.isatty()


def _paint(text: str, code: str, color: bool) -> str:
    return f"{code}{text}{Style.RESET_ALL}" if color else text


def render_task(task: Task, prefix: str = "", color: bool = False) -> str:
    """
    Format a task for display.

    Example: "done: [x]  2 write report | 2024-01-01 | #work | @alex"

    Args:
        task: Task to render
        prefix: Label prepended as "<prefix>: ", skipped when empty
        color: Emit ANSI colours (date red, tags green, mentions cyan,
            completed tasks dimmed)
    """
    checkbox = "[x]" if task.completed else "[ ]"
    line = f"{checkbox}  {task.id} {task.title}"

    if task.due_date:
        line += " | " + _paint(task.due_date.isoformat(), Fore.RED, color)
    if task.tags:
        line += " | " + _paint(" ".join(task.tags), Fore.GREEN, color)
    if task.mentions:
        line += " | " + _paint(" ".join(task.mentions), Fore.CYAN, color)

    if task.completed and color:
        # RESET_ALL inside the line drops DIM, so re-apply it after each reset
        line = Style.DIM + line.replace(Style.RESET_ALL, Style.RESET_ALL + Style.DIM) + Style.RESET_ALL

    if prefix:
        line = f"{prefix}: {line}"
    return line
