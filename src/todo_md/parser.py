"""
Parser for task files.

Main API:
- parse_lines(lines, dialect) -> List[Task]
- parse_line(line, dialect) -> Optional[Task]

Only lines that match the dialect's task pattern become tasks. Every other
line is ignored here and left untouched in the file.

Per task line, in order:
1. completion: done pattern decides; the matching marker is cut off
2. due date: first lone ISO date, replaced by a single space
3. tags (#word) and mentions (@word), in order of appearance
4. whatever remains, stripped, is the title
"""

import re
from datetime import date, datetime
from typing import Iterable, List, Optional, Tuple

from .dialect import Dialect
from .errors import InvalidDueDateError
from .models import Task

TAG_PATTERN = re.compile(r"#\w+")
MENTION_PATTERN = re.compile(r"@\w+")


def extract_tokens(text: str, pattern: re.Pattern) -> Tuple[str, List[str]]:
    """
    Pull every match of pattern out of text.

    Returns:
        Tuple of (text with matches removed, matches in order)
    """
    found = pattern.findall(text)
    return pattern.sub("", text), found


def extract_due_date(
    text: str, dialect: Dialect, line_number: Optional[int] = None
) -> Tuple[str, Optional[date]]:
    """
    Find and remove the first due date in text.

    Raises:
        InvalidDueDateError: the token looks like a date but isn't one
            (e.g. "2024-13-45")

    Returns:
        Tuple of (remaining text, date or None)
    """
    match = dialect.date_pattern.search(text)
    if not match:
        return text, None

    raw = match.group(1)
    try:
        due = datetime.strptime(raw, "%Y-%m-%d").date()
    except ValueError:
        raise InvalidDueDateError(raw, line_number) from None

    return text[:match.start()] + " " + text[match.end():], due


def parse_line(line: str, dialect: Dialect, line_number: int = 0) -> Optional[Task]:
    """
    Parse a single line.

    Args:
        line: Raw file line
        dialect: Checkbox dialect
        line_number: 1-based line number, stored as source_line

    Returns:
        Task (with id 0) or None if the line is not a task
    """
    if not dialect.is_task(line):
        return None

    completed = dialect.is_done(line)
    marker = dialect.done_pattern if completed else dialect.task_pattern
    text = marker.sub("", line, count=1)

    text, due = extract_due_date(text, dialect, line_number or None)
    text, tags = extract_tokens(text, TAG_PATTERN)
    text, mentions = extract_tokens(text, MENTION_PATTERN)

    return Task(
        title=text.strip(),
        source_line=line_number,
        completed=completed,
        due_date=due,
        tags=tags,
        mentions=mentions,
    )


def parse_lines(lines: Iterable[str], dialect: Dialect) -> List[Task]:
    """
    Parse file lines into tasks.

    Ids are assigned 1..n in file order and source_line is the 1-based line
    index, so parsing the same content twice gives identical results.

    Raises:
        InvalidDueDateError: any task line carries an impossible date
    """
    tasks: List[Task] = []
    for line_number, line in enumerate(lines, start=1):
        task = parse_line(line, dialect, line_number)
        if task is None:
            continue
        task.id = len(tasks) + 1
        tasks.append(task)
    return tasks
