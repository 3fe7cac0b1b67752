"""
Checkbox dialects.

A dialect bundles the patterns that recognise a task line and tell whether
it is done, plus the literal markers written back for open and done tasks.

Supported styles:
- md:     "- [ ] open"  /  "- [x] done"  (any non-space inside the brackets is done)
- logseq: "- TODO open" /  "- DONE done"
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Pattern, Union

log = logging.getLogger(__name__)

# Shared by every dialect: a lone ISO date, first occurrence only
DATE_PATTERN = re.compile(r"(?:^|\s)([0-9]{4}-[0-9]{2}-[0-9]{2})(?:\s|$)")


class CheckboxStyle(str, Enum):
    MARKDOWN = "md"
    LOGSEQ = "logseq"


@dataclass(frozen=True)
class Dialect:
    """Recognition patterns and output markers for one checkbox style."""

    style: CheckboxStyle
    task_pattern: Pattern[str]
    done_pattern: Pattern[str]
    date_pattern: Pattern[str]
    open_marker: str
    done_marker: str

    def is_task(self, line: str) -> bool:
        return self.task_pattern.search(line) is not None

    def is_done(self, line: str) -> bool:
        return self.done_pattern.search(line) is not None

    def marker(self, completed: bool) -> str:
        return self.done_marker if completed else self.open_marker


MARKDOWN = Dialect(
    style=CheckboxStyle.MARKDOWN,
    task_pattern=re.compile(r"^\s*-\s*\[[ xX]\]"),
    done_pattern=re.compile(r"^\s*-\s*\[[^\s]\]"),
    date_pattern=DATE_PATTERN,
    open_marker="- [ ]",
    done_marker="- [x]",
)

LOGSEQ = Dialect(
    style=CheckboxStyle.LOGSEQ,
    task_pattern=re.compile(r"^\s*-\s*[A-Z]{4}"),
    done_pattern=re.compile(r"^\s*-\s*DONE(?:\s|$)"),
    date_pattern=DATE_PATTERN,
    open_marker="- TODO",
    done_marker="- DONE",
)

_DIALECTS = {
    CheckboxStyle.MARKDOWN: MARKDOWN,
    CheckboxStyle.LOGSEQ: LOGSEQ,
}


def get_dialect(style: Union[str, CheckboxStyle]) -> Dialect:
    """
    Resolve a configured checkbox style to its dialect.

    Unknown values log a warning and fall back to Markdown.

    Args:
        style: "md", "logseq" or a CheckboxStyle

    Returns:
        The matching Dialect
    """
    try:
        return _DIALECTS[CheckboxStyle(style)]
    except ValueError:
        log.warning(
            "Be careful: your config contains an invalid format %r! Defaulting to \"md\".",
            style,
        )
        return MARKDOWN
