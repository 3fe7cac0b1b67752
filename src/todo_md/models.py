"""
Core data models.

A Task is rebuilt from the task file on every run. Its id is only its
position among the task lines of that parse; it is not persisted and is not
a valid reference once the file has been edited.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional


@dataclass
class Task:
    """A single task line parsed from the task file."""

    title: str
    id: int = 0
    source_line: int = 0  # 1-based line number in the file
    completed: bool = False
    due_date: Optional[date] = None
    tags: List[str] = field(default_factory=list)
    mentions: List[str] = field(default_factory=list)

    def same_content(self, other: Task) -> bool:
        """True if both tasks would serialize to the same line."""
        return (
            self.completed == other.completed
            and self.title == other.title
            and self.due_date == other.due_date
            and self.tags == other.tags
            and self.mentions == other.mentions
        )


class Decision(str, Enum):
    """Answer given for each task during a remove."""

    DELETE = "delete"
    SKIP = "skip"
    DELETE_ALL = "delete-all"  # delete this and every remaining match
