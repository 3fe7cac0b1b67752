"""
Line-addressed access to the task file.

Provides an abstract interface for reading and rewriting the task file, with
a plain-file implementation. Every write the task store performs goes through
this interface, so locking or transactional backends can be added without
touching the parser.

PlainTaskFile keeps no state between calls: each mutation re-reads the file,
edits the lines in memory and writes the whole file back. Nothing protects
against another process editing the file between that read and write.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, List

from .errors import TaskFileNotFoundError, TaskFileWriteError

log = logging.getLogger(__name__)


def split_lines(content: str) -> List[str]:
    """
    Split file content into lines.

    Splits on "\\n" only and drops a trailing "\\r" per line; a final newline
    does not produce an extra empty line.
    """
    if not content:
        return []
    lines = content.split("\n")
    if content.endswith("\n"):
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def join_lines(lines: Iterable[str]) -> str:
    """Join lines back into file content, one "\\n" after each line."""
    return "".join(f"{line}\n" for line in lines)


class TaskFileInterface(ABC):
    """
    Abstract interface for the backing task file.

    Line numbers are 1-based throughout.
    """

    @abstractmethod
    def read_lines(self) -> List[str]:
        """
        Read every line of the file.

        Raises:
            TaskFileNotFoundError: the file can't be read
        """
        pass

    @abstractmethod
    def append_line(self, content: str) -> int:
        """
        Append one line to the end of the file without rewriting it.

        Returns:
            Line number of the appended line
        """
        pass

    @abstractmethod
    def replace_line(self, line_number: int, content: str) -> None:
        """
        Replace the content of one line, leaving every other line untouched.

        Args:
            line_number: 1-based line to replace
            content: New line content (no newline)
        """
        pass

    @abstractmethod
    def remove_lines(self, line_numbers: Iterable[int]) -> None:
        """
        Delete the given lines, keeping the order of the rest.

        Args:
            line_numbers: 1-based lines to delete
        """
        pass


class PlainTaskFile(TaskFileInterface):
    """Task file on the local filesystem, UTF-8, rewritten whole on change."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"PlainTaskFile({str(self.path)!r})"

    def _read(self) -> str:
        try:
            return self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise TaskFileNotFoundError(self.path) from e

    def _write(self, lines: List[str]) -> None:
        try:
            self.path.write_text(join_lines(lines), encoding="utf-8")
        except OSError as e:
            raise TaskFileWriteError(self.path, e) from e
        log.debug("Rewrote %s (%d lines)", self.path, len(lines))

    def read_lines(self) -> List[str]:
        return split_lines(self._read())

    def append_line(self, content: str) -> int:
        existing = self._read()
        text = f"{content}\n"
        if existing and not existing.endswith("\n"):
            text = "\n" + text
        try:
            with self.path.open("a", encoding="utf-8") as f:
                f.write(text)
        except OSError as e:
            raise TaskFileWriteError(self.path, e) from e
        line_number = len(split_lines(existing)) + 1
        log.debug("Appended line %d to %s", line_number, self.path)
        return line_number

    def replace_line(self, line_number: int, content: str) -> None:
        if line_number < 1:
            raise ValueError(f"line numbers start at 1, got {line_number}")

        lines = self.read_lines()
        if line_number > len(lines):
            log.warning(
                "Line %d is past the end of %s (%d lines); nothing replaced",
                line_number, self.path, len(lines),
            )
        else:
            lines[line_number - 1] = content
        self._write(lines)

    def remove_lines(self, line_numbers: Iterable[int]) -> None:
        to_remove = set(line_numbers)
        if any(nr < 1 for nr in to_remove):
            raise ValueError(f"line numbers start at 1, got {sorted(to_remove)}")

        lines = self.read_lines()
        kept = [line for nr, line in enumerate(lines, start=1) if nr not in to_remove]
        self._write(kept)
