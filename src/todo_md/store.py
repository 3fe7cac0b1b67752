"""
In-memory task list for a single command.

TodoList parses the task file once, then applies add/done/uncheck/remove
by writing single lines through the task file interface. Ids are only
valid for the parse they came from; remove reloads the list, so ids are
renumbered afterwards.
"""

import logging
from typing import Callable, Iterable, List, Optional, Tuple

from .dialect import Dialect
from .errors import InvalidTaskInputError
from .formatting import format_task
from .models import Decision, Task
from .parser import parse_line, parse_lines
from .storage import TaskFileInterface

log = logging.getLogger(__name__)

DecideFn = Callable[[Task], Decision]


class TodoList:
    """Parsed tasks plus the file they came from."""

    def __init__(
        self,
        task_file: TaskFileInterface,
        dialect: Dialect,
        tasks: Optional[List[Task]] = None,
    ):
        self.task_file = task_file
        self.dialect = dialect
        self.tasks: List[Task] = tasks if tasks is not None else []

    @classmethod
    def load(cls, task_file: TaskFileInterface, dialect: Dialect) -> "TodoList":
        """Read and parse the task file."""
        todos = cls(task_file, dialect)
        todos.reload()
        return todos

    def reload(self) -> None:
        """Re-parse the file; ids and source lines are recomputed."""
        self.tasks = parse_lines(self.task_file.read_lines(), self.dialect)
        log.debug("Loaded %d task(s) from %r", len(self.tasks), self.task_file)

    def list(self) -> List[Task]:
        """Tasks in file order."""
        return list(self.tasks)

    def _valid_positions(self, ids: Iterable[int]) -> List[int]:
        """Map ids to list positions, warning about each one out of range."""
        positions = []
        for task_id in ids:
            if 1 <= task_id <= len(self.tasks):
                positions.append(task_id - 1)
            else:
                log.warning("argument %s is out of range", task_id)
        return positions

    def _write(self, task: Task) -> None:
        self.task_file.replace_line(task.source_line, format_task(task, self.dialect))

    # --- add ---

    def add(self, tokens: Iterable[str]) -> Task:
        """
        Append a new open task built from free text.

        The text goes through the parser, so dates, #tags and @mentions in it
        are picked up the same way as in the file.

        Args:
            tokens: Words of the task, joined with spaces

        Returns:
            The new task
        """
        line = f"{self.dialect.open_marker} {' '.join(tokens)}"
        # Not a file line, so errors carry no line number
        task = parse_line(line, self.dialect)
        if task is None:
            raise InvalidTaskInputError(f"unable to convert {line!r} into a task")

        task.id = len(self.tasks) + 1
        task.source_line = self.task_file.append_line(format_task(task, self.dialect))
        self.tasks.append(task)
        log.info("Added task %d at line %d", task.id, task.source_line)
        return task

    # --- done / uncheck ---

    def done(self, ids: Iterable[int]) -> List[Tuple[str, Task]]:
        """
        Check off tasks by id.

        A task that is already done is unchecked instead, so running done
        twice on the same id toggles it back.

        Returns:
            (action, task) pairs in the order they were written, "done"
            first, then "unchecked"
        """
        to_check_off: List[int] = []
        to_uncheck: List[int] = []
        for pos in self._valid_positions(ids):
            if self.tasks[pos].completed:
                to_uncheck.append(pos + 1)
            else:
                to_check_off.append(pos)

        applied = []
        for pos in to_check_off:
            task = self.tasks[pos]
            task.completed = True
            self._write(task)
            applied.append(("done", task))

        if to_uncheck:
            applied.extend(self.uncheck(to_uncheck))
        return applied

    def uncheck(self, ids: Iterable[int]) -> List[Tuple[str, Task]]:
        """
        Mark tasks as not done.

        Returns:
            ("unchecked", task) pairs in the order they were written
        """
        applied = []
        for pos in self._valid_positions(ids):
            task = self.tasks[pos]
            task.completed = False
            self._write(task)
            applied.append(("unchecked", task))
        return applied

    # --- remove ---

    def select_for_removal(self, ids: Iterable[int], decide: DecideFn) -> List[Task]:
        """
        Ask decide() about each requested task, in file order.

        Once decide() answers DELETE_ALL, every remaining match is selected
        without asking again.

        Returns:
            Tasks confirmed for deletion
        """
        wanted = set(ids)
        for task_id in sorted(wanted):
            if not 1 <= task_id <= len(self.tasks):
                log.warning("argument %s is out of range", task_id)

        selected: List[Task] = []
        delete_all = False
        for task in self.tasks:
            if task.id not in wanted:
                continue
            if not delete_all:
                decision = decide(task)
                if decision == Decision.SKIP:
                    continue
                delete_all = decision == Decision.DELETE_ALL
            selected.append(task)
        return selected

    def remove(self, ids: Iterable[int], decide: DecideFn) -> List[Task]:
        """
        Delete confirmed tasks from the file in one rewrite, then reload.

        Args:
            ids: Task ids to consider
            decide: Called per task; DELETE, SKIP or DELETE_ALL

        Returns:
            The removed tasks (as they were before the reload)
        """
        selected = self.select_for_removal(ids, decide)
        if not selected:
            return []

        self.task_file.remove_lines(task.source_line for task in selected)
        log.info("Removed %d task(s)", len(selected))
        self.reload()
        return selected
