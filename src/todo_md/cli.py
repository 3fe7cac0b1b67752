"""
todo - keep a todo list inside a Markdown or Logseq file

Usage:
    todo [list]
    todo add <words...>
    todo done <id...>
    todo uncheck <id...>
    todo remove <id...>

Examples:
    todo add buy milk #errand @alex 2024-01-01
    todo ls
    todo done 1 3
    todo rm 2
    todo --file ./notes/todo.md list

Ids are positions in the file at the time the command runs and change when
tasks are added above or removed.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, List, Optional

from colorama import just_fix_windows_console

from .config import Settings, config_file_path, load_config, write_config
from .errors import TodoError
from .formatting import render_task, use_color
from .models import Decision, Task
from .storage import PlainTaskFile
from .store import TodoList

log = logging.getLogger(__name__)

PromptFn = Callable[[str], str]


def readinput(prompt: str) -> str:
    """Ask the user a question on the terminal, trimmed answer.

    A closed stdin answers with an empty string, which every prompt treats
    as "no".
    """
    try:
        return input(prompt).strip()
    except EOFError:
        print()
        return ""


def _show(task: Task, prefix: str = "") -> None:
    print(render_task(task, prefix, color=use_color()))


# --- first run ---

def ensure_config(config_path: Path, prompt: PromptFn = readinput) -> Settings:
    """
    Load the config, offering to create it when it doesn't exist.

    Declining keeps the defaults for this run only.
    """
    if config_path.exists():
        return load_config(config_path)

    settings = Settings()
    answer = prompt("create base configuration file? ( [y]es / [n]o ): ").lower()
    if answer in ("y", "yes"):
        write_config(config_path, settings)
        print(f"creating: {config_path}")
    else:
        print("using temporary defaults")
    return settings


def create_task_file(path: Path) -> None:
    """Create an empty task file and its parent directories."""
    if path.exists():
        print("file already exists")
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    path.touch()
    print(f"creating: {path}")


def ensure_task_file(
    settings: Settings,
    config_path: Path,
    prompt: PromptFn = readinput,
) -> Path:
    """
    Make sure the task file exists, asking to create or relocate it.

    Raises:
        SystemExit: the user refused to create a task file
    """
    task_path = settings.todo_file
    while not task_path.exists():
        answer = prompt(f"create {task_path} ?\n( [y]es / [n]o / [c]hange ): ").lower()
        if answer in ("y", "yes"):
            create_task_file(task_path)
        elif answer in ("c", "change"):
            new_path = Path(prompt("desired path to todo.md file (including filename): ")).expanduser()
            settings.path.todo_path = new_path.parent
            settings.path.todo_filename = new_path.name
            task_path = settings.todo_file
            create_task_file(task_path)
            write_config(config_path, settings)
        else:
            print("Error: no task file, nothing to do.")
            sys.exit(1)
    return task_path


def confirm_removal(prompt: PromptFn = readinput) -> Callable[[Task], Decision]:
    """Build a remove callback that asks about each task on the terminal."""

    def decide(task: Task) -> Decision:
        _show(task, "to remove")
        answer = prompt("delete that task? ( [y]es / [n]o / [a]ll ): ").lower()
        if answer in ("y", "yes"):
            return Decision.DELETE
        if answer in ("a", "all"):
            return Decision.DELETE_ALL
        return Decision.SKIP

    return decide


# --- commands ---

def list_cmd(args):
    """Print every task."""
    tasks = args.todos.list()
    if not tasks:
        print("No tasks found.")
        return
    for task in tasks:
        _show(task)


def add_cmd(args):
    """Append a task built from the given words."""
    task = args.todos.add(args.content)
    _show(task, "adding")


def done_cmd(args):
    """Check off tasks; already-done tasks are unchecked."""
    for action, task in args.todos.done(args.ids):
        _show(task, action)


def uncheck_cmd(args):
    """Mark tasks as not done."""
    for action, task in args.todos.uncheck(args.ids):
        _show(task, action)


def remove_cmd(args):
    """Delete tasks after confirming each one."""
    decide = getattr(args, "decide", None) or confirm_removal()
    removed = args.todos.remove(args.ids, decide)
    if removed:
        print(f"Removed {len(removed)} task(s).")
    else:
        print("Nothing removed.")


# --- main ---

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="todo",
        description="Task list kept as checkbox lines in a Markdown or Logseq file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument('--config', help='Path to config.toml')
    parser.add_argument('--file', help='Task file to use instead of the configured one')
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help='More logging (-v info, -vv debug)')
    subparsers = parser.add_subparsers(dest='command', help='Command to execute')

    list_p = subparsers.add_parser('list', aliases=['ls'], help='List all tasks')
    list_p.set_defaults(func=list_cmd)

    add_p = subparsers.add_parser('add', aliases=['a'], help='Add a task')
    add_p.add_argument('content', nargs='+',
                       help='Title and other properties (#tag, @name, YYYY-MM-DD)')
    add_p.set_defaults(func=add_cmd)

    done_p = subparsers.add_parser('done', aliases=['d'], help='Check off tasks')
    done_p.add_argument('ids', nargs='+', type=int, help='IDs of the tasks to mark as done')
    done_p.set_defaults(func=done_cmd)

    uncheck_p = subparsers.add_parser('uncheck', aliases=['u'], help='Mark tasks as not done')
    uncheck_p.add_argument('ids', nargs='+', type=int, help='IDs of the tasks to uncheck')
    uncheck_p.set_defaults(func=uncheck_cmd)

    remove_p = subparsers.add_parser('remove', aliases=['rm'], help='Remove tasks')
    remove_p.add_argument('ids', nargs='+', type=int, help='IDs of the tasks to remove')
    remove_p.set_defaults(func=remove_cmd)

    return parser


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)
    just_fix_windows_console()

    if not hasattr(args, 'func'):
        args.func = list_cmd

    config_path = config_file_path(args.config)
    settings = ensure_config(config_path)
    if args.file:
        task_path = Path(args.file).expanduser()
        if not task_path.exists():
            print(f"Error: task file not found: {task_path}")
            return 1
    else:
        task_path = ensure_task_file(settings, config_path)
    log.debug("Using task file %s (%s)", task_path, settings.format.checkbox_style)

    try:
        args.todos = TodoList.load(PlainTaskFile(task_path), settings.dialect)
        args.func(args)
    except TodoError as e:
        print(f"Error: {e}")
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
