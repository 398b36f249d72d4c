#!/usr/bin/env python3
"""
Kathairo — Ancient Greek καθαίρω (to cleanse)

Walks a directory tree looking for Cargo projects (a Cargo.toml next to a
target/ directory) and asks, one project at a time, whether to run
`cargo clean` there to reclaim disk space.

Keys at each project:
    y   clean this project
    n   skip it
    s   clean this one and every project found after it, without asking
    q   stop the walk now

Usage:
    kathairo                 # Scan the current directory
    kathairo <path>          # Scan <path>
    kathairo <path> --yes    # Clean every project without asking
    kathairo <path> --json   # Print the final summary as JSON
"""

import argparse
import logging
import pathlib
import signal
import sys

try:
    import termios
    import tty

    _HAS_TERMIOS = True
except ImportError:
    _HAS_TERMIOS = False
from typing import Callable, Optional

from rich.logging import RichHandler
from rich.markup import escape

from auxiliary import format_bytes, format_path_for_display
from clean_operations import CARGO, CleanExecutor
from console_ui import ConsoleUI
from decisions import Decider, DecisionMode
from kathairo_errors import SetupError
from project_scanner import ProjectRecognizer, ProjectWalker
from run_summary import OutcomeKind, RunSummary, VisitOutcome

logger = logging.getLogger("kathairo")


def _get_single_key() -> str:
    """Read a single keypress without requiring Enter.

    Falls back to a whole line from input() if the terminal doesn't support
    raw mode; a line is never cut down to its first character.
    Raises EOFError when stdin is exhausted.
    """
    if not _HAS_TERMIOS:
        return input("> ")
    try:
        fd = sys.stdin.fileno()
        old_settings = termios.tcgetattr(fd)
        try:
            tty.setraw(fd)
            ch = sys.stdin.read(1)
        finally:
            termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)
    except (termios.error, OSError, ValueError):
        return input("> ")
    if not ch:
        raise EOFError
    return ch


def setup_logging(verbose: bool, ui: ConsoleUI):
    """Route log records through the UI console"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=ui.console, show_path=False, markup=False)],
        force=True,
    )


# ---------------------------------------------------------------------------
# Kathairo
# ---------------------------------------------------------------------------


class Kathairo:
    """Main application class for the Kathairo build-artifact cleaner."""

    def __init__(
        self,
        args: argparse.Namespace,
        ui: Optional[ConsoleUI] = None,
        read_key: Optional[Callable[[], str]] = None,
        executor: Optional[CleanExecutor] = None,
    ):
        self.args = args
        self.ui = ui or ConsoleUI()
        self.read_key = read_key or _get_single_key
        self.project_type = CARGO
        self.executor = executor or CleanExecutor(self.project_type)
        self.walker: Optional[ProjectWalker] = None
        self._shutdown_requested = False
        self._projects_reached = 0

    # -- signal handling ----------------------------------------------------

    def _signal_handler(self, signum, frame):
        if self._shutdown_requested:
            sys.exit(1)
        self._shutdown_requested = True
        if self.walker:
            self.walker.request_abort()
        self.ui.print_warning("\nStop requested... press Ctrl+C again to force quit.")

    def _install_signal_handlers(self) -> dict:
        previous = {signal.SIGINT: signal.signal(signal.SIGINT, self._signal_handler)}
        if hasattr(signal, "SIGTERM"):
            previous[signal.SIGTERM] = signal.signal(signal.SIGTERM, self._signal_handler)
        return previous

    # -- interactive output --------------------------------------------------

    def _show_project(self, project: pathlib.Path, size: int):
        display = escape(format_path_for_display(str(project)))
        self.ui.console.print(
            f"\n  [dim][{self._projects_reached + 1}][/dim] {display}"
            f" [yellow]({self.project_type.build_output}/: {format_bytes(size)})[/yellow]"
        )
        if self.walker and self.walker.mode is DecisionMode.APPROVE_ALL:
            self.ui.print_progress(f"  Running '{' '.join(self.project_type.clean_command)}'...")

    def _show_prompt(self, project: pathlib.Path, size: int):
        self.ui.console.print(
            f"  Run '{' '.join(self.project_type.clean_command)}'?"
            "  [dim]\\[y]es  \\[n]o  \\[s] yes to all  \\[q]uit[/dim] ",
            end="",
        )

    def _after_key(self):
        self.ui.console.print()

    def _show_invalid(self, token: str):
        self.ui.print_warning(f"  Invalid input {escape(repr(token))}, please answer y, n, s or q")

    def _show_outcome(self, outcome: VisitOutcome):
        if outcome.is_project:
            self._projects_reached += 1
        display = escape(format_path_for_display(str(outcome.path)))
        if outcome.kind is OutcomeKind.PROJECT_CLEANED:
            self.ui.print_success(f"  Cleaned, {format_bytes(outcome.size)} reclaimed")
        elif outcome.kind is OutcomeKind.PROJECT_SKIPPED:
            if outcome.reason:
                self.ui.print_error(f"  Clean failed: {escape(outcome.reason)}")
            else:
                self.ui.print_progress("  Skipped")
        elif outcome.kind is OutcomeKind.PROJECT_ABORTED:
            self.ui.print_warning("  Stopping, remaining directories will not be visited")
        elif outcome.kind is OutcomeKind.UNREADABLE:
            self.ui.print_warning(f"  Skipping unreadable {display}: {escape(outcome.reason)}")

    def _read_key(self) -> str:
        try:
            return self.read_key()
        finally:
            self._after_key()

    # -- reporting -----------------------------------------------------------

    def show_summary(self, summary: RunSummary):
        if getattr(self.args, "json", False):
            self.ui.console.print_json(data=summary.to_dict())
            return

        self.ui.console.print()
        self.ui.print_separator()
        if self.walker and self.walker.aborted:
            self.ui.print_warning("Stopped before the whole tree was scanned")
        self.ui.print_info("Summary")
        for line in summary.render().splitlines():
            if line.startswith("Errors") or line.startswith("  "):
                self.ui.print_error(escape(line))
            else:
                self.ui.print_plain(escape(line))

    # -- main entry point ----------------------------------------------------

    def build_walker(self, root: pathlib.Path) -> ProjectWalker:
        decider = Decider(self._read_key, show_prompt=self._show_prompt, show_invalid=self._show_invalid)
        initial_mode = DecisionMode.APPROVE_ALL if getattr(self.args, "yes", False) else DecisionMode.ASK_EACH_TIME
        return ProjectWalker(
            root,
            ProjectRecognizer(self.project_type),
            decider,
            self.executor,
            on_outcome=self._show_outcome,
            on_project=self._show_project,
            initial_mode=initial_mode,
        )

    def run(self) -> int:
        root = pathlib.Path(getattr(self.args, "path", None) or ".").expanduser().resolve()

        self.ui.print_header("Kathairo", f"Scanning {escape(format_path_for_display(str(root)))}")
        self.ui.show_configuration(
            {
                "Markers": f"{self.project_type.manifest} + {self.project_type.build_output}/",
                "Command": self.project_type.clean_command,
                "Mode": "clean all without asking" if getattr(self.args, "yes", False) else "ask for each project",
            }
        )

        self.walker = self.build_walker(root)
        previous_handlers = self._install_signal_handlers()
        try:
            summary = self.walker.walk()
        except SetupError as e:
            self.ui.print_error(f"Cannot scan {escape(format_path_for_display(str(e.path)))}: {escape(e.message)}")
            return 1
        finally:
            for signum, handler in previous_handlers.items():
                signal.signal(signum, handler)

        logger.debug("Visited %d directories", self.walker.visited_count)
        if self._projects_reached == 0:
            self.ui.print_success(f"No {self.project_type.name} projects with build output found.")
        self.show_summary(summary)
        return 0


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kathairo",
        description="Kathairo: interactive cleaner for Cargo build output",
    )
    parser.add_argument("path", nargs="?", help="Directory to scan (default: current directory)")
    parser.add_argument("-y", "--yes", action="store_true", help="Clean every project found without asking")
    parser.add_argument("--json", action="store_true", help="Print the final summary as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every visited directory")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    ui = ConsoleUI()
    setup_logging(args.verbose, ui)
    app = Kathairo(args, ui=ui)
    return app.run()


if __name__ == "__main__":
    sys.exit(main())
