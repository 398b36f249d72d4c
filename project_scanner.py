#!/usr/bin/env python3
"""
Project Scanner Module

Depth-first walk over a directory tree that stops at every build project
(manifest file plus build-output directory) and asks what to do with it.

The walk keeps an explicit stack instead of recursing, so tree depth is
bounded by memory and not by the interpreter's recursion limit. Children
are visited in ascending name order: they are sorted by name and pushed in
reverse. A recognized project is never descended into.
"""

import logging
import os
import pathlib
import stat
from dataclasses import dataclass
from typing import Callable, Optional

from auxiliary import dir_size
from clean_operations import CARGO, CleanExecutor, ProjectType
from decisions import Decider, Decision, DecisionMode
from kathairo_errors import EnumerationError, SetupError
from run_summary import OutcomeKind, RunSummary, VisitOutcome

logger = logging.getLogger(__name__)


def _describe(error: OSError) -> str:
    return error.strerror or str(error)


@dataclass(frozen=True)
class ProjectMarker:
    manifest_present: bool
    build_output_present: bool

    @property
    def is_project(self) -> bool:
        return self.manifest_present and self.build_output_present


class ProjectRecognizer:
    """Decides whether a directory is a cleanable project root"""

    def __init__(self, project_type: ProjectType = CARGO):
        self.project_type = project_type

    def classify(self, directory: pathlib.Path) -> ProjectMarker:
        """Probe the two marker names directly under *directory*.

        The manifest counts whatever its type; the build output must be a
        real directory (a symlink to one does not count). Raises
        EnumerationError when presence cannot be determined.
        """
        return ProjectMarker(
            manifest_present=self._probe(directory, self.project_type.manifest, want_dir=False),
            build_output_present=self._probe(directory, self.project_type.build_output, want_dir=True),
        )

    def _probe(self, directory: pathlib.Path, name: str, want_dir: bool) -> bool:
        try:
            st = os.lstat(directory / name)
        except (FileNotFoundError, NotADirectoryError):
            return False
        except OSError as e:
            raise EnumerationError(directory, f"cannot check for {name}: {_describe(e)}", e) from e
        return stat.S_ISDIR(st.st_mode) if want_dir else True


class DirectoryStack:
    """LIFO frontier of directories waiting to be visited"""

    def __init__(self):
        self._items: list[pathlib.Path] = []
        self.pushed_count = 0

    def push(self, path: pathlib.Path):
        self._items.append(path)
        self.pushed_count += 1

    def pop(self) -> Optional[pathlib.Path]:
        return self._items.pop() if self._items else None

    def is_empty(self) -> bool:
        return not self._items

    def clear(self):
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)


def build_output_size(path: pathlib.Path) -> int:
    return dir_size(str(path))


class ProjectWalker:
    """Drives one run: walk, classify, decide, clean, count"""

    def __init__(
        self,
        root: pathlib.Path,
        recognizer: ProjectRecognizer,
        decider: Decider,
        executor: CleanExecutor,
        summary: Optional[RunSummary] = None,
        size_probe: Callable[[pathlib.Path], int] = build_output_size,
        on_outcome: Optional[Callable[[VisitOutcome], None]] = None,
        on_project: Optional[Callable[[pathlib.Path, int], None]] = None,
        initial_mode: DecisionMode = DecisionMode.ASK_EACH_TIME,
    ):
        self.root = pathlib.Path(root)
        self.recognizer = recognizer
        self.decider = decider
        self.executor = executor
        self.summary = summary if summary is not None else RunSummary()
        self.size_probe = size_probe
        self.on_outcome = on_outcome
        self.on_project = on_project
        self.mode = initial_mode
        self.stack = DirectoryStack()
        self.visited_count = 0

    # -- control -------------------------------------------------------------

    @property
    def aborted(self) -> bool:
        return self.mode is DecisionMode.ABORTED

    def request_abort(self):
        """Stop before the next directory is taken off the stack"""
        self.mode = DecisionMode.ABORTED

    def check_root(self):
        """Raise SetupError unless the root is a directory that can be listed"""
        if not self.root.exists():
            raise SetupError(self.root, "scan root does not exist")
        if not self.root.is_dir():
            raise SetupError(self.root, "scan root is not a directory")
        try:
            with os.scandir(self.root) as it:
                next(it, None)
        except OSError as e:
            raise SetupError(self.root, f"cannot read scan root: {_describe(e)}", e) from e

    # -- walk ----------------------------------------------------------------

    def walk(self) -> RunSummary:
        self.check_root()
        self.stack.push(self.root)

        while not self.stack.is_empty() and not self.aborted:
            directory = self.stack.pop()
            self.visit(directory)

        if self.aborted and not self.stack.is_empty():
            logger.debug("Abandoning %d pending directories", len(self.stack))
            self.stack.clear()
        return self.summary

    def visit(self, directory: pathlib.Path) -> VisitOutcome:
        """Handle one directory popped off the stack"""
        self.visited_count += 1
        logger.debug("Visiting %s", directory)

        try:
            subdirs, bad_entries = self._list_subdirectories(directory)
            marker = self.recognizer.classify(directory)
        except EnumerationError as e:
            return self._emit(VisitOutcome(directory, OutcomeKind.UNREADABLE, reason=e.message))

        if marker.is_project:
            return self._emit(self._resolve_project(directory))

        outcome = self._emit(VisitOutcome(directory, OutcomeKind.NOT_A_PROJECT))
        for bad in bad_entries:
            self._emit(bad)
        for child in reversed(subdirs):
            self.stack.push(child)
        return outcome

    def _list_subdirectories(self, directory: pathlib.Path) -> tuple[list[pathlib.Path], list[VisitOutcome]]:
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda entry: entry.name)
        except OSError as e:
            raise EnumerationError(directory, f"cannot list directory: {_describe(e)}", e) from e

        subdirs: list[pathlib.Path] = []
        bad_entries: list[VisitOutcome] = []
        for entry in entries:
            try:
                if entry.is_dir(follow_symlinks=False):
                    subdirs.append(pathlib.Path(entry.path))
            except OSError as e:
                bad_entries.append(
                    VisitOutcome(pathlib.Path(entry.path), OutcomeKind.UNREADABLE, reason=_describe(e))
                )
        return subdirs, bad_entries

    def _resolve_project(self, project: pathlib.Path) -> VisitOutcome:
        size = self.size_probe(project / self.recognizer.project_type.build_output)
        if self.on_project:
            self.on_project(project, size)

        if self.mode is DecisionMode.ASK_EACH_TIME:
            decision = self.decider.decide(project, size)
            if decision is Decision.SKIP:
                return VisitOutcome(project, OutcomeKind.PROJECT_SKIPPED, size=size)
            if decision is Decision.ABORT:
                self.mode = DecisionMode.ABORTED
            elif decision is Decision.APPROVE_ALL and not self.aborted:
                self.mode = DecisionMode.APPROVE_ALL

        # An abort may also arrive from a signal handler while prompting
        if self.aborted:
            return VisitOutcome(project, OutcomeKind.PROJECT_ABORTED, size=size)

        result = self.executor.run(project)
        if not result.success:
            return VisitOutcome(project, OutcomeKind.PROJECT_SKIPPED, reason=result.error_message, size=size)
        return VisitOutcome(project, OutcomeKind.PROJECT_CLEANED, size=size)

    def _emit(self, outcome: VisitOutcome) -> VisitOutcome:
        self.summary.record(outcome)
        if self.on_outcome:
            self.on_outcome(outcome)
        return outcome
