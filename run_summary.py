#!/usr/bin/env python3
"""
Visit outcomes and the run summary for Kathairo
"""

import pathlib
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from auxiliary import format_bytes


class OutcomeKind(Enum):
    """Result of visiting one directory"""

    NOT_A_PROJECT = "not-a-project"
    PROJECT_CLEANED = "cleaned"
    PROJECT_SKIPPED = "skipped"
    PROJECT_ABORTED = "aborted"
    UNREADABLE = "unreadable"


@dataclass
class VisitOutcome:
    path: pathlib.Path
    kind: OutcomeKind
    reason: Optional[str] = None
    size: int = 0

    @property
    def is_project(self) -> bool:
        return self.kind in (OutcomeKind.PROJECT_CLEANED, OutcomeKind.PROJECT_SKIPPED, OutcomeKind.PROJECT_ABORTED)


@dataclass
class RunSummary:
    """Counts of cleaned and skipped projects across one walk"""

    cleaned: int = 0
    skipped: int = 0
    reclaimed_bytes: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)

    def record(self, outcome: VisitOutcome):
        """Fold one outcome into the counters"""
        if outcome.kind is OutcomeKind.NOT_A_PROJECT:
            return
        if outcome.kind is OutcomeKind.PROJECT_CLEANED:
            self.cleaned += 1
            self.reclaimed_bytes += outcome.size
        else:
            self.skipped += 1
        if outcome.reason:
            self.errors.append((str(outcome.path), outcome.reason))

    def render(self) -> str:
        lines = [
            f"Cleaned: {self.cleaned}",
            f"Skipped: {self.skipped}",
            f"Reclaimed: {format_bytes(self.reclaimed_bytes)}",
        ]
        if self.errors:
            lines.append(f"Errors: {len(self.errors)}")
            lines.extend(f"  {path}: {message}" for path, message in self.errors)
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return {
            "cleaned": self.cleaned,
            "skipped": self.skipped,
            "reclaimed_bytes": self.reclaimed_bytes,
            "errors": [{"path": path, "error": message} for path, message in self.errors],
        }
