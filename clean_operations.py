#!/usr/bin/env python3
"""
Clean Operations Module

Runs the build tool's own clean subcommand inside a project directory and
reports the outcome without raising.
"""

import logging
import pathlib
import subprocess
from dataclasses import dataclass, field
from typing import Callable, Optional

from kathairo_errors import ExecutionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProjectType:
    """Markers and clean command for one kind of build project"""

    name: str
    manifest: str
    build_output: str
    clean_command: tuple[str, ...] = field(default_factory=tuple)


CARGO = ProjectType(name="cargo", manifest="Cargo.toml", build_output="target", clean_command=("cargo", "clean"))


@dataclass
class CleanResult:
    """Result of a clean operation"""

    project: pathlib.Path
    success: bool
    error_message: Optional[str] = None


def _last_line(text: Optional[str]) -> str:
    lines = [line.strip() for line in (text or "").splitlines() if line.strip()]
    return lines[-1] if lines else ""


class CleanExecutor:
    """Invokes the external clean command for one project at a time"""

    def __init__(
        self,
        project_type: ProjectType = CARGO,
        runner: Optional[Callable[..., subprocess.CompletedProcess]] = None,
    ):
        self.project_type = project_type
        # None means subprocess.run, looked up on every call
        self._runner = runner

    def clean(self, project: pathlib.Path):
        """Run the clean command in *project*; raise ExecutionError on any failure"""
        cmd = list(self.project_type.clean_command)
        runner = self._runner or subprocess.run
        logger.debug("Running %s in %s", " ".join(cmd), project)
        try:
            completed = runner(cmd, cwd=str(project), capture_output=True, text=True, check=False)
        except FileNotFoundError as e:
            raise ExecutionError(project, f"'{cmd[0]}' not found on PATH", e) from e
        except OSError as e:
            raise ExecutionError(project, f"failed to start '{cmd[0]}': {e}", e) from e

        if completed.returncode != 0:
            detail = _last_line(completed.stderr) or _last_line(completed.stdout)
            message = f"'{' '.join(cmd)}' exited with status {completed.returncode}"
            if detail:
                message += f": {detail}"
            raise ExecutionError(project, message)

    def run(self, project: pathlib.Path) -> CleanResult:
        """Clean *project* and report success or the failure message"""
        try:
            self.clean(project)
        except ExecutionError as e:
            logger.debug("Clean failed for %s: %s", project, e.message)
            return CleanResult(project=project, success=False, error_message=e.message)
        return CleanResult(project=project, success=True)
