import pathlib
import subprocess
from typing import Optional


class CallLog:
    def __init__(self):
        self.calls = []

    def record(self, cmd, cwd=None):
        self.calls.append((list(cmd), cwd))

    @property
    def cwds(self) -> list[str]:
        return [cwd for _cmd, cwd in self.calls]


def fake_runner(
    call_log: CallLog,
    returncode: int = 0,
    stdout: str = "",
    stderr: str = "",
    exc: Optional[Exception] = None,
):
    """Stand-in for subprocess.run that records (cmd, cwd) and never spawns."""

    def _fake_run(cmd, cwd=None, **kwargs):
        call_log.record(cmd, cwd)
        if exc is not None:
            raise exc
        return subprocess.CompletedProcess(cmd, returncode, stdout=stdout, stderr=stderr)

    return _fake_run


class ScriptedKeys:
    """Feeds operator keys one by one; raises EOFError once they run out."""

    def __init__(self, *keys: str):
        self._keys = list(keys)
        self.reads = 0

    def __call__(self) -> str:
        self.reads += 1
        if not self._keys:
            raise EOFError
        return self._keys.pop(0)

    @property
    def remaining(self) -> int:
        return len(self._keys)


def write_file(path: pathlib.Path, content: str = ""):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def make_project(path: pathlib.Path, artifact_bytes: int = 10) -> pathlib.Path:
    """Create a directory holding Cargo.toml and a non-empty target/."""
    write_file(path / "Cargo.toml", '[package]\nname = "demo"\n')
    write_file(path / "target" / "debug" / "out.bin", "x" * artifact_bytes)
    return path


def make_dir(path: pathlib.Path) -> pathlib.Path:
    path.mkdir(parents=True, exist_ok=True)
    return path
