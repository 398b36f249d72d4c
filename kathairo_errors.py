#!/usr/bin/env python3
"""
Error types for Kathairo

Only SetupError is fatal to a run; everything else is reported where it
happens and the walk moves on.
"""

import pathlib
from typing import Optional


class KathairoError(Exception):
    """Base class for all Kathairo errors"""

    def __init__(self, path: pathlib.Path, message: str, cause: Optional[BaseException] = None):
        super().__init__(f"{path}: {message}")
        self.path = path
        self.message = message
        self.cause = cause


class SetupError(KathairoError):
    """The scan root is missing or cannot be read"""


class EnumerationError(KathairoError):
    """A directory could not be listed or probed during the walk"""


class ExecutionError(KathairoError):
    """The external clean command failed for one project"""
