#!/usr/bin/env python3
"""
Operator decisions for Kathairo

Maps a single key from the operator to a cleanup decision and holds the
mode enum the walker keeps for the duration of one run.
"""

import pathlib
from enum import Enum
from typing import Callable, Optional

# Ctrl+C as delivered by a terminal in raw mode
CTRL_C = "\x03"


class DecisionMode(Enum):
    """How the walker resolves the next decision point"""

    ASK_EACH_TIME = "ask"
    APPROVE_ALL = "approve-all"
    ABORTED = "aborted"


class Decision(Enum):
    APPROVE = "approve"
    SKIP = "skip"
    APPROVE_ALL = "approve-all"
    ABORT = "abort"


KEY_DECISIONS: dict[str, Decision] = {
    "y": Decision.APPROVE,
    "n": Decision.SKIP,
    "s": Decision.APPROVE_ALL,
    "q": Decision.ABORT,
}


def parse_token(token: str) -> Optional[Decision]:
    """Translate one raw input token into a decision.

    Surrounding whitespace is stripped and the token is lowercased, so
    " Y" and "y" are the same answer. Anything outside y/n/s/q (including
    an empty token) returns None; the caller must ask again.
    """
    if token == CTRL_C:
        return Decision.ABORT
    return KEY_DECISIONS.get(token.strip().lower())


class Decider:
    """Asks the operator what to do with one project"""

    def __init__(
        self,
        read_key: Callable[[], str],
        show_prompt: Optional[Callable[[pathlib.Path, int], None]] = None,
        show_invalid: Optional[Callable[[str], None]] = None,
    ):
        self.read_key = read_key
        self.show_prompt = show_prompt
        self.show_invalid = show_invalid

    def decide(self, project: pathlib.Path, size: int = 0) -> Decision:
        """Block until the operator gives a valid answer for *project*"""
        while True:
            if self.show_prompt:
                self.show_prompt(project, size)
            try:
                token = self.read_key()
            except EOFError:
                # Closed input can never produce a valid answer
                return Decision.ABORT

            decision = parse_token(token)
            if decision is not None:
                return decision
            if self.show_invalid:
                self.show_invalid(token)
