"""Outcome flags shared by the iterative solvers."""

from __future__ import annotations

from enum import Enum


class SolveStatus(Enum):
    """How an iterative solve ended.

    Solvers return one of these alongside their best estimate so that
    callers can tell a converged value from a fallback value.
    """

    CONVERGED = "converged"
    MAX_ITERATIONS = "max_iterations"  # iteration cap reached
    NOT_BRACKETED = "not_bracketed"  # target outside the search interval
    SOLVER_FAULT = "solver_fault"  # a property collaborator raised

    @property
    def ok(self) -> bool:
        return self is SolveStatus.CONVERGED
