"""Tests for the solve/restart driving loops."""

import logging

import pytest

from gridcollapse.runner import SolveOutcome, solve, solve_with_restarts
from gridcollapse.wfc import Definite, Indefinite, StepResult, Wfc, WfcRules

from conftest import ContextFreeRules, open_grid


class NothingFits(WfcRules):
    """Every cell other than the collapsed one is left with no value."""

    def get_states(self, view):
        return set()


def solvable(attempt=1):
    return Wfc(3, 1, open_grid(3, 1, {0}), ContextFreeRules(), seed=attempt)


def dead_end(attempt=1):
    return Wfc(2, 1, [Indefinite({1}), Indefinite({1})], NothingFits(), seed=attempt)


class TestSolve:
    def test_solved_outcome(self):
        outcome = solve(solvable())
        assert isinstance(outcome, SolveOutcome)
        assert outcome.solved
        assert outcome.attempts == 1
        assert outcome.rollbacks == 0
        assert outcome.tiles == (Definite(0), Definite(0), Definite(0))

    def test_stuck_outcome(self):
        outcome = solve(dead_end())
        assert not outcome.solved
        assert outcome.steps == 1
        assert outcome.tiles == (Indefinite({1}), Indefinite({1}))

    def test_step_budget_counts_as_failure(self):
        wfc = Wfc(3, 1, open_grid(3, 1, {0, 1}), ContextFreeRules(), seed=0)
        outcome = solve(wfc, max_steps=1)
        assert not outcome.solved
        assert outcome.steps == 1

    def test_rejected_grid_is_not_solved(self):
        outcome = solve(solvable(), accept=lambda tiles: False)
        assert not outcome.solved
        assert all(tile.is_definite for tile in outcome.tiles)

    def test_accepted_grid_is_solved(self):
        seen = []

        def accept(tiles):
            seen.append(tiles)
            return True

        assert solve(solvable(), accept=accept).solved
        assert len(seen) == 1

    def test_progress_reports_attempt(self):
        calls = []
        solve(solvable(), progress_callback=lambda a, w, r: calls.append((a, r)), attempt=4)
        assert calls[-1] == (4, StepResult.SOLVED)
        assert all(attempt == 4 for attempt, _ in calls)


class TestSolveWithRestarts:
    def test_first_success_wins(self):
        built = []

        def factory(attempt):
            built.append(attempt)
            return solvable(attempt) if attempt == 3 else dead_end(attempt)

        outcome = solve_with_restarts(factory, max_restarts=5)
        assert outcome.solved
        assert outcome.attempts == 3
        assert built == [1, 2, 3]

    def test_gives_up_after_budget(self):
        outcome = solve_with_restarts(dead_end, max_restarts=2)
        assert not outcome.solved
        assert outcome.attempts == 2

    def test_rejected_grids_trigger_restart(self):
        outcome = solve_with_restarts(
            solvable,
            max_restarts=3,
            accept=lambda tiles: False,
        )
        assert not outcome.solved
        assert outcome.attempts == 3

    @pytest.mark.parametrize("max_restarts", [0, -1])
    def test_rejects_empty_budget(self, max_restarts):
        with pytest.raises(ValueError):
            solve_with_restarts(solvable, max_restarts=max_restarts)

    def test_logs_each_attempt(self, caplog):
        with caplog.at_level(logging.INFO, logger="gridcollapse"):
            solve_with_restarts(dead_end, max_restarts=2)

        messages = [r.getMessage() for r in caplog.records if r.name == "gridcollapse.runner"]
        assert any(m.startswith("ATTEMPT 1/2 | START") for m in messages)
        assert any(m.startswith("ATTEMPT 2/2 | STUCK") for m in messages)
