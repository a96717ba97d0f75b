"""Mask penalty scoring and mask selection."""

from __future__ import annotations

from collections import deque
from typing import Deque, Sequence

from .grid import ModuleGrid

PENALTY_N1 = 3
PENALTY_N2 = 3
PENALTY_N3 = 40
PENALTY_N4 = 10


def penalty_score(modules: Sequence[Sequence[bool]]) -> int:
    """Return the penalty of a finished (masked, formatted) module matrix."""
    size = len(modules)
    result = 0

    for row in modules:
        result += _line_penalty(row, size)
    for x in range(size):
        result += _line_penalty([modules[y][x] for y in range(size)], size)

    for y in range(size - 1):
        for x in range(size - 1):
            color = modules[y][x]
            if color == modules[y][x + 1] == modules[y + 1][x] == modules[y + 1][x + 1]:
                result += PENALTY_N2

    dark = sum(sum(1 for color in row if color) for row in modules)
    total = size * size
    # Smallest k such that the dark ratio lies within (45 - 5k)% .. (55 + 5k)%
    k = (abs(dark * 20 - total * 10) + total - 1) // total - 1
    assert 0 <= k <= 9
    result += k * PENALTY_N4
    return result


def _line_penalty(line: Sequence[bool], size: int) -> int:
    """Score adjacent runs (N1) and finder-like patterns (N3) along one row or column."""
    score = 0
    run_color = False
    run_length = 0
    # Most recent run lengths, newest first
    history: Deque[int] = deque([0] * 7, maxlen=7)
    for color in line:
        if color == run_color:
            run_length += 1
            if run_length == 5:
                score += PENALTY_N1
            elif run_length > 5:
                score += 1
        else:
            _add_history(run_length, history, size)
            if not run_color:
                score += _count_finder_patterns(history) * PENALTY_N3
            run_color = color
            run_length = 1
    score += _terminate_and_count(run_color, run_length, history, size) * PENALTY_N3
    return score


def _add_history(run_length: int, history: Deque[int], size: int) -> None:
    if history[0] == 0:
        # The light border outside the symbol extends the first run
        run_length += size
    history.appendleft(run_length)


def _count_finder_patterns(history: Deque[int]) -> int:
    """Return 0-2: dark:light:dark:light:dark = 1:1:3:1:1 with 4 light on either side."""
    n = history[1]
    core = (
        n > 0
        and history[2] == n
        and history[3] == n * 3
        and history[4] == n
        and history[5] == n
    )
    return (
        int(core and history[0] >= n * 4 and history[6] >= n)
        + int(core and history[6] >= n * 4 and history[0] >= n)
    )


def _terminate_and_count(run_color: bool, run_length: int, history: Deque[int], size: int) -> int:
    if run_color:
        _add_history(run_length, history, size)
        run_length = 0
    run_length += size
    _add_history(run_length, history, size)
    return _count_finder_patterns(history)


def choose_mask(grid: ModuleGrid) -> int:
    """Return the mask with the lowest penalty, the lowest index winning ties.

    ``grid`` must hold placed but unmasked codewords; it is left unmasked.
    """
    best_mask = 0
    min_penalty = None
    for mask in range(8):
        grid.apply_mask(mask)
        grid.draw_format_bits(mask)
        penalty = penalty_score(grid.modules)
        if min_penalty is None or penalty < min_penalty:
            best_mask = mask
            min_penalty = penalty
        grid.apply_mask(mask)
    return best_mask
