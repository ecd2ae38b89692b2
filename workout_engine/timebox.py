from __future__ import annotations

import logging
import math
from typing import List, Sequence

from .models import ResolvedExercise, TrainingFocus

logger = logging.getLogger(__name__)


SET_EXECUTION_SECONDS = 45
MIN_BUDGET_MINUTES = 15
MIN_ACCESSORY_REST = 30
REST_SHRINK = 0.75


def estimate_minutes(sets: int, rest: int) -> int:
    # ~45s effort per set + rest
    return math.ceil(sets * (SET_EXECUTION_SECONDS + rest) / 60)


def session_minutes(block: Sequence[ResolvedExercise]) -> int:
    return sum(estimate_minutes(e.sets, e.rest_seconds) for e in block)


def _renumber(block: List[ResolvedExercise]) -> List[ResolvedExercise]:
    return [e if e.order_index == i else e.model_copy(update={"order_index": i}) for i, e in enumerate(block)]


def timebox(block: Sequence[ResolvedExercise], target_minutes: int, focus: TrainingFocus) -> List[ResolvedExercise]:
    """Cut accessory work until the block fits ``target_minutes``.

    Primary (priority 1) exercises are returned untouched. Accessory work is
    reduced in three steps, each only while the block is still over budget:
    drop accessory sets one at a time from the last exercise backward (never
    below one set), then drop whole accessory exercises from the end, then for
    endurance and general fitness shorten accessory rest by a quarter.
    """
    out = list(block)
    budget = max(MIN_BUDGET_MINUTES, target_minutes or 45)
    before = session_minutes(out)

    def over() -> bool:
        return session_minutes(out) > budget

    # 1) Trim accessory sets first
    trimmed = True
    while over() and trimmed:
        trimmed = False
        for i in range(len(out) - 1, -1, -1):
            if not over():
                break
            if out[i].priority == 2 and out[i].sets > 1:
                out[i] = out[i].model_copy(update={"sets": out[i].sets - 1})
                trimmed = True

    # 2) Drop last accessory exercises if still over
    for i in range(len(out) - 1, -1, -1):
        if not over():
            break
        if out[i].priority == 2:
            del out[i]

    # 3) If still over, reduce secondary rest times a bit for endurance/general
    # no-op while step 2 runs first: an over-budget block has no accessories left here
    if over() and focus in (TrainingFocus.endurance, TrainingFocus.general_fitness):
        for i, e in enumerate(out):
            if e.priority == 2:
                rest = max(MIN_ACCESSORY_REST, round(e.rest_seconds * REST_SHRINK))
                out[i] = e.model_copy(update={"rest_seconds": min(rest, e.rest_seconds)})

    out = _renumber(out)
    logger.debug("Time-boxed session from %d to %d min (budget %d)", before, session_minutes(out), budget)
    return out
