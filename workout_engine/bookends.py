from __future__ import annotations

from typing import Collection, List, Sequence

import numpy as np

from .catalog import Exercise, ExerciseCatalog
from .models import ExerciseCategory, ResolvedExercise

MAX_MUSCLE_GROUPS = 4
MIN_BLOCK_EXERCISES = 3
MAX_BLOCK_EXERCISES = 6
MINUTES_PER_EXERCISE = 1.5
GENERIC_KEYWORDS = ("mobility", "stretch", "breath")
HOLD_KEYWORDS = ("hold", "stretch")

REST_BY_CATEGORY = {
    ExerciseCategory.warm_up: 15,
    ExerciseCategory.cool_down: 10,
}


def target_count(budget_minutes: float) -> int:
    return max(MIN_BLOCK_EXERCISES, min(MAX_BLOCK_EXERCISES, int(budget_minutes // MINUTES_PER_EXERCISE)))


def muscle_groups_of(block: Sequence[ResolvedExercise]) -> List[str]:
    seen: List[str] = []
    for e in block:
        for m in e.muscle_groups:
            if m not in seen:
                seen.append(m)
    return seen


def _is_generic(ex: Exercise) -> bool:
    text = f"{ex.name} {ex.movement_pattern}".lower()
    return any(k in text for k in GENERIC_KEYWORDS)


def _is_hold(ex: Exercise) -> bool:
    name = ex.name.lower()
    return any(k in name for k in HOLD_KEYWORDS)


def _resolve(ex: Exercise, category: ExerciseCategory, order_index: int) -> ResolvedExercise:
    timed = category == ExerciseCategory.cool_down or _is_hold(ex)
    return ResolvedExercise(
        exercise_id=ex.id,
        exercise_name=ex.name,
        sets=1,
        reps=30 if timed else 10,
        rest_seconds=REST_BY_CATEGORY[category],
        order_index=order_index,
        movement_pattern=ex.movement_pattern,
        muscle_groups=list(ex.muscle_groups),
        notes="30 seconds" if timed else None,
        priority=2,
    )


def compose_bookend(
    catalog: ExerciseCatalog,
    main_block: Sequence[ResolvedExercise],
    budget_minutes: float,
    category: ExerciseCategory,
    rng: np.random.Generator | None = None,
    excluded: Collection[str] = (),
) -> List[ResolvedExercise]:
    """Warm-up or cool-down aimed at the muscles the main block trains.

    One exercise per targeted muscle group (first four groups of the main
    block), then generic mobility/stretch/breathing work, then anything else
    in the category, until ``target_count(budget_minutes)`` is reached.
    """
    rng = rng if rng is not None else np.random.default_rng()
    target = target_count(budget_minutes)
    pool = [e for e in catalog.by_category(category) if e.id not in excluded]
    picks: List[Exercise] = []

    def unused(candidates: List[Exercise]) -> List[Exercise]:
        taken = {p.id for p in picks}
        return [e for e in candidates if e.id not in taken]

    for group in muscle_groups_of(main_block)[:MAX_MUSCLE_GROUPS]:
        if len(picks) >= target:
            break
        match = unused([e for e in pool if group in e.muscle_groups])
        if match:
            picks.append(match[int(rng.integers(len(match)))])

    for filler in ([e for e in pool if _is_generic(e)], pool):
        while len(picks) < target:
            remaining = unused(filler)
            if not remaining:
                break
            picks.append(remaining[int(rng.integers(len(remaining)))])

    return [_resolve(ex, category, i) for i, ex in enumerate(picks)]
