from __future__ import annotations

import logging
from typing import Callable, Collection, Dict, List, Tuple

from .catalog import Exercise, ExerciseCatalog
from .models import ISOLATION, ExerciseCategory, GenerationParameters
from .rng import RandomSource, seed, selection_key

logger = logging.getLogger(__name__)


SIMILAR_PATTERNS: Dict[str, Tuple[str, ...]] = {
    "push_vertical": ("push_horizontal", ISOLATION),
    "push_horizontal": ("push_vertical", ISOLATION),
    "pull_vertical": ("pull_horizontal", ISOLATION),
    "pull_horizontal": ("pull_vertical", ISOLATION),
    "squat": ("lunge", "hinge"),
    "hinge": ("squat", "lunge"),
    "lunge": ("squat", "hinge"),
    ISOLATION: ("carry", "rotation"),
    "carry": (ISOLATION,),
    "rotation": (ISOLATION,),
}


def similar_patterns(pattern: str) -> Tuple[str, ...]:
    return SIMILAR_PATTERNS.get(pattern, (ISOLATION,))


def _equipment_ok(ex: Exercise, available: Collection[str], allow_bodyweight: bool) -> bool:
    if ex.equipment is None:
        return True
    if allow_bodyweight and ex.needs_no_equipment:
        return True
    return ex.equipment in available


def _candidates(
    catalog: ExerciseCatalog,
    pattern: str,
    params: GenerationParameters,
    excluded: Collection[str],
    allow_bodyweight: bool,
) -> List[Exercise]:
    max_rank = params.training_experience.rank
    disliked = set(params.disliked_exercises)
    pool: List[Exercise] = []
    for ex in catalog.exercises:
        if ex.category != ExerciseCategory.normal:
            continue
        if ex.movement_pattern != pattern:
            continue
        if ex.experience_level.rank > max_rank:
            continue
        if not _equipment_ok(ex, params.available_equipment, allow_bodyweight):
            continue
        if ex.id in disliked or ex.id in excluded:
            continue
        pool.append(ex)
    return pool


def candidate_pool(
    catalog: ExerciseCatalog,
    pattern: str,
    params: GenerationParameters,
    excluded: Collection[str] = (),
) -> List[Exercise]:
    """Eligible exercises for a slot after the relaxation cascade; empty if the pattern is starved."""
    stages: List[Callable[[], List[Exercise]]] = [
        # Strict: respect equipment + level
        lambda: _candidates(catalog, pattern, params, excluded, allow_bodyweight=False),
        # Fallback 1: allow bodyweight / no-equipment moves
        lambda: _candidates(catalog, pattern, params, excluded, allow_bodyweight=True),
    ]
    # Fallback 2: neighbouring movement patterns
    for alt in similar_patterns(pattern):
        stages.append(lambda alt=alt: _candidates(catalog, alt, params, excluded, allow_bodyweight=True))

    for stage in stages:
        pool = stage()
        if pool:
            return pool
    return []


def select_exercise(
    catalog: ExerciseCatalog,
    pattern: str,
    params: GenerationParameters,
    already_chosen: Collection[str],
    rng: RandomSource,
) -> Exercise | None:
    candidates = candidate_pool(catalog, pattern, params, excluded=already_chosen)
    if not candidates:
        logger.debug("No eligible exercise for pattern %s; dropping slot", pattern)
        return None
    compounds = [c for c in candidates if c.is_compound]
    return rng.pick(compounds or candidates)


def find_alternative(
    catalog: ExerciseCatalog,
    exercise_id: str,
    params: GenerationParameters,
    week: str,
) -> Exercise | None:
    """Replacement for an exercise already in a plan: curated alternatives first, then pattern matching."""
    disliked = set(params.disliked_exercises)
    for alt_id in catalog.alternatives.get(exercise_id, ()):
        alt = catalog.get(alt_id)
        if alt is None or alt.id == exercise_id or alt.id in disliked:
            continue
        if alt.category != ExerciseCategory.normal:
            continue
        if alt.experience_level.rank > params.training_experience.rank:
            continue
        if _equipment_ok(alt, params.available_equipment, allow_bodyweight=True):
            return alt

    original = catalog.get(exercise_id)
    if original is None:
        return None
    rng = seed(selection_key(original.movement_pattern, params, week))
    return select_exercise(catalog, original.movement_pattern, params, [exercise_id], rng)
