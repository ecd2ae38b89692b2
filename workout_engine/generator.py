from __future__ import annotations

import logging
from datetime import date
from typing import Dict, List, Sequence

import numpy as np

from .bookends import compose_bookend
from .catalog import CatalogProvider, Exercise, ExerciseCatalog
from .models import (
    ExerciseCategory,
    GeneratedProgram,
    GeneratedSession,
    GenerationParameters,
    ResolvedExercise,
)
from .rng import RandomSource, program_key, seed, week_id
from .selector import find_alternative, select_exercise
from .templates import Slot, day_template, program_archetype, session_name, session_type
from .timebox import session_minutes, timebox
from .volume import cap_bucket, reps_scheme, rest_seconds, weekly_caps

logger = logging.getLogger(__name__)


NOVELTY_SCOPES = ("session", "week")
NOTES_MAX_CHARS = 100


def _resolve(ex: Exercise, slot: Slot, sets: int, params: GenerationParameters, order_index: int) -> ResolvedExercise:
    return ResolvedExercise(
        exercise_id=ex.id,
        exercise_name=ex.name,
        sets=sets,
        reps=slot.reps,
        rest_seconds=rest_seconds(slot.priority, params.training_focus),
        order_index=order_index,
        movement_pattern=ex.movement_pattern,
        muscle_groups=list(ex.muscle_groups),
        notes=ex.instructions[:NOTES_MAX_CHARS] if ex.instructions else None,
        priority=slot.priority,
    )


def populate(
    catalog: ExerciseCatalog,
    slots: Sequence[Slot],
    params: GenerationParameters,
    remaining: Dict[str, int],
    rng: RandomSource,
    excluded: Sequence[str] = (),
) -> List[ResolvedExercise]:
    """Fill template slots with exercises, charging sets against ``remaining`` weekly caps."""
    out: List[ResolvedExercise] = []
    for slot in slots:
        if remaining.get(cap_bucket(slot.pattern), 0) <= 0:
            continue
        chosen = list(excluded) + [e.exercise_id for e in out]
        ex = select_exercise(catalog, slot.pattern, params, chosen, rng)
        if ex is None:
            continue
        bucket = cap_bucket(ex.movement_pattern)
        sets = min(slot.sets, remaining[cap_bucket(slot.pattern)], remaining.get(bucket, 0))
        if sets <= 0:
            continue
        out.append(_resolve(ex, slot, sets, params, len(out)))
        remaining[bucket] -= sets
    return out


def _bookends(
    catalog: ExerciseCatalog,
    main: List[ResolvedExercise],
    params: GenerationParameters,
    rng: np.random.Generator,
):
    spare = max(0, params.preferred_duration_minutes - session_minutes(main))
    warm_ok = params.include_warmup and params.warmup_minutes > 0 and spare >= params.warmup_minutes
    spare -= params.warmup_minutes if warm_ok else 0
    cool_ok = params.include_cooldown and params.cooldown_minutes > 0 and spare >= params.cooldown_minutes

    warmup = compose_bookend(
        catalog, main, params.warmup_minutes, ExerciseCategory.warm_up, rng, params.disliked_exercises
    ) if warm_ok else []
    cooldown = compose_bookend(
        catalog, main, params.cooldown_minutes, ExerciseCategory.cool_down, rng, params.disliked_exercises
    ) if cool_ok else []
    return warmup or None, cooldown or None


def generate_from_catalog(
    catalog: ExerciseCatalog,
    params: GenerationParameters,
    today: date | None = None,
    novelty_scope: str = "session",
) -> GeneratedProgram:
    if novelty_scope not in NOVELTY_SCOPES:
        raise ValueError(f"novelty_scope must be one of {NOVELTY_SCOPES}, got {novelty_scope!r}")

    week = week_id(today)
    archetype = program_archetype(params.weekly_availability)
    caps = weekly_caps(params.training_focus, params.training_experience, params.weekly_availability)
    scheme = reps_scheme(params.training_focus, params.training_experience)
    remaining = dict(caps)
    rng = seed(program_key(params, week))
    used_this_week: List[str] = []

    sessions: List[GeneratedSession] = []
    for day in range(params.weekly_availability):
        slots = day_template(archetype, day, scheme)
        day_remaining = dict(remaining)
        excluded = used_this_week if novelty_scope == "week" else []
        main = populate(catalog, slots, params, day_remaining, rng, excluded)
        main = timebox(main, params.preferred_duration_minutes, params.training_focus)

        # charge what survived time-boxing; trimmed sets go back to the week
        for e in main:
            remaining[cap_bucket(e.movement_pattern)] -= e.sets
        used_this_week.extend(e.exercise_id for e in main)

        warmup, cooldown = _bookends(catalog, main, params, np.random.default_rng([rng.seed_value, day]))
        duration = session_minutes(main)
        if warmup:
            duration += params.warmup_minutes
        if cooldown:
            duration += params.cooldown_minutes

        sessions.append(
            GeneratedSession(
                name=session_name(archetype, day),
                warmup=warmup,
                exercises=main,
                cooldown=cooldown,
                estimated_duration=duration,
                session_type=session_type(slots),
            )
        )

    logger.info(
        "Generated %s program for %s: %d sessions, %d main exercises",
        archetype.value, week, len(sessions), sum(len(s.exercises) for s in sessions),
    )
    return GeneratedProgram(archetype=archetype, week=week, sessions=sessions, weekly_caps=caps)


def todays_session(program: GeneratedProgram, today: date | None = None) -> GeneratedSession | None:
    if not program.sessions:
        return None
    # Sunday = 0
    weekday = ((today or date.today()).weekday() + 1) % 7
    return program.sessions[weekday % len(program.sessions)]


class ProgramGenerator:
    def __init__(self, catalog_provider: CatalogProvider | None = None, novelty_scope: str = "session") -> None:
        self.catalog_provider = catalog_provider or CatalogProvider()
        self.novelty_scope = novelty_scope

    def generate_program(self, params: GenerationParameters, today: date | None = None) -> GeneratedProgram:
        catalog = self.catalog_provider.get()
        return generate_from_catalog(catalog, params, today, self.novelty_scope)

    async def agenerate_program(self, params: GenerationParameters, today: date | None = None) -> GeneratedProgram:
        catalog = await self.catalog_provider.aget()
        return generate_from_catalog(catalog, params, today, self.novelty_scope)

    def todays_session(self, params: GenerationParameters, today: date | None = None) -> GeneratedSession | None:
        return todays_session(self.generate_program(params, today), today)

    def find_alternative(self, exercise_id: str, params: GenerationParameters, today: date | None = None) -> Exercise | None:
        return find_alternative(self.catalog_provider.get(), exercise_id, params, week_id(today))
