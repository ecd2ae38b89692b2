from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from .models import ISOLATION, PRIMARY_PATTERNS, TrainingExperience, TrainingFocus

# rough per-pattern weekly "hard sets" targets: (primary, accessory)
BASE_WEEKLY_SETS: Dict[TrainingFocus, tuple[int, int]] = {
    TrainingFocus.strength: (10, 6),
    TrainingFocus.hypertrophy: (12, 10),
    TrainingFocus.endurance: (8, 6),
    TrainingFocus.general_fitness: (10, 8),
}

EXPERIENCE_SET_MODIFIER: Dict[TrainingExperience, int] = {
    TrainingExperience.beginner: -2,
    TrainingExperience.intermediate: 0,
    TrainingExperience.advanced: 2,
}

# (compound sets, isolation sets)
SETS_BY_EXPERIENCE: Dict[TrainingExperience, tuple[int, int]] = {
    TrainingExperience.beginner: (3, 2),
    TrainingExperience.intermediate: (4, 3),
    TrainingExperience.advanced: (5, 3),
}

# (compound reps, isolation reps)
REPS_BY_FOCUS: Dict[TrainingFocus, tuple[str, str]] = {
    TrainingFocus.strength: ("3-5", "6-8"),
    TrainingFocus.hypertrophy: ("6-12", "10-15"),
    TrainingFocus.endurance: ("12-20", "15-25"),
    TrainingFocus.general_fitness: ("8-12", "10-15"),
}

# seconds between sets: (priority 1, priority 2)
REST_BY_FOCUS: Dict[TrainingFocus, tuple[int, int]] = {
    TrainingFocus.strength: (180, 120),
    TrainingFocus.hypertrophy: (90, 60),
    TrainingFocus.endurance: (60, 45),
    TrainingFocus.general_fitness: (90, 60),
}

MIN_PRIMARY_CAP = 4
MIN_ACCESSORY_CAP = 2


@dataclass(frozen=True)
class RepsScheme:
    compound_sets: int
    compound_reps: str
    isolation_sets: int
    isolation_reps: str


def cap_bucket(pattern: str) -> str:
    """Primary patterns have their own cap; everything else shares the isolation pool."""
    return pattern if pattern in PRIMARY_PATTERNS else ISOLATION


def weekly_caps(focus: TrainingFocus, experience: TrainingExperience, availability: int) -> Dict[str, int]:
    primary, accessory = BASE_WEEKLY_SETS[focus]
    mod = EXPERIENCE_SET_MODIFIER[experience]
    # fewer days -> slightly higher per-day load
    if availability <= 3:
        avail_mod = 1
    elif availability >= 5:
        avail_mod = -1
    else:
        avail_mod = 0
    primary_cap = max(MIN_PRIMARY_CAP, primary + mod + avail_mod)
    accessory_cap = max(MIN_ACCESSORY_CAP, accessory + mod)
    caps = {pattern: primary_cap for pattern in PRIMARY_PATTERNS}
    caps[ISOLATION] = accessory_cap * 2
    return caps


def reps_scheme(focus: TrainingFocus, experience: TrainingExperience) -> RepsScheme:
    compound_sets, isolation_sets = SETS_BY_EXPERIENCE[experience]
    compound_reps, isolation_reps = REPS_BY_FOCUS[focus]
    return RepsScheme(
        compound_sets=compound_sets,
        compound_reps=compound_reps,
        isolation_sets=isolation_sets,
        isolation_reps=isolation_reps,
    )


def rest_seconds(priority: int, focus: TrainingFocus) -> int:
    primary, accessory = REST_BY_FOCUS[focus]
    return primary if priority == 1 else accessory
