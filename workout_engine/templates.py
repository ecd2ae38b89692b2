from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from .models import ISOLATION, ProgramArchetype
from .volume import RepsScheme


@dataclass(frozen=True)
class Slot:
    pattern: str
    sets: int
    reps: str
    priority: int  # 1 = primary compound, 2 = accessory


def program_archetype(availability: int) -> ProgramArchetype:
    if availability <= 3:
        return ProgramArchetype.full_body
    if availability == 4:
        return ProgramArchetype.upper_lower
    return ProgramArchetype.push_pull_legs


CYCLE_LENGTH = {
    ProgramArchetype.full_body: 1,
    ProgramArchetype.upper_lower: 2,
    ProgramArchetype.push_pull_legs: 3,
}

TITLES = {
    ProgramArchetype.full_body: ("Full Body",),
    ProgramArchetype.upper_lower: ("Upper", "Lower"),
    ProgramArchetype.push_pull_legs: ("Push", "Pull", "Legs"),
}

# pattern lists per day of the cycle; "isolation" entries are accessory slots
DAY_PATTERNS = {
    ProgramArchetype.full_body: (
        ("squat", "hinge", "push_horizontal", "pull_horizontal", ISOLATION),
    ),
    ProgramArchetype.upper_lower: (
        ("push_horizontal", "pull_horizontal", "push_vertical", "pull_vertical", ISOLATION),
        ("squat", "hinge", "lunge", ISOLATION),
    ),
    ProgramArchetype.push_pull_legs: (
        ("push_horizontal", "push_vertical", ISOLATION, ISOLATION),
        ("pull_horizontal", "pull_vertical", ISOLATION, ISOLATION),
        ("squat", "hinge", "lunge", ISOLATION),
    ),
}


def cycle_length(archetype: ProgramArchetype) -> int:
    return CYCLE_LENGTH[archetype]


def session_title(archetype: ProgramArchetype, day_index: int) -> str:
    titles = TITLES[archetype]
    return titles[day_index % len(titles)]


def session_name(archetype: ProgramArchetype, day_index: int) -> str:
    return f"{session_title(archetype, day_index)} {day_index // cycle_length(archetype) + 1}"


def day_template(archetype: ProgramArchetype, day_index: int, scheme: RepsScheme) -> List[Slot]:
    """Ordered slots for one training day. Depends only on the archetype and the day's place in the cycle."""
    patterns = DAY_PATTERNS[archetype][day_index % cycle_length(archetype)]
    slots: List[Slot] = []
    for pattern in patterns:
        if pattern == ISOLATION:
            slots.append(Slot(pattern, scheme.isolation_sets, scheme.isolation_reps, 2))
        else:
            slots.append(Slot(pattern, scheme.compound_sets, scheme.compound_reps, 1))
    return slots


def session_type(slots: Sequence[Slot]) -> str:
    patterns = {s.pattern for s in slots}
    if {"squat", "hinge", "push_horizontal"} <= patterns:
        return "full_body"
    if {"push_horizontal", "push_vertical"} <= patterns and not {"pull_horizontal", "pull_vertical"} & patterns:
        return "push"
    if {"pull_horizontal", "pull_vertical"} <= patterns and not {"push_horizontal", "push_vertical"} & patterns:
        return "pull"
    if {"squat", "hinge"} <= patterns:
        return "legs"
    if {"push_horizontal", "pull_horizontal"} <= patterns:
        return "upper"
    return "mixed"
