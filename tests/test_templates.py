import pytest

from workout_engine.models import ProgramArchetype, TrainingExperience, TrainingFocus
from workout_engine.templates import (
    cycle_length,
    day_template,
    program_archetype,
    session_name,
    session_type,
)
from workout_engine.volume import reps_scheme

SCHEME = reps_scheme(TrainingFocus.hypertrophy, TrainingExperience.intermediate)


@pytest.mark.parametrize("days,expected", [
    (1, ProgramArchetype.full_body),
    (3, ProgramArchetype.full_body),
    (4, ProgramArchetype.upper_lower),
    (5, ProgramArchetype.push_pull_legs),
    (7, ProgramArchetype.push_pull_legs),
])
def test_archetype_from_availability(days, expected):
    assert program_archetype(days) == expected


def test_full_body_template():
    slots = day_template(ProgramArchetype.full_body, 0, SCHEME)
    assert 4 <= len(slots) <= 6
    primary = [s.pattern for s in slots if s.priority == 1]
    assert primary == ["squat", "hinge", "push_horizontal", "pull_horizontal"]
    assert all(s.sets == SCHEME.compound_sets and s.reps == SCHEME.compound_reps for s in slots if s.priority == 1)
    assert all(s.sets == SCHEME.isolation_sets and s.reps == SCHEME.isolation_reps for s in slots if s.priority == 2)
    assert session_type(slots) == "full_body"


def test_upper_lower_alternates_starting_with_upper():
    upper = day_template(ProgramArchetype.upper_lower, 0, SCHEME)
    lower = day_template(ProgramArchetype.upper_lower, 1, SCHEME)
    assert {"push_horizontal", "pull_horizontal", "push_vertical", "pull_vertical"} <= {s.pattern for s in upper}
    assert {"squat", "hinge", "lunge"} <= {s.pattern for s in lower}
    assert day_template(ProgramArchetype.upper_lower, 2, SCHEME) == upper
    assert session_type(upper) == "upper"
    assert session_type(lower) == "legs"


def test_push_pull_legs_cycles_every_three_days():
    for day in range(3):
        assert day_template(ProgramArchetype.push_pull_legs, day, SCHEME) == \
            day_template(ProgramArchetype.push_pull_legs, day + 3, SCHEME)
    kinds = [session_type(day_template(ProgramArchetype.push_pull_legs, d, SCHEME)) for d in range(3)]
    assert kinds == ["push", "pull", "legs"]
    push = day_template(ProgramArchetype.push_pull_legs, 0, SCHEME)
    assert sum(1 for s in push if s.priority == 2) == 2


def test_session_names():
    assert cycle_length(ProgramArchetype.push_pull_legs) == 3
    assert [session_name(ProgramArchetype.push_pull_legs, d) for d in range(6)] == \
        ["Push 1", "Pull 1", "Legs 1", "Push 2", "Pull 2", "Legs 2"]
    assert [session_name(ProgramArchetype.upper_lower, d) for d in range(4)] == \
        ["Upper 1", "Lower 1", "Upper 2", "Lower 2"]
    assert session_name(ProgramArchetype.full_body, 2) == "Full Body 3"
