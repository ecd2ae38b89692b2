import os
from datetime import date

import pytest

from workout_engine.catalog import Exercise, ExerciseCatalog, load_catalog
from workout_engine.config import REPO_ROOT, Settings
from workout_engine.models import ExerciseCategory, GenerationParameters, TrainingExperience

# a Monday; ISO week 2026-W43
FIXED_DAY = date(2026, 10, 19)


def make_exercise(
    id,
    pattern="squat",
    groups=("quads",),
    equipment=None,
    level="beginner",
    compound=True,
    category="normal",
    name=None,
):
    return Exercise(
        id=id,
        name=name or id.replace("-", " ").title(),
        movement_pattern=pattern,
        muscle_groups=tuple(groups),
        equipment=equipment,
        experience_level=TrainingExperience(level),
        is_compound=compound,
        category=ExerciseCategory(category),
        instructions=f"How to do {id}.",
    )


def make_params(**overrides):
    base = {
        "training_experience": "intermediate",
        "training_focus": "general_fitness",
        "weekly_availability": 3,
        "available_equipment": ["bodyweight", "dumbbells"],
        "disliked_exercises": [],
        "preferred_duration_minutes": 60,
    }
    base.update(overrides)
    return GenerationParameters(**base)


@pytest.fixture(scope="session")
def catalog() -> ExerciseCatalog:
    settings = Settings(
        catalog_paths=[os.path.join(REPO_ROOT, "data", "exercises.csv")],
        alternatives_paths=[os.path.join(REPO_ROOT, "data", "exercise_alternatives.csv")],
    )
    return load_catalog(settings)
