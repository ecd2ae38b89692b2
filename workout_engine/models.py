from enum import Enum
from typing import List, Optional, Dict, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator


class TrainingExperience(str, Enum):
    beginner = "beginner"
    intermediate = "intermediate"
    advanced = "advanced"

    @property
    def rank(self) -> int:
        return list(TrainingExperience).index(self)


class TrainingFocus(str, Enum):
    strength = "strength"
    hypertrophy = "hypertrophy"
    endurance = "endurance"
    general_fitness = "general_fitness"


class ExerciseCategory(str, Enum):
    normal = "normal"
    warm_up = "warm_up"
    cool_down = "cool_down"


class ProgramArchetype(str, Enum):
    full_body = "full_body"
    upper_lower = "upper_lower"
    push_pull_legs = "push_pull_legs"


PRIMARY_PATTERNS = (
    "squat",
    "hinge",
    "push_vertical",
    "push_horizontal",
    "pull_vertical",
    "pull_horizontal",
    "lunge",
)
ISOLATION = "isolation"
BODYWEIGHT = "bodyweight"


def normalize_equipment(s: Optional[str]) -> Optional[str]:
    """Map UI/dataset equipment spellings onto one tag. Empty means no equipment."""
    if s is None:
        return None
    x = str(s).strip().lower()
    if not x:
        return None
    # common normalizations between UI and dataset
    mapping = {
        "body weight": BODYWEIGHT,
        "body only": BODYWEIGHT,
        "none": None,
        "no equipment": None,
        "dumbbell": "dumbbells",
        "kb": "kettlebell",
        "kettlebells": "kettlebell",
        "band": "bands",
        "resistance band": "bands",
        "resistance bands": "bands",
        "bar": "barbell",
        "pullup bar": "pull_up_bar",
        "pull-up bar": "pull_up_bar",
        "pull up bar": "pull_up_bar",
        "cables": "cable",
        "machines": "machine",
    }
    if x in mapping:
        return mapping[x]
    return x.replace(" ", "_")


class GenerationParameters(BaseModel):
    model_config = ConfigDict(frozen=True)

    training_experience: TrainingExperience = TrainingExperience.beginner
    training_focus: TrainingFocus = TrainingFocus.general_fitness
    weekly_availability: int = Field(default=3, description="days per week, clamped to 1-7")
    available_equipment: List[str] = Field(default_factory=lambda: ["bodyweight"])
    disliked_exercises: List[str] = Field(default_factory=list)
    preferred_duration_minutes: int = Field(default=45, description="clamped to 15-240")
    include_warmup: bool = True
    include_cooldown: bool = True
    warmup_minutes: int = Field(default=6, ge=0, le=30)
    cooldown_minutes: int = Field(default=4, ge=0, le=30)

    @field_validator("weekly_availability")
    @classmethod
    def _clamp_days(cls, v):
        return max(1, min(7, v))

    @field_validator("preferred_duration_minutes")
    @classmethod
    def _clamp_duration(cls, v):
        return max(15, min(240, v))

    @field_validator("available_equipment", mode="before")
    @classmethod
    def _normalize_equipment(cls, v):
        tags = {normalize_equipment(x) for x in (v or [])}
        return sorted(t for t in tags if t)

    @field_validator("disliked_exercises", mode="before")
    @classmethod
    def _dedupe_dislikes(cls, v):
        return sorted({str(x).strip() for x in (v or []) if str(x).strip()})


class ResolvedExercise(BaseModel):
    model_config = ConfigDict(frozen=True)

    exercise_id: str
    exercise_name: str
    sets: int
    reps: Union[int, str]
    rest_seconds: int
    order_index: int
    movement_pattern: str
    muscle_groups: List[str] = Field(default_factory=list)
    notes: Optional[str] = None
    priority: int = 2


class GeneratedSession(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    warmup: Optional[List[ResolvedExercise]] = None
    exercises: List[ResolvedExercise]
    cooldown: Optional[List[ResolvedExercise]] = None
    estimated_duration: int
    session_type: str


class GeneratedProgram(BaseModel):
    model_config = ConfigDict(frozen=True)

    archetype: ProgramArchetype
    week: str
    sessions: List[GeneratedSession]
    weekly_caps: Dict[str, int] = Field(default_factory=dict)


class ExerciseSummary(BaseModel):
    id: str
    name: str
    movement_pattern: str
    muscle_groups: List[str] = Field(default_factory=list)
    equipment: Optional[str] = None
    experience_level: str
    is_compound: bool = False
    instructions: Optional[str] = None


class AlternativeRequest(BaseModel):
    exercise_id: str
    parameters: GenerationParameters


class AlternativeResponse(BaseModel):
    alternative: Optional[ExerciseSummary] = None
