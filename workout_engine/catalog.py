from __future__ import annotations

import asyncio
import logging
import os
import threading
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, Tuple

import pandas as pd

from .config import Settings
from .errors import CatalogUnavailableError
from .models import ExerciseCategory, ExerciseSummary, TrainingExperience, normalize_equipment

logger = logging.getLogger(__name__)


REQUIRED_COLUMNS = ("id", "name")


@dataclass(frozen=True)
class Exercise:
    id: str
    name: str
    movement_pattern: str
    muscle_groups: Tuple[str, ...]
    equipment: str | None
    experience_level: TrainingExperience
    is_compound: bool
    category: ExerciseCategory
    instructions: str | None = None

    @property
    def needs_no_equipment(self) -> bool:
        return self.equipment is None or self.equipment == "bodyweight"

    def summary(self) -> ExerciseSummary:
        return ExerciseSummary(
            id=self.id,
            name=self.name,
            movement_pattern=self.movement_pattern,
            muscle_groups=list(self.muscle_groups),
            equipment=self.equipment,
            experience_level=self.experience_level.value,
            is_compound=self.is_compound,
            instructions=self.instructions,
        )

    @staticmethod
    def from_row(row: pd.Series) -> "Exercise":
        def get(colnames: List[str]):
            for c in colnames:
                if c in row and pd.notna(row[c]) and str(row[c]).strip() != "":
                    return str(row[c]).strip()
            return None

        def to_list(val: str | None) -> Tuple[str, ...]:
            if val is None:
                return ()
            # Split on comma or semicolon
            parts = [p.strip().lower() for p in str(val).replace(";", ",").split(",") if p.strip()]
            return tuple(parts)

        def to_bool(val: str | None) -> bool:
            return (val or "").strip().lower() in {"true", "1", "yes", "y", "t"}

        level = (get(["experience_level", "Level", "level", "difficulty_level"]) or "intermediate").lower()
        mechanics = (get(["Mechanics", "mechanics"]) or "").lower()
        category = (get(["category", "Category"]) or "normal").lower().replace("-", "_").replace(" ", "_")
        return Exercise(
            id=get(["id", "ID", "exercise_id"]) or "",
            name=get(["name", "Title", "title", "Exercise Name"]) or "Unknown Exercise",
            movement_pattern=(get(["movement_pattern", "pattern"]) or "isolation").lower(),
            muscle_groups=to_list(get(["muscle_groups", "Muscle Groups", "primary_muscles"])),
            equipment=normalize_equipment(get(["equipment", "Equipment"])),
            experience_level=TrainingExperience(level) if level in TrainingExperience.__members__ else TrainingExperience.intermediate,
            is_compound=to_bool(get(["is_compound", "compound"])) or mechanics == "compound",
            category=ExerciseCategory(category) if category in ExerciseCategory.__members__ else ExerciseCategory.normal,
            instructions=get(["instructions", "Instructions", "Description"]),
        )


@dataclass(frozen=True)
class ExerciseCatalog:
    """Read-only snapshot of the exercise table plus the curated alternatives relation."""

    exercises: Tuple[Exercise, ...]
    alternatives: Mapping[str, Tuple[str, ...]] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "alternatives", MappingProxyType(dict(self.alternatives)))
        object.__setattr__(self, "_by_id", {e.id: e for e in self.exercises})

    def get(self, exercise_id: str) -> Exercise | None:
        return self._by_id.get(exercise_id)

    def by_category(self, category: ExerciseCategory) -> List[Exercise]:
        return [e for e in self.exercises if e.category == category]

    def __len__(self) -> int:
        return len(self.exercises)


def _read_csv(path: str) -> pd.DataFrame:
    df = pd.read_csv(path)
    # Normalize columns for safer access
    df.columns = [str(c).strip() for c in df.columns]
    return df


def _first_existing(paths: List[str]) -> str | None:
    for path in paths:
        if os.path.exists(path):
            return path
    return None


def load_alternatives(path: str) -> Dict[str, Tuple[str, ...]]:
    df = _read_csv(path)
    missing = {"primary_exercise_id", "alternative_exercise_id"} - set(df.columns)
    if missing:
        raise CatalogUnavailableError(f"Alternatives file {path} is missing columns: {sorted(missing)}")
    if "similarity_score" not in df.columns:
        df["similarity_score"] = 0.0
    df["similarity_score"] = pd.to_numeric(df["similarity_score"], errors="coerce").fillna(0.0)
    # highest similarity first, file order breaks ties
    df = df.sort_values("similarity_score", ascending=False, kind="stable")
    out: Dict[str, Tuple[str, ...]] = {}
    for primary, group in df.groupby("primary_exercise_id", sort=False):
        out[str(primary).strip()] = tuple(str(x).strip() for x in group["alternative_exercise_id"])
    return out


def load_catalog(settings: Settings | None = None) -> ExerciseCatalog:
    """Read the exercise table (and optional alternatives) from CSV into a snapshot."""
    settings = settings or Settings.from_env()
    path = _first_existing(settings.catalog_paths)
    if path is None:
        raise CatalogUnavailableError(f"Exercise catalog not found. Looked in: {settings.catalog_paths}")
    try:
        df = _read_csv(path)
    except (OSError, ValueError) as e:
        raise CatalogUnavailableError(f"Failed to load exercise catalog from {path}: {e}") from e
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise CatalogUnavailableError(f"Exercise catalog {path} is missing columns: {missing}")

    exercises = tuple(e for e in (Exercise.from_row(r) for _, r in df.iterrows()) if e.id)

    alternatives: Dict[str, Tuple[str, ...]] = {}
    alt_path = _first_existing(settings.alternatives_paths)
    if alt_path is not None:
        try:
            alternatives = load_alternatives(alt_path)
        except (OSError, ValueError) as e:
            raise CatalogUnavailableError(f"Failed to load exercise alternatives from {alt_path}: {e}") from e

    logger.info("Loaded %d exercises (%d with curated alternatives) from %s", len(exercises), len(alternatives), path)
    return ExerciseCatalog(exercises=exercises, alternatives=alternatives)


class CatalogProvider:
    """Loads the catalog once and hands out the same immutable snapshot afterwards."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or Settings.from_env()
        self._catalog: ExerciseCatalog | None = None
        self._lock = threading.Lock()

    def get(self) -> ExerciseCatalog:
        if self._catalog is None:
            with self._lock:
                if self._catalog is None:
                    self._catalog = load_catalog(self.settings)
        return self._catalog

    async def aget(self) -> ExerciseCatalog:
        if self._catalog is not None:
            return self._catalog
        return await asyncio.to_thread(self.get)

    def invalidate(self) -> None:
        with self._lock:
            self._catalog = None


class StaticCatalogProvider(CatalogProvider):
    def __init__(self, catalog: ExerciseCatalog) -> None:
        super().__init__(Settings())
        self._catalog = catalog

    def invalidate(self) -> None:
        pass
