"""
Seeded randomness for plan generation.

Plans must be identical for the same inputs within a calendar week and must
rotate from one week to the next. Python's own ``random`` module is not used
because its seeding of strings is version dependent; instead a 32-bit string
hash (xmur3) feeds a mulberry32 generator. Both are plain integer arithmetic
masked to 32 bits, so sequences match across platforms and interpreters.
"""
from __future__ import annotations

import json
from datetime import date
from typing import Sequence, TypeVar

from .models import GenerationParameters

T = TypeVar("T")

MASK32 = 0xFFFFFFFF


def _imul(a: int, b: int) -> int:
    return (a * b) & MASK32


def hash32(key: str) -> int:
    h = (1779033703 ^ len(key)) & MASK32
    for ch in key:
        h = _imul(h ^ ord(ch), 3432918353)
        h = ((h << 13) | (h >> 19)) & MASK32
    h = _imul(h ^ (h >> 16), 2246822507)
    h = _imul(h ^ (h >> 13), 3266489909)
    h ^= h >> 16
    return h & MASK32


class RandomSource:
    """mulberry32: 32 bits of state, full period, floats in [0, 1)."""

    def __init__(self, state: int) -> None:
        self.seed_value = state & MASK32
        self._state = self.seed_value

    def next(self) -> float:
        self._state = (self._state + 0x6D2B79F5) & MASK32
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & MASK32
        return ((t ^ (t >> 14)) & MASK32) / 4294967296

    def pick(self, items: Sequence[T]) -> T | None:
        if not items:
            return None
        return items[int(self.next() * len(items))]


def seed(key: str) -> RandomSource:
    return RandomSource(hash32(key))


def week_id(day: date | None = None) -> str:
    """ISO calendar week of ``day`` (today by default), e.g. ``2026-W42``."""
    year, week, _ = (day or date.today()).isocalendar()
    return f"{year}-W{week:02d}"


def _stable(payload: dict) -> str:
    return json.dumps(payload, sort_keys=True, separators=(",", ":"))


def program_key(params: GenerationParameters, week: str) -> str:
    return _stable({
        "focus": params.training_focus.value,
        "exp": params.training_experience.value,
        "avail": params.weekly_availability,
        "equip": sorted(params.available_equipment),
        "dislike": sorted(params.disliked_exercises),
        "week": week,
    })


def selection_key(pattern: str, params: GenerationParameters, week: str) -> str:
    return _stable({
        "pattern": pattern,
        "equip": sorted(params.available_equipment),
        "dislike": sorted(params.disliked_exercises),
        "week": week,
    })
