import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv
load_dotenv()


REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

CATALOG_PATH_CANDIDATES = [
    os.path.join("data", "exercises.csv"),
    os.path.join(REPO_ROOT, "data", "exercises.csv"),
]
ALTERNATIVES_PATH_CANDIDATES = [
    os.path.join("data", "exercise_alternatives.csv"),
    os.path.join(REPO_ROOT, "data", "exercise_alternatives.csv"),
]


def _env(name: str) -> Optional[str]:
    val = os.getenv(name, "").strip()
    return val or None


@dataclass
class Settings:
    catalog_paths: List[str] = field(default_factory=lambda: list(CATALOG_PATH_CANDIDATES))
    alternatives_paths: List[str] = field(default_factory=lambda: list(ALTERNATIVES_PATH_CANDIDATES))
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    @classmethod
    def from_env(cls) -> "Settings":
        s = cls()
        catalog = _env("CATALOG_PATH")
        if catalog:
            s.catalog_paths = [catalog]
        alternatives = _env("ALTERNATIVES_PATH")
        if alternatives:
            s.alternatives_paths = [alternatives]
        s.log_level = (_env("LOG_LEVEL") or s.log_level).upper()
        s.host = _env("HOST") or s.host
        s.port = int(_env("PORT") or s.port)
        return s
