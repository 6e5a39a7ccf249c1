"""
YAML → exercise table loader.

Loads one exercise table per equipment class from the bundled
``src/fit_scheduler/exercises/`` directory (dumbbells.yaml, none.yaml).

User overrides: place matching files in ``~/.fit-scheduler/exercises/``.
A user file is deep-merged over the bundled table, so only changed keys
need to be listed (a muscle-group list replaces the bundled list).  A user
file for an equipment class with no bundled counterpart is ignored, since
the profile cannot select it.

Usage (internal, called by registry.py):
    from .loader import load_tables_from_yaml
    tables = load_tables_from_yaml()
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass
from pathlib import Path

from ..engine.config_loader import deep_merge, get_app_home, load_yaml_file
from ..models import EQUIPMENT_CLASSES, MUSCLE_GROUPS, Exercise

_REQUIRED_EXERCISE_FIELDS: frozenset[str] = frozenset(
    {"name_key", "muscle_groups", "sets", "reps", "rest_seconds"}
)


@dataclass(frozen=True)
class EquipmentTable:
    """All exercise templates available for one equipment class."""

    equipment: str
    groups: dict[str, tuple[Exercise, ...]]
    finisher: Exercise


def exercise_from_dict(d: dict, equipment: str) -> Exercise:
    """Convert a raw dict (from YAML) to an Exercise.

    Raises ValueError if any required field is absent or a muscle group
    is unknown.
    """
    missing = _REQUIRED_EXERCISE_FIELDS - set(d)
    if missing:
        raise ValueError(f"exercise missing fields: {sorted(missing)}")

    groups = tuple(str(g) for g in d["muscle_groups"])
    unknown = [g for g in groups if g not in MUSCLE_GROUPS]
    if unknown:
        raise ValueError(f"unknown muscle groups {unknown} in {d['name_key']!r}")

    tempo = d.get("tempo")
    notes_key = d.get("notes_key")
    return Exercise(
        name_key=str(d["name_key"]),
        muscle_groups=groups,
        equipment=equipment,  # type: ignore[arg-type]
        sets=int(d["sets"]),
        reps=int(d["reps"]),
        tempo=str(tempo) if tempo is not None else None,
        rest_seconds=int(d["rest_seconds"]),
        notes_key=str(notes_key) if notes_key is not None else None,
    )


def table_from_dict(d: dict, equipment: str) -> EquipmentTable:
    """Convert a raw equipment table to an EquipmentTable.

    Invalid exercises are skipped with a warning; a missing finisher or
    a non-mapping ``groups`` section raises ValueError.
    """
    if "finisher" not in d:
        raise ValueError("table has no finisher")
    raw_groups = d.get("groups") or {}
    if not isinstance(raw_groups, dict):
        raise ValueError("'groups' must be a mapping of muscle group to exercise list")

    groups: dict[str, tuple[Exercise, ...]] = {}
    for group, entries in raw_groups.items():
        if group not in MUSCLE_GROUPS:
            warnings.warn(f"fit-scheduler: skipping unknown muscle group {group!r}", stacklevel=2)
            continue
        parsed: list[Exercise] = []
        for entry in entries or []:
            try:
                parsed.append(exercise_from_dict(entry, equipment))
            except (ValueError, TypeError) as exc:
                warnings.warn(
                    f"fit-scheduler: skipping exercise in {equipment}/{group}: {exc}",
                    stacklevel=2,
                )
        groups[group] = tuple(parsed)

    return EquipmentTable(
        equipment=equipment,
        groups=groups,
        finisher=exercise_from_dict(d["finisher"], equipment),
    )


def get_bundled_exercises_dir() -> Path:
    """Return path to the bundled exercises/ data directory."""
    # loader.py lives at src/fit_scheduler/core/catalog/loader.py
    # three levels up → src/fit_scheduler/
    return Path(__file__).parent.parent.parent / "exercises"


def get_user_exercises_dir() -> Path | None:
    """Return ~/.fit-scheduler/exercises/ if it exists, else None."""
    p = get_app_home() / "exercises"
    return p if p.is_dir() else None


def load_tables_from_yaml(
    bundled_dir: Path | None = None,
    user_dir: Path | None = None,
) -> dict[str, EquipmentTable]:
    """Return {equipment: EquipmentTable} loaded from per-equipment YAML files.

    Args:
        bundled_dir: Directory with <equipment>.yaml files (default: bundled data)
        user_dir: Override directory (default: ~/.fit-scheduler/exercises/ if present)

    Returns:
        Tables for every equipment class that loaded successfully.
    """
    bundled_dir = bundled_dir if bundled_dir is not None else get_bundled_exercises_dir()
    user_dir = user_dir if user_dir is not None else get_user_exercises_dir()

    tables: dict[str, EquipmentTable] = {}
    for equipment in EQUIPMENT_CLASSES:
        path = bundled_dir / f"{equipment}.yaml"
        if not path.exists():
            continue
        raw = load_yaml_file(path)
        if user_dir is not None:
            user_path = user_dir / f"{equipment}.yaml"
            if user_path.exists():
                raw = deep_merge(raw, load_yaml_file(user_path))
        try:
            tables[equipment] = table_from_dict(raw, equipment)
        except (ValueError, TypeError) as exc:
            warnings.warn(
                f"fit-scheduler: skipping exercise table '{equipment}': {exc}",
                stacklevel=2,
            )
    return tables
