"""
Exercise catalog.

Read-only lookup of exercise templates by equipment class and muscle
group.  Tables are loaded from the bundled YAML files; if none can be
loaded a RuntimeError is raised; the engine cannot generate programs
without exercise data.
"""

from pathlib import Path

from ..models import Exercise
from .loader import EquipmentTable, load_tables_from_yaml


class ExerciseCatalog:
    """
    Lookup collaborator for the split planner.

    Args:
        tables: {equipment: EquipmentTable}
    """

    def __init__(self, tables: dict[str, EquipmentTable]):
        self._tables = dict(tables)

    @property
    def equipment_classes(self) -> list[str]:
        """Equipment classes with a loaded table."""
        return list(self._tables)

    def exercises_for(self, equipment: str, muscle_group: str) -> list[Exercise]:
        """
        Return the templates for one bucket, in catalog order.

        A missing equipment table or muscle group yields an empty list;
        callers skip empty buckets.
        """
        table = self._tables.get(equipment)
        if table is None:
            return []
        return list(table.groups.get(muscle_group, ()))

    def finisher_for(self, equipment: str) -> Exercise:
        """
        Return the challenge finisher for an equipment class.

        Raises:
            ValueError: If no table is loaded for the equipment class
        """
        if equipment not in self._tables:
            valid = ", ".join(self._tables)
            raise ValueError(f"Unknown equipment '{equipment}'. Valid: {valid}")
        return self._tables[equipment].finisher

    def find(self, name_key: str) -> Exercise | None:
        """Return the first template with the given key across all tables."""
        for table in self._tables.values():
            for exercises in table.groups.values():
                for ex in exercises:
                    if ex.name_key == name_key:
                        return ex
        return None


def load_catalog(
    bundled_dir: Path | None = None,
    user_dir: Path | None = None,
) -> ExerciseCatalog:
    """
    Build an ExerciseCatalog from YAML.

    Raises:
        RuntimeError: If no exercise table could be loaded
    """
    tables = load_tables_from_yaml(bundled_dir, user_dir)
    if not tables:
        raise RuntimeError(
            "fit-scheduler: no exercise tables could be loaded from YAML. "
            "Check that src/fit_scheduler/exercises/*.yaml files are present and valid."
        )
    return ExerciseCatalog(tables)
