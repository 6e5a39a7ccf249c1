"""
Exercise catalog for fit-scheduler.

Exercise templates are grouped per equipment class and muscle group and
loaded from bundled YAML tables.
"""

from .loader import EquipmentTable
from .registry import ExerciseCatalog, load_catalog

__all__ = [
    "EquipmentTable",
    "ExerciseCatalog",
    "load_catalog",
]
