"""Shared Typer app object, shared option types, and store utility."""

from pathlib import Path
from typing import Annotated, Optional

import typer

from ..core.catalog import ExerciseCatalog, load_catalog
from ..core.engine.config_loader import Settings, load_settings
from ..core.models import UserProfile
from ..io.profile_store import ProfileStore, get_default_data_dir
from . import views

# Shared --data-dir option type used across all commands
DataDirOption = Annotated[
    Optional[Path],
    typer.Option("--data-dir", "-p", help="Data directory (default: ~/.fit-scheduler)"),
]

JsonOption = Annotated[
    bool,
    typer.Option("--json", "-j", help="Output as JSON for machine processing"),
]

app = typer.Typer(
    name="fit-scheduler",
    help="Adaptive weekly workout planner for dumbbell and bodyweight training.",
    no_args_is_help=True,
)


def get_store(data_dir: Path | None) -> ProfileStore:
    """Get profile store from path or the default location."""
    if data_dir is None:
        data_dir = get_default_data_dir()
    return ProfileStore(data_dir)


def require_profile(store: ProfileStore) -> UserProfile:
    """
    Load the profile or exit with an error.

    Raises:
        typer.Exit: If no valid profile exists
    """
    profile = store.load_profile()
    if profile is None:
        views.print_error(f"Profile not found: {store.profile_path}")
        views.print_info("Run 'init' first to create a profile.")
        raise typer.Exit(1)
    return profile


def get_settings() -> Settings:
    """Runtime settings from ~/.fit-scheduler/config.yaml (defaults if absent)."""
    return load_settings()


def get_catalog() -> ExerciseCatalog:
    """
    Load the exercise catalog or exit with an error.

    Raises:
        typer.Exit: If no exercise table can be loaded
    """
    try:
        return load_catalog()
    except RuntimeError as e:
        views.print_error(str(e))
        raise typer.Exit(1)
