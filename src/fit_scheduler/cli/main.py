"""
CLI entry point using Typer.

Provides commands for weekly program management:
- init: Create the user profile
- plan: Generate and save a week of workouts
- show-program: Display a saved week
- status: Show recent performance and the week's difficulty
- log-session: Log a completed session
- show-history: Display session history
- next-week: Advance to the next training week
"""

from .app import app
from .commands import planning, profile, sessions  # noqa: F401  (registers commands)


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
