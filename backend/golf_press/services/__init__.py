"""Internal application services."""

from . import store
from .validation import (
    ValidationError,
    validate_game_formats,
    validate_strokes,
    validate_team_names,
)

__all__ = [
    "store",
    "ValidationError",
    "validate_game_formats",
    "validate_strokes",
    "validate_team_names",
]
