from typing import Any, Optional, Sequence

from .. import config


class ValidationError(Exception):
    """Raised when submitted match input is invalid."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


def validate_strokes(
    value: Any,
    *,
    min_value: Optional[int] = None,
    max_value: Optional[int] = None,
) -> Optional[int]:
    """Normalise a submitted stroke count.

    ``None`` clears the entry and is returned unchanged. Anything else must be
    an integer (booleans are rejected) within ``min_value..max_value``, which
    default to the configured stroke bounds.
    """

    if value is None:
        return None

    low = config.MIN_STROKES if min_value is None else min_value
    high = config.MAX_STROKES if max_value is None else max_value

    # Reject booleans explicitly (bool is a subclass of int in Python)
    if isinstance(value, bool):
        raise ValidationError("Strokes must be an integer (not a boolean).")
    if isinstance(value, float) and not value.is_integer():
        raise ValidationError("Strokes must be a whole number.")
    try:
        strokes = int(value)
    except (TypeError, ValueError):
        raise ValidationError("Strokes must be an integer.")

    if strokes < low:
        raise ValidationError(f"Strokes must be >= {low}.")
    if strokes > high:
        raise ValidationError(f"Strokes must be <= {high}.")
    return strokes


def validate_team_names(names: Sequence[str]) -> None:
    """Each team needs a distinct display name; blanks become ``Team N``."""

    display = [
        (name or "").strip() or f"Team {position}"
        for position, name in enumerate(names, start=1)
    ]
    if len(set(display)) != len(display):
        raise ValidationError("Each team must have a unique name.")


def validate_game_formats(formats: Sequence[Any]) -> None:
    """Require at least one enabled format with a usable bet amount."""

    enabled = [f for f in formats if getattr(f, "enabled", False)]
    if not enabled:
        raise ValidationError("Please select at least one game format.")

    for fmt in enabled:
        amount = getattr(fmt, "betAmount", None)
        if isinstance(amount, bool):
            raise ValidationError(
                f"Bet amount for '{fmt.type}' must be a number."
            )
        try:
            value = float(amount)
        except (TypeError, ValueError):
            raise ValidationError(
                f"Bet amount for '{fmt.type}' must be a number."
            )
        if value != value or value < 0:
            raise ValidationError(
                f"Bet amount for '{fmt.type}' must be >= 0."
            )
    return None
