import logging
import os

logger = logging.getLogger(__name__)


def _canon_prefix(val: str | None) -> str:
    """Return ``val`` as "/segment" with no trailing slash; "/api" when unset."""
    val = (val or "").strip().strip("/")
    return "/" + (val or "api")


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("%s is not a valid integer (got %r); defaulting to %d", name, raw, default)
        return default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("%s is not a valid float (got %r); defaulting to %.2f", name, raw, default)
        return default
    if value < 0:
        logger.warning("%s cannot be negative; defaulting to %.2f", name, default)
        return default
    return value


API_PREFIX = _canon_prefix(os.getenv("API_PREFIX"))

# Plausible strokes for a single hole; anything outside is rejected on input.
MIN_STROKES = _int_env("MIN_STROKES", 1)
MAX_STROKES = _int_env("MAX_STROKES", 15)
if MIN_STROKES > MAX_STROKES:
    raise ValueError("MIN_STROKES must not exceed MAX_STROKES")

DEFAULT_BET_AMOUNT = _float_env("DEFAULT_BET_AMOUNT", 10.0)

WRITE_RATE_LIMIT = os.getenv("WRITE_RATE_LIMIT", "60/minute")
