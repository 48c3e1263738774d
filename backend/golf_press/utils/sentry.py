import logging
import os
from typing import Any, Dict, Optional

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration

from ..config import _float_env

logger = logging.getLogger(__name__)


def _env_or_none(name: str) -> Optional[str]:
    return (os.getenv(name) or "").strip() or None


def _sentry_options() -> Optional[Dict[str, Any]]:
    """Keyword arguments for ``sentry_sdk.init``, or ``None`` without a DSN."""

    dsn = _env_or_none("SENTRY_DSN")
    if dsn is None:
        return None
    return {
        "dsn": dsn,
        "environment": _env_or_none("SENTRY_ENVIRONMENT"),
        "release": _env_or_none("SENTRY_RELEASE"),
        "traces_sample_rate": _float_env("SENTRY_TRACES_SAMPLE_RATE", 0.0),
        "profiles_sample_rate": _float_env("SENTRY_PROFILES_SAMPLE_RATE", 0.0),
    }


def _init_sentry() -> bool:
    options = _sentry_options()
    if options is None:
        logger.info("SENTRY_DSN not provided; skipping Sentry initialization.")
        return False

    sentry_sdk.init(integrations=[FastApiIntegration()], **options)
    logger.info(
        "Initialized Sentry (environment=%s, release=%s)",
        options["environment"] or "default",
        options["release"] or "unset",
    )
    return True
