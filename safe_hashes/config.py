"""
safe-hashes configuration.

Values come from the environment, optionally seeded from a ``.env`` file in
the working directory. CLI options take precedence over all of these.

ENV VARS (all optional):
    SAFE_HASHES_TIMEOUT     request timeout in seconds for the transaction service (default 30)
    SAFE_HASHES_RETRIES     connection retries for the transaction service (default 3)
    SAFE_HASHES_RPC_URL     JSON-RPC endpoint for the on-chain cross-check
    SAFE_HASHES_LOG_LEVEL   logging level on stderr (default WARNING)
    SAFE_HASHES_OUTPUT      default output format, 'terminal' or 'json'

A value that cannot be used is reported on stderr and replaced by its default.
"""

import logging
import os

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)

load_dotenv(find_dotenv(usecwd=True))

OUTPUT_FORMATS = ("terminal", "json")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _ignored(name, raw, default):
    logger.warning("ignoring %s=%r, using %r", name, raw, default)
    return default


def _number(name, default, cast):
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = cast(raw)
    except ValueError:
        return _ignored(name, raw, default)
    if value < 0:
        return _ignored(name, raw, default)
    return value


def _choice(name, default, choices):
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    if raw.lower() in choices:
        return raw.lower()
    if raw.upper() in choices:
        return raw.upper()
    return _ignored(name, raw, default)


TIMEOUT = _number("SAFE_HASHES_TIMEOUT", 30.0, float)
RETRIES = _number("SAFE_HASHES_RETRIES", 3, int)
RPC_URL = os.getenv("SAFE_HASHES_RPC_URL") or None
LOG_LEVEL = _choice("SAFE_HASHES_LOG_LEVEL", "WARNING", LOG_LEVELS)
OUTPUT = _choice("SAFE_HASHES_OUTPUT", "terminal", OUTPUT_FORMATS)
