"""Startup settings, optionally overridden from the environment."""
import logging
import os

from pairs.settings import ConfigurationError, GameSettings

logger = logging.getLogger(__name__)

ENV_OVERRIDES = {
    "rows": "PAIRS_ROWS",
    "columns": "PAIRS_COLUMNS",
    "group_size": "PAIRS_GROUP_SIZE",
    "start_symbol": "PAIRS_START_SYMBOL",
    "move_timeout_seconds": "PAIRS_MOVE_TIMEOUT",
}


def load_settings(environ=None) -> GameSettings:
    """Build the startup ``GameSettings``; invalid overrides fall back to the defaults."""
    environ = os.environ if environ is None else environ
    values = {}
    for field_name, env_name in ENV_OVERRIDES.items():
        raw = environ.get(env_name)
        if raw is None or raw == "":
            continue
        try:
            values[field_name] = int(raw)
        except ValueError:
            logger.warning("Ignoring %s=%r: not an integer", env_name, raw)
    settings = GameSettings(**values)
    try:
        return settings.validate()
    except ConfigurationError as exc:
        logger.warning("Ignoring environment settings: %s", exc)
        return GameSettings()
