"""
Configuration management for the check-in automation.

Everything environment-derived is read here and handed to the rest of the
package as explicit values. Nothing below this module calls os.getenv.
"""
import os
import logging
import tempfile
from pathlib import Path
from typing import Optional, Dict, Any, Union

from dotenv import find_dotenv, load_dotenv

from checkin.checkin_models import TravelerCredential
from checkin.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://www.southwest.com"
DEFAULT_VIEWPORT = (1600, 1280)


def load_env_file(env_file: Optional[Union[str, Path]] = None) -> Optional[Path]:
    """
    Load a `.env` file into the process environment.

    Cron jobs do not run from the project directory, so an explicit path
    can be given. Without one, python-dotenv searches from the working
    directory upwards. Variables already set in the environment win.

    Returns:
        The path that was loaded, or None if no file was found
    """
    if env_file is not None:
        env_path = Path(env_file).expanduser()
        if not env_path.exists():
            raise ConfigurationError(f"Env file not found: {env_path}")
        load_dotenv(env_path)
        logger.debug(f"Loaded environment from {env_path}")
        return env_path

    found = find_dotenv(usecwd=True)
    if not found:
        return None
    load_dotenv(found)
    logger.debug(f"Loaded environment from {found}")
    return Path(found)


def load_traveler() -> TravelerCredential:
    """
    Load the traveler identity from environment variables.

    CHECKIN_NAME holds "First Last" and is split on the first space.
    CHECKIN_FIRST_NAME / CHECKIN_LAST_NAME override either half.

    Raises:
        ConfigurationError: If the confirmation code or either name is missing
    """
    confirmation = os.getenv("CHECKIN_CONFIRMATION", "")
    full_name = os.getenv("CHECKIN_NAME", "").strip()

    first_name, _, last_name = full_name.partition(" ")
    first_name = os.getenv("CHECKIN_FIRST_NAME") or first_name
    last_name = os.getenv("CHECKIN_LAST_NAME") or last_name

    if not confirmation.strip() or not first_name.strip() or not last_name.strip():
        raise ConfigurationError(
            "Please set `CHECKIN_CONFIRMATION` and `CHECKIN_NAME` "
            "(or `CHECKIN_FIRST_NAME` and `CHECKIN_LAST_NAME`)"
        )

    return TravelerCredential(
        confirmation=confirmation,
        first_name=first_name,
        last_name=last_name.strip(),
    )


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}")


def _get_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}")


def _get_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def get_app_config() -> Dict[str, Any]:
    """
    Get application configuration settings.

    Returns:
        Dictionary with application configuration
    """
    return {
        "base_url": (os.getenv("CHECKIN_BASE_URL") or DEFAULT_BASE_URL).rstrip("/"),
        "headless": _get_bool("CHECKIN_HEADLESS", True),
        "slow_mo": _get_int("CHECKIN_SLOW_MO", 0),
        "default_timeout": _get_int("CHECKIN_TIMEOUT", 30000),
        "max_attempts": _get_int("CHECKIN_MAX_ATTEMPTS", 3),
        "retry_delay": _get_float("CHECKIN_RETRY_DELAY", 2.0),
        "retry_site_errors": _get_bool("CHECKIN_RETRY_SITE_ERRORS", True),
        "artifact_dir": os.getenv("CHECKIN_ARTIFACT_DIR") or tempfile.gettempdir(),
        "settle_timeout": _get_int("CHECKIN_SETTLE_TIMEOUT", 15000),
        "settle_dwell": _get_int("CHECKIN_SETTLE_DWELL", 3000),
        "error_timeout": _get_int("CHECKIN_ERROR_TIMEOUT", 3000),
        "viewport": DEFAULT_VIEWPORT,
    }


def validate_config() -> TravelerCredential:
    """
    Validate that required configuration exists.

    Returns:
        The traveler to check in

    Raises:
        ConfigurationError: If configuration is invalid
    """
    try:
        traveler = load_traveler()
        app_config = get_app_config()

        logger.info("Configuration validated successfully")
        logger.info(f"Base URL: {app_config['base_url']}")
        logger.info(f"Traveler: {traveler.first_name} {traveler.last_name}")
        return traveler
    except ConfigurationError as e:
        logger.error(f"Configuration validation failed: {e}")
        raise
