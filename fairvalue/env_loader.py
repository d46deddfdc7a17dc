"""
Environment Variable Loader

Loads FAIRVALUE_* settings from config/fairvalue.env so that
`Config.from_env()` sees them alongside the real process environment.

Usage:
    from fairvalue.env_loader import load_environment_variables

    load_environment_variables()                      # config/fairvalue.env
    load_environment_variables("staging.env", verbose=True)
"""

import os
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv

from fairvalue.logging_config import get_logger

logger = get_logger(__name__)

ENV_PREFIX = "FAIRVALUE_"
DEFAULT_ENV_FILE = Path(__file__).parent.parent / "config" / "fairvalue.env"


def load_environment_variables(env_file: Optional[str] = None, verbose: bool = False) -> bool:
    """
    Load environment variables from a .env file.

    Args:
        env_file: Path to .env file (default: config/fairvalue.env)
        verbose: Log which FAIRVALUE_* keys are now set

    Returns:
        True if the file was found and loaded, False otherwise
    """
    path = DEFAULT_ENV_FILE if env_file is None else Path(env_file)

    if not path.exists():
        if verbose:
            logger.info("Environment file not found: %s", path)
        return False

    # Existing process variables win over the file
    load_dotenv(path, override=False)

    if verbose:
        keys = sorted(fairvalue_settings())
        logger.info("Loaded environment variables from %s", path)
        if keys:
            logger.info("Active settings: %s", ", ".join(keys))

    return True


def fairvalue_settings() -> Dict[str, str]:
    """Return every FAIRVALUE_* variable currently in the environment."""
    return {
        key: value
        for key, value in os.environ.items()
        if key.startswith(ENV_PREFIX)
    }


__all__ = [
    "load_environment_variables",
    "fairvalue_settings",
]
