"""Environment variable handling for schema_runtime.

Option defaults are read from the process environment only. Applications
that keep settings in .env files load them once at startup:

    from schema_runtime import load_env_files

    load_env_files()                      # nearest .env from the cwd upwards
    load_env_files("deploy/.env", override=True)
"""

import logging
import os
from pathlib import Path
from typing import List, Optional, Union

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)


def load_env_files(
    *env_files: Union[str, Path], override: bool = False
) -> List[Path]:
    """Load .env files into the process environment.

    Files are applied in the order given, so with `override` set later
    files win. Without arguments the nearest .env found from the working
    directory upwards is loaded. Missing files are skipped.

    Args:
        env_files: Paths of .env files to load
        override: Whether file values replace variables that are already set

    Returns:
        The files that were loaded
    """
    if not env_files:
        found = find_dotenv(usecwd=True)
        env_files = (found,) if found else ()

    loaded = []
    for env_file in env_files:
        path = Path(env_file)
        if not path.is_file():
            logger.debug(f"Skipping missing env file: {path}")
            continue
        logger.debug(f"Loading env file: {path}")
        load_dotenv(path, override=override)
        loaded.append(path)
    return loaded


def get_env_var(key: str, default: Optional[str] = None) -> Optional[str]:
    """Get an environment variable without touching any .env file."""
    return os.getenv(key, default)
