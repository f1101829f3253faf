"""
GitHub token lookup.

The token is taken from the GITHUB_TOKEN environment variable, falling back
to a GITHUB_TOKEN line in a local .env file. The .env file is read with
python-dotenv without touching os.environ.
"""

import logging
import os
from pathlib import Path
from typing import Mapping, Optional, Union

from dotenv import dotenv_values

from config import DEFAULT_ENV_FILE, TOKEN_ENV_VAR
from errors import MissingCredentialError


def resolve_token(
        environ: Optional[Mapping[str, str]] = None,
        env_file: Union[str, Path] = DEFAULT_ENV_FILE,
        logger: Optional[logging.Logger] = None
) -> str:
    """
    Return the GitHub access token for this run.

    Args:
        environ (Optional[Mapping[str, str]]): Environment to read from.
            Defaults to os.environ.
        env_file (Union[str, Path]): Fallback key-value file, relative to the
            working directory.
        logger (Optional[logging.Logger]): Logger for debugging output.

    Returns:
        str: Non-empty token with surrounding whitespace removed.

    Raises:
        MissingCredentialError: If neither source provides a token.
    """
    logger = logger or logging.getLogger(__name__)
    environ = os.environ if environ is None else environ

    token = (environ.get(TOKEN_ENV_VAR) or '').strip()
    if token:
        logger.debug(f"Using {TOKEN_ENV_VAR} from the environment")
        return token

    env_path = Path(env_file)
    if env_path.is_file():
        token = (dotenv_values(env_path).get(TOKEN_ENV_VAR) or '').strip()
        if token:
            logger.debug(f"Using {TOKEN_ENV_VAR} from {env_path}")
            return token
        logger.debug(f"{env_path} has no {TOKEN_ENV_VAR} entry")

    raise MissingCredentialError(
        f"Missing GitHub token: set the {TOKEN_ENV_VAR} environment variable "
        f"or add {TOKEN_ENV_VAR}=<token> to {env_path}"
    )
