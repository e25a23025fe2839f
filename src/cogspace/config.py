"""
Configuration and logging setup.

Settings are read from the environment (optionally seeded from a .env
file) with COGSPACE_ prefixed variables:

    COGSPACE_EMBEDDING_DIM      embedding size passed to new stores (32)
    COGSPACE_MAX_NAME_LENGTH    atom name storage bound (255)
    COGSPACE_LOG_LEVEL          logging level name (INFO)
    COGSPACE_AGENT_FREQUENCY    default agent frequency in cycles (1)
"""

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

from cogspace.atoms.types import MAX_NAME_LENGTH

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
HANDLER_NAME = "cogspace"


def _env_int(key: str, default: int) -> int:
    raw = os.getenv(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from None


@dataclass
class CogSpaceConfig:
    """
    Runtime settings for stores and servers.

    Attributes:
        embedding_dim: Embedding size accepted by AtomSpace
        max_name_length: Names longer than this are truncated
        log_level: Level name for setup_logging
        default_agent_frequency: Frequency used when none is given
    """
    embedding_dim: int = 32
    max_name_length: int = MAX_NAME_LENGTH
    log_level: str = "INFO"
    default_agent_frequency: int = 1

    @classmethod
    def from_env(cls, env_file: Optional[Union[str, Path]] = None) -> "CogSpaceConfig":
        """
        Build a config from environment variables.

        Args:
            env_file: Optional .env path; variables already set in the
                environment take precedence over the file

        Returns:
            CogSpaceConfig with defaults for anything unset
        """
        if env_file is not None:
            load_dotenv(dotenv_path=env_file)
        else:
            load_dotenv()

        return cls(
            embedding_dim=_env_int("COGSPACE_EMBEDDING_DIM", cls.embedding_dim),
            max_name_length=_env_int("COGSPACE_MAX_NAME_LENGTH", cls.max_name_length),
            log_level=os.getenv("COGSPACE_LOG_LEVEL", cls.log_level).upper(),
            default_agent_frequency=_env_int("COGSPACE_AGENT_FREQUENCY",
                                             cls.default_agent_frequency),
        )


def setup_logging(level: Union[int, str, "CogSpaceConfig"] = logging.INFO) -> logging.Logger:
    """
    Send cogspace log records to stdout.

    Safe to call more than once; the handler is installed only once.

    Args:
        level: Logging level (int or level name), or a CogSpaceConfig
            whose log_level is used

    Returns:
        The configured `cogspace` logger
    """
    if isinstance(level, CogSpaceConfig):
        level = level.log_level

    logger = logging.getLogger("cogspace")
    logger.setLevel(level)

    if not any(h.get_name() == HANDLER_NAME for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler.set_name(HANDLER_NAME)
        logger.addHandler(handler)

    return logger
