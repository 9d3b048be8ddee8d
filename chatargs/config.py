"""Configuration loading and environment setup."""
import os
import time
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from .exceptions import ConfigurationError
from .utils.logging import get_logger

logger = get_logger(__name__)

# Load environment variables from .env in the working directory, then from the
# project root in case we're running from a subdirectory
load_dotenv(dotenv_path=Path.cwd() / '.env', verbose=False)
load_dotenv(dotenv_path=Path(__file__).parent.parent / '.env', verbose=False)

DEFAULT_COMMAND_PREFIX = "!"


def _clean_env_value(value: Optional[str]) -> Optional[str]:
    """Clean environment variable value by removing inline comments."""
    if not value:
        return value
    # Split on # and take the first part, then strip whitespace
    return value.split('#')[0].strip()


def validate_command_prefix(prefix: Optional[str]) -> str:
    """
    Validate a command prefix.

    Raises:
        ConfigurationError: if the prefix is empty or contains whitespace,
            since tokens are split on whitespace and could never match it
    """
    if not prefix:
        raise ConfigurationError("COMMAND_PREFIX must not be empty")
    if any(ch.isspace() for ch in prefix):
        raise ConfigurationError(f"COMMAND_PREFIX must not contain whitespace: {prefix!r}")
    return prefix


# Global config cache
_config_cache: Optional[Dict[str, Any]] = None
_cache_timestamp: float = 0
CACHE_TTL = 300  # 5 minute cache TTL


def load_config(reload: bool = False) -> Dict[str, Any]:
    """
    Load configuration from environment variables with caching.

    Args:
        reload: Bypass the cache and re-read the environment

    Returns:
        A dict with COMMAND_PREFIX, LOG_LEVEL, LOG_JSONL_PATH and
        THIRD_PARTY_LOG_LEVEL
    """
    global _config_cache, _cache_timestamp

    current_time = time.time()
    if not reload and _config_cache and (current_time - _cache_timestamp) < CACHE_TTL:
        return _config_cache

    # '#' is a plausible prefix, so it is read raw rather than comment-stripped
    raw_prefix = os.getenv("COMMAND_PREFIX")
    prefix = raw_prefix.strip() if raw_prefix is not None else DEFAULT_COMMAND_PREFIX

    config = {
        "COMMAND_PREFIX": validate_command_prefix(prefix),
        "LOG_LEVEL": (_clean_env_value(os.getenv("LOG_LEVEL")) or "INFO").upper(),
        "LOG_JSONL_PATH": _clean_env_value(os.getenv("LOG_JSONL_PATH")) or "logs/chatargs.jsonl",
        "THIRD_PARTY_LOG_LEVEL": (
            _clean_env_value(os.getenv("THIRD_PARTY_LOG_LEVEL")) or "WARNING"
        ).upper(),
    }

    logger.debug(f"Loaded config with prefix '{config['COMMAND_PREFIX']}'",
                 extra={'subsys': 'config', 'event': 'config.loaded'})

    _config_cache = config
    _cache_timestamp = current_time
    return config
