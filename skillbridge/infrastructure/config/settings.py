"""Provides functions for loading and accessing configuration settings.

Supports loading from .env files, environment variables, and a dedicated
configuration file (~/.skillbridge/config.yaml).
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from skillbridge.domain.models.ai import GenerationConfig
from skillbridge.domain.models.common import RetryPolicy

logger = logging.getLogger(__name__)

# --- Configuration Constants ---
DEFAULT_CONFIG_DIR = Path.home() / ".skillbridge"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.yaml"
ENV_FILE_NAME = ".env"
SUPPORTED_PROVIDERS = ("gemini", "groq")
DEFAULT_SIGN_IN_URL = "https://accounts.skillbridge.app/sign-in"

# --- Global Configuration Store (Simple Approach) ---
_config: Dict[str, Any] = {}
_test_config: Dict[str, Any] = {}  # For testing purposes
_loaded = False

def load_configuration(config_file: Path = DEFAULT_CONFIG_FILE, env_file: Optional[Path] = None) -> None:
    """Loads configuration from environment, .env file, and YAML file.

    Priority order (highest to lowest):
    1. Environment Variables
    2. .env file
    3. YAML configuration file
    4. Default values passed to get_config

    Args:
        config_file: Path to the YAML configuration file.
        env_file: Path to the .env file (searches upwards from cwd if None).
    """
    global _config, _loaded
    if _loaded:
        logger.debug("Configuration already loaded.")
        return

    _config = {}

    # 1. Load from YAML file (Lowest priority)
    if config_file.exists():
        try:
            with open(config_file, 'r') as f:
                yaml_config = yaml.safe_load(f)
            if isinstance(yaml_config, dict):
                _config.update(_flatten(yaml_config))
                logger.info(f"Loaded configuration from YAML: {config_file}")
            elif yaml_config is not None:
                logger.warning(f"YAML config file {config_file} did not contain a dictionary.")
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to load or parse YAML config {config_file}: {e}")
    else:
        logger.debug(f"YAML config file not found: {config_file}")

    # 2. Load from .env file (Medium priority)
    dotenv_path = env_file or find_dotenv_path()
    if dotenv_path:
        # override=False: real environment variables take precedence
        if load_dotenv(dotenv_path=dotenv_path, override=False):
            logger.info(f"Loaded environment variables from: {dotenv_path}")
    else:
        logger.debug(".env file not found at or above current directory.")

    # 3. Environment Variables (Highest priority) are handled in get_config

    _loaded = True
    logger.info("Configuration loading process completed.")

def _flatten(tree: Dict[str, Any], prefix: str = "") -> Dict[str, Any]:
    """Turns nested YAML sections into dotted keys ({'ai': {'provider': x}} -> 'ai.provider')."""
    flat: Dict[str, Any] = {}
    for key, value in tree.items():
        dotted = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(_flatten(value, prefix=f"{dotted}."))
        else:
            flat[dotted] = value
    return flat

def _coerce(value: str) -> Any:
    """Converts common string forms from the environment to Python values."""
    if value.lower() == 'true':
        return True
    if value.lower() == 'false':
        return False
    try:
        if '.' in value:
            return float(value)
        return int(value)
    except (ValueError, TypeError):
        return value

def get_config(key: str, default: Any = None) -> Any:
    """
    Get a configuration value by key.

    Priority:
    1. Test configuration (if in testing mode)
    2. Environment variable ('cache.max_items' -> CACHE_MAX_ITEMS)
    3. YAML config
    4. Default value

    Args:
        key: The configuration key
        default: Default value if the key is not found

    Returns:
        The configuration value
    """
    if key in _test_config:
        return _test_config[key]

    env_key = key.upper().replace('.', '_')
    if env_key in os.environ:
        return _coerce(os.environ[env_key])

    if key in _config:
        return _config[key]

    logger.debug(f"Config key '{key}' not found in environment or loaded config. Returning default: {default}")
    return default

def get_secret(env_key: str, config_key: Optional[str] = None) -> Optional[str]:
    """Gets a key or token verbatim: environment values are never coerced.

    Priority: test configuration, the environment variable `env_key`,
    then `config_key` from the YAML config.
    """
    if env_key in _test_config:
        value = _test_config[env_key]
    elif env_key in os.environ:
        value = os.environ[env_key]
    else:
        value = _config.get(config_key) if config_key else None
    return str(value) if value not in (None, "") else None

def find_dotenv_path() -> Optional[Path]:
    """Searches for the .env file upwards from the current directory."""
    cwd = Path.cwd()
    for path in [cwd] + list(cwd.parents):
        env_path = path / ENV_FILE_NAME
        if env_path.is_file():
            return env_path
    return None

# --- Convenience Functions ---

def get_ai_provider() -> str:
    """Gets the configured AI provider ('gemini' or 'groq')."""
    provider = str(get_config('ai.provider', 'gemini')).lower()
    if provider not in SUPPORTED_PROVIDERS:
        logger.warning(f"Unknown AI provider '{provider}', using 'gemini'.")
        return 'gemini'
    return provider

def get_api_key(provider: Optional[str] = None) -> Optional[str]:
    """Gets the API key for a provider (GEMINI_API_KEY / GROQ_API_KEY)."""
    selected = provider or get_ai_provider()
    return get_secret(f'{selected.upper()}_API_KEY', f'{selected}.api_key')

def get_model_name(provider: Optional[str] = None) -> Optional[str]:
    """Gets the model override for a provider, if any."""
    selected = provider or get_ai_provider()
    model = get_config(f'ai.{selected}.model')
    return str(model) if model is not None else None

def get_base_url(provider: Optional[str] = None) -> Optional[str]:
    """Gets the endpoint override for a provider, if any."""
    selected = provider or get_ai_provider()
    url = get_config(f'ai.{selected}.base_url')
    return str(url) if url else None

def get_generation_config() -> GenerationConfig:
    """Builds sampling parameters from 'ai.generation.*' keys."""
    defaults = GenerationConfig()
    top_k = get_config('ai.generation.top_k', defaults.top_k)
    return GenerationConfig(
        temperature=float(get_config('ai.generation.temperature', defaults.temperature)),
        top_p=float(get_config('ai.generation.top_p', defaults.top_p)),
        top_k=int(top_k) if top_k is not None else None,
        max_output_tokens=int(get_config('ai.generation.max_output_tokens', defaults.max_output_tokens)),
    )

def get_retry_policy() -> RetryPolicy:
    """Builds the retry policy from 'retry.*' keys."""
    defaults = RetryPolicy()
    timeout = get_config('retry.timeout_s', defaults.timeout_s)
    return RetryPolicy(
        max_retries=int(get_config('retry.max_retries', defaults.max_retries)),
        base_delay_s=float(get_config('retry.base_delay_s', defaults.base_delay_s)),
        timeout_s=float(timeout) if timeout else None,
        max_jitter_s=float(get_config('retry.max_jitter_s', defaults.max_jitter_s)),
    )

def get_cache_max_items() -> int:
    return int(get_config('cache.max_items', 100))

def get_auth_settings() -> Dict[str, Any]:
    """Returns auth boundary settings: required flag, session token, sign-in URL."""
    return {
        'required': bool(get_config('auth.required', False)),
        'session_token': get_secret('SKILLBRIDGE_SESSION_TOKEN', 'auth.session_token'),
        'sign_in_url': str(get_config('auth.sign_in_url', DEFAULT_SIGN_IN_URL)),
    }

def set_config_for_testing(config_dict: Dict[str, Any]) -> None:
    """
    Set configuration values for testing purposes.
    These values will override any existing configuration.

    Args:
        config_dict: Dictionary of configuration values to set
    """
    _test_config.update(config_dict)
    logger.debug(f"Set testing configuration: {config_dict}")

def clear_test_config() -> None:
    """Clear all testing configuration values."""
    _test_config.clear()
    logger.debug("Cleared testing configuration")
