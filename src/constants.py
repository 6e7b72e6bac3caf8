"""Constants used in the project."""

import logging
import os
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    API_BASE_URL = "https://stacksmith.bitnami.com/api/v1/"
    COMPONENTS_PATH = "components"
    OPERATING_SYSTEMS_PATH = "oses"
    STACKS_PATH = "stacks"
    DOCKERFILE_URL_POSTFIX = ".dockerfile"
    NONE_ID = "NONE"  # "no selection" marker for requirements
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests
    USER_AGENT = "stacksmith-client/0.1"
    LOG_FORMAT = "[%(levelname)s] %(message)s"

    # Environment and config file lookup
    ENV_CONFIG_PATH = "STACKSMITH_CONFIG"
    ENV_API_BASE_URL = "STACKSMITH_API_BASE_URL"
    ENV_REQUEST_TIMEOUT = "STACKSMITH_REQUEST_TIMEOUT"
    ENV_LOG_LEVEL = "STACKSMITH_LOG_LEVEL"
    CONFIG_FILE_NAME = "stacksmith.yml"
    CONFIG_DIR = os.path.join("~", ".config", "stacksmith")


def _normalize_base_url(url: str) -> str:
    url = str(url).strip()
    return url if url.endswith("/") else url + "/"


def _config_candidates() -> list:
    """Return YAML config paths in lookup order."""
    paths = []
    env_path = os.environ.get(Constants.ENV_CONFIG_PATH)
    if env_path and env_path.strip():
        paths.append(env_path.strip())
    paths.append(os.path.join(os.getcwd(), Constants.CONFIG_FILE_NAME))
    paths.append(os.path.expanduser(os.path.join(Constants.CONFIG_DIR, Constants.CONFIG_FILE_NAME)))
    return paths


def _load_yaml_config(paths: Optional[list] = None) -> Dict[str, Any]:
    """Load the first readable YAML mapping from the config search path.

    Missing files are skipped silently; unreadable or malformed files are
    logged and skipped so configuration problems never break a caller.
    """
    import yaml  # pylint: disable=import-outside-toplevel

    for path in paths if paths is not None else _config_candidates():
        if not os.path.isfile(path):
            continue
        try:
            with open(path, "r", encoding="utf-8") as fh:
                data = yaml.safe_load(fh)
        except (OSError, yaml.YAMLError) as exc:
            logger.warning("Ignoring config file %s: %s", path, exc)
            continue
        if isinstance(data, dict):
            return data
        logger.warning("Ignoring config file %s: top level is not a mapping", path)
    return {}


def apply_config(cfg: Dict[str, Any]) -> None:
    """Apply a loaded config mapping onto Constants.

    Recognized keys live under ``api``: ``base_url``, ``request_timeout`` and
    ``user_agent``. Bad values are logged and skipped.
    """
    api = cfg.get("api") if isinstance(cfg, dict) else None
    if not isinstance(api, dict):
        return
    if api.get("base_url"):
        Constants.API_BASE_URL = _normalize_base_url(api["base_url"])
    if api.get("request_timeout") is not None:
        try:
            Constants.REQUEST_TIMEOUT = float(api["request_timeout"])
        except (TypeError, ValueError):
            logger.warning("Invalid api.request_timeout in config: %r", api["request_timeout"])
    if api.get("user_agent"):
        Constants.USER_AGENT = str(api["user_agent"])


def apply_env_overrides(environ: Optional[Dict[str, str]] = None) -> None:
    """Apply environment overrides, which take precedence over YAML config."""
    env = os.environ if environ is None else environ
    base_url = env.get(Constants.ENV_API_BASE_URL)
    if base_url and base_url.strip():
        Constants.API_BASE_URL = _normalize_base_url(base_url)
    timeout = env.get(Constants.ENV_REQUEST_TIMEOUT)
    if timeout:
        try:
            Constants.REQUEST_TIMEOUT = float(timeout)
        except ValueError:
            logger.warning("Invalid %s: %r", Constants.ENV_REQUEST_TIMEOUT, timeout)


def load_config() -> None:
    """Load YAML config then environment overrides into Constants."""
    apply_config(_load_yaml_config())
    apply_env_overrides()
