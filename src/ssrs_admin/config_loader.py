"""
Configuration Loader.

Responsible for reading the config.yaml file and resolving the
report server connection settings from it, the environment, and
command-line overrides.
"""
import os
import yaml
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from ssrs_admin.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_URI = "http://localhost/ReportServer"
AUTH_METHODS = ("ntlm", "basic", "none")


@dataclass(frozen=True, kw_only=True)
class ServerSettings:
    """Everything needed to open a connection to one report server."""
    uri: str = DEFAULT_URI
    auth: str = "ntlm"
    username: Optional[str] = None
    password: Optional[str] = None
    timeout: float = 30.0
    verify_ssl: bool = True

    @property
    def wsdl_url(self) -> str:
        return f"{self.uri.rstrip('/')}/ReportService2010.asmx?wsdl"


def load_config(config_path: str = "config.yaml") -> Dict[str, Any]:
    """
    Loads the YAML configuration file.
    """
    path = Path(config_path)
    if not path.exists():
        logger.warning(f"Config file not found at {path}. Using defaults.")
        return {}

    try:
        with open(path, 'r') as f:
            config = yaml.safe_load(f) or {}
            logger.info(f"Loaded configuration from {path}")
            return config
    except Exception as e:
        logger.error(f"Failed to parse config file: {e}")
        raise


def resolve_server_settings(config: Dict[str, Any], **overrides: Any) -> ServerSettings:
    """
    Builds ServerSettings from the `report_server` section of the config.

    Precedence: keyword overrides (None values ignored), then the
    SSRS_USERNAME / SSRS_PASSWORD environment variables, then the file.
    """
    server_conf = dict(config.get('report_server') or {})

    if os.getenv("SSRS_USERNAME"):
        server_conf['username'] = os.environ["SSRS_USERNAME"]
    if os.getenv("SSRS_PASSWORD"):
        server_conf['password'] = os.environ["SSRS_PASSWORD"]

    server_conf.update({key: value for key, value in overrides.items() if value is not None})

    uri = server_conf.get('uri', DEFAULT_URI)
    if not uri:
        raise ConfigurationError("report_server.uri must not be empty.")

    auth = str(server_conf.get('auth', 'ntlm')).lower()
    if auth not in AUTH_METHODS:
        raise ConfigurationError(f"Unknown auth method '{auth}'. Expected one of: {', '.join(AUTH_METHODS)}.")

    try:
        timeout = float(server_conf.get('timeout', 30))
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"report_server.timeout must be a number: {e}") from e

    settings = ServerSettings(
        uri=uri,
        auth=auth,
        username=server_conf.get('username'),
        password=server_conf.get('password'),
        timeout=timeout,
        verify_ssl=bool(server_conf.get('verify_ssl', True)),
    )
    logger.debug(f"Resolved report server settings: uri={settings.uri} auth={settings.auth} user={settings.username}")
    return settings
