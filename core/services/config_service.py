"""Configuration service implementation."""

import json
import os
import yaml
import logging
from pathlib import Path
from typing import Dict, Any, List, Mapping, Optional

from core.exceptions import ConfigurationError
from core.models.config import BuildResult, LaunchConfig, LogLevel, ServiceConfig
from core.models.instance import InstanceStatusCode

# Environment variable -> (section, key)
ENVIRONMENT_OVERRIDES = {
    "LAUNCHER_URL": ("service", "url"),
    "LAUNCHER_LOGIN": ("service", "login"),
    "LAUNCHER_PASSWORD": ("service", "password"),
    "LAUNCHER_POLLING_INTERVAL": ("service", "status_polling_interval"),
    "LAUNCHER_GRACE_PERIOD": ("service", "return_values_grace_period"),
    "LAUNCHER_SHARED_ROOT": ("service", "shared_root"),
    "LAUNCHER_AWS_REGION": ("service", "aws_region"),
    "LAUNCHER_AWS_RUN_MODE": ("service", "aws_run_mode"),
    "LAUNCHER_LOG_LEVEL": ("service", "log_level"),
}


class ConfigService:
    """Loads service and launch configuration from YAML.

    Example file::

        service:
          url: https://express.example.com
          login: ci@example.com
          password: secret
          status_polling_interval: 5
        launch:
          application_id: 5200a5a2e4b0ab9b4c2b9b44
          timeout: 600
          failure_reaction: UNSTABLE
    """

    def __init__(self, config_file_path: Optional[str] = None,
                 environ: Optional[Mapping[str, str]] = None):
        self.logger = logging.getLogger(__name__)
        self._config_file_path = config_file_path
        self._environ = os.environ if environ is None else environ
        self._raw_config: Dict[str, Any] = {}
        self._service_config: Optional[ServiceConfig] = None

        if config_file_path:
            self.load(config_file_path)

    def _handle_error(self, operation: str, error: Exception) -> None:
        """Centralized error handling and logging."""
        self.logger.error(f"Error {operation}: {str(error)}")
        raise ConfigurationError(f"Error {operation}: {str(error)}") from error

    def load(self, config_file_path: str) -> ServiceConfig:
        """Load configuration from a YAML file.

        Raises:
            ConfigurationError: If the file is missing, empty or malformed
        """
        try:
            config_path = Path(config_file_path)

            if not config_path.exists():
                raise FileNotFoundError(
                    f"Configuration file not found: {config_file_path}"
                )

            with open(config_path, "r", encoding="utf-8") as file:
                raw_config = yaml.safe_load(file)

            if not raw_config or not isinstance(raw_config, dict):
                raise ValueError("Configuration file is empty or invalid")

            return self.load_dict(raw_config, source=config_file_path)

        except ConfigurationError:
            raise
        except Exception as e:
            self._handle_error("loading configuration", e)

    def load_dict(self, raw_config: Dict[str, Any], source: Optional[str] = None) -> ServiceConfig:
        """Load configuration from an already parsed mapping."""
        try:
            raw_config = {section: dict(values or {}) for section, values in raw_config.items()}
            self._apply_environment_overrides(raw_config)

            self._service_config = self._parse_service_config(raw_config.get("service", {}))
            self._raw_config = raw_config
            self._config_file_path = source

            return self._service_config

        except Exception as e:
            self._handle_error("parsing configuration", e)

    def get_service_config(self) -> ServiceConfig:
        """Return the loaded service configuration, environment only if nothing was loaded."""
        if self._service_config is None:
            self.load_dict({})
        return self._service_config

    def get_launch_config(self) -> LaunchConfig:
        """Build the launch configuration from the ``launch`` section.

        Raises:
            ConfigurationError: If the section is missing or holds bad values
        """
        launch_data = self._raw_config.get("launch", {})
        if not launch_data.get("application_id"):
            raise ConfigurationError("Launch configuration requires an application_id")

        try:
            return LaunchConfig(
                application_id=str(launch_data["application_id"]),
                environment_id=launch_data.get("environment_id"),
                manifest_path=launch_data.get("manifest_path"),
                extra_parameters=self._parse_extra_parameters(launch_data.get("extra_parameters")),
                timeout=int(launch_data.get("timeout", 600)),
                expected_status=InstanceStatusCode.from_value(launch_data.get("expected_status", "running")),
                output_file_path=launch_data.get("output_file_path"),
                failure_reaction=BuildResult.from_string(launch_data.get("failure_reaction")),
            )
        except ConfigurationError:
            raise
        except Exception as e:
            self._handle_error("parsing launch configuration", e)

    def validate(self) -> List[str]:
        """Validate the loaded service configuration."""
        return self.get_service_config().validate()

    def _apply_environment_overrides(self, raw_config: Dict[str, Any]) -> None:
        for variable, (section, key) in ENVIRONMENT_OVERRIDES.items():
            value = self._environ.get(variable)
            if value:
                raw_config.setdefault(section, {})[key] = value

    def _parse_service_config(self, service_data: Dict[str, Any]) -> ServiceConfig:
        """Parse raw service section into ServiceConfig object."""
        defaults = ServiceConfig()
        return ServiceConfig(
            url=str(service_data.get("url", defaults.url) or ""),
            login=str(service_data.get("login", defaults.login) or ""),
            password=str(service_data.get("password", defaults.password) or ""),
            status_polling_interval=float(
                service_data.get("status_polling_interval", defaults.status_polling_interval)
            ),
            return_values_grace_period=float(
                service_data.get("return_values_grace_period", defaults.return_values_grace_period)
            ),
            shared_root=str(service_data.get("shared_root", defaults.shared_root)),
            aws_region=service_data.get("aws_region", defaults.aws_region),
            aws_run_mode=str(service_data.get("aws_run_mode", defaults.aws_run_mode)).lower(),
            log_level=self._parse_log_level(service_data.get("log_level", "INFO")),
        )

    def _parse_extra_parameters(self, value: Any) -> Optional[str]:
        """Extra parameters may be written as a YAML mapping or a JSON string."""
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, dict):
            return json.dumps(value)
        raise ConfigurationError("extra_parameters must be a mapping or JSON string")

    def _parse_log_level(self, log_level_str: str) -> LogLevel:
        """Parse log level string into LogLevel enum."""
        try:
            return LogLevel[log_level_str.upper()]
        except (KeyError, AttributeError):
            return LogLevel.INFO
