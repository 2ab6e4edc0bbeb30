import os
import json
import logging
from pathlib import Path
from typing import Dict, Any, Optional
from pydantic import BaseModel, ValidationError, field_validator
from dotenv import load_dotenv

from .exceptions import ConfigurationError
from .utils import derive_crm_domain

# Load environment variables from .env file
load_dotenv()

DEFAULT_ZOHO_DOMAIN = "https://accounts.zoho.com"
SERVICE_ENV_PREFIX = "INTAKE_SERVICE"

class ZohoConfig(BaseModel):
    """Zoho OAuth and CRM configuration"""
    client_id: str
    client_secret: str
    refresh_token: str
    domain: str = DEFAULT_ZOHO_DOMAIN
    crm_domain: Optional[str] = None

    @field_validator('client_id', 'client_secret', 'refresh_token')
    @classmethod
    def validate_required(cls, v, info):
        """Validate required credentials"""
        v = (v or "").strip()
        if not v:
            raise ValueError(f"{info.field_name} is required")
        return v

    @field_validator('domain')
    @classmethod
    def validate_domain(cls, v):
        """Fall back to the default accounts domain when empty"""
        v = (v or "").strip()
        return v.rstrip('/') if v else DEFAULT_ZOHO_DOMAIN

    @field_validator('crm_domain')
    @classmethod
    def validate_crm_domain(cls, v):
        """Treat an empty override as unset"""
        v = (v or "").strip()
        return v.rstrip('/') if v else None

    @property
    def api_domain(self) -> str:
        """Zoho CRM API domain"""
        return self.crm_domain or derive_crm_domain(self.domain)

class ServiceConfig(BaseModel):
    """Intake service configuration"""
    name: str = "intake_service"
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    debug: bool = False
    cors_origin: str = "*"
    log_dir: str = "logs"

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level"""
        v = v.upper()
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v

class AppConfig(BaseModel):
    """Application configuration"""
    zoho: ZohoConfig
    service: ServiceConfig

def _read_config_file(config_path: Optional[str]) -> Dict[str, Any]:
    """Read the optional JSON config file"""
    logger = logging.getLogger(__name__)

    if not config_path:
        return {}

    config_file = Path(config_path)
    if not config_file.exists():
        logger.warning(f"Configuration file {config_file} not found, using environment only")
        return {}

    try:
        with open(config_file, 'r') as f:
            config_data = json.load(f)
    except (OSError, ValueError) as e:
        raise ConfigurationError(f"Error loading configuration from {config_file}: {e}") from e

    if not isinstance(config_data, dict):
        raise ConfigurationError(f"Configuration file {config_file} must contain a JSON object")

    logger.info(f"Loaded configuration from {config_file}")
    return config_data

def _format_validation_error(error: ValidationError) -> str:
    fields = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ()))
        fields.append(f"{location}: {item.get('msg')}")
    return "; ".join(fields)

def _service_settings(config_data: Dict[str, Any]) -> Dict[str, Any]:
    file_config = config_data.get("service", {})

    def setting(key, default):
        return os.environ.get(f"{SERVICE_ENV_PREFIX}_{key.upper()}", file_config.get(key, default))

    debug = setting("debug", False)
    if isinstance(debug, str):
        debug = debug.lower() == "true"

    return {
        "name": file_config.get("name", "intake_service"),
        "host": setting("host", "0.0.0.0"),
        "port": int(setting("port", 8000)),
        "log_level": setting("log_level", "INFO"),
        "debug": debug,
        "cors_origin": setting("cors_origin", "*"),
        "log_dir": setting("log_dir", "logs"),
    }

def _zoho_settings(config_data: Dict[str, Any]) -> Dict[str, Any]:
    file_config = config_data.get("zoho", {})
    return {
        "client_id": os.environ.get("ZOHO_CLIENT_ID", file_config.get("client_id", "")),
        "client_secret": os.environ.get("ZOHO_CLIENT_SECRET", file_config.get("client_secret", "")),
        "refresh_token": os.environ.get("ZOHO_REFRESH_TOKEN", file_config.get("refresh_token", "")),
        "domain": os.environ.get("ZOHO_DOMAIN", file_config.get("domain", DEFAULT_ZOHO_DOMAIN)),
        "crm_domain": os.environ.get("ZOHO_CRM_DOMAIN", file_config.get("crm_domain")),
    }

def load_service_config(config_path: Optional[str] = None) -> ServiceConfig:
    """
    Load only the service section of the configuration

    Args:
        config_path (str, optional): Path to config file

    Returns:
        ServiceConfig: Service configuration
    """
    config_data = _read_config_file(config_path)
    try:
        return ServiceConfig(**_service_settings(config_data))
    except (ValidationError, ValueError) as e:
        detail = _format_validation_error(e) if isinstance(e, ValidationError) else str(e)
        raise ConfigurationError(f"Invalid service configuration: {detail}") from e

def load_config(config_path: Optional[str] = None) -> AppConfig:
    """
    Load configuration from environment variables and config file

    Args:
        config_path (str, optional): Path to config file

    Returns:
        AppConfig: Application configuration

    Raises:
        ConfigurationError: If a required value is missing or invalid
    """
    config_data = _read_config_file(config_path)

    try:
        return AppConfig(
            zoho=_zoho_settings(config_data),
            service=_service_settings(config_data)
        )
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {_format_validation_error(e)}") from e
    except ValueError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
