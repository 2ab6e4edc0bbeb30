"""
Shared utilities and models for the Zoho lead intake service.
"""

from .utils import (
    setup_logging,
    derive_crm_domain,
    extract_lead_id,
    APIClient
)

from .exceptions import (
    IntakeError,
    ConfigurationError,
    InvalidSubmissionError,
    ZohoError,
    ZohoAuthError,
    ZohoLeadError
)

from .models import (
    FormType,
    LeadSource,
    LeadRecord,
    Submission,
    IntakeResponse,
    ErrorResponse
)

from .config import (
    load_config,
    load_service_config,
    AppConfig,
    ServiceConfig,
    ZohoConfig
)

__all__ = [
    # Utils
    'setup_logging',
    'derive_crm_domain',
    'extract_lead_id',
    'APIClient',

    # Exceptions
    'IntakeError',
    'ConfigurationError',
    'InvalidSubmissionError',
    'ZohoError',
    'ZohoAuthError',
    'ZohoLeadError',

    # Models
    'FormType',
    'LeadSource',
    'LeadRecord',
    'Submission',
    'IntakeResponse',
    'ErrorResponse',

    # Config
    'load_config',
    'load_service_config',
    'AppConfig',
    'ServiceConfig',
    'ZohoConfig'
]
