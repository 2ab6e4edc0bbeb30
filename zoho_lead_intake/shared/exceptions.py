from typing import Optional


class IntakeError(Exception):
    """Base class for lead intake errors"""
    pass


class ConfigurationError(IntakeError):
    """Raised when the service configuration is missing or invalid"""
    pass


class InvalidSubmissionError(IntakeError):
    """Raised when a form submission cannot be accepted"""
    pass


class ZohoError(IntakeError):
    """Base class for errors returned by the Zoho APIs"""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ZohoAuthError(ZohoError):
    """Raised when the refresh token cannot be exchanged for an access token"""
    pass


class ZohoLeadError(ZohoError):
    """Raised when Zoho CRM rejects a lead"""
    pass
