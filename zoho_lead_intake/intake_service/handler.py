"""
Lead intake handler.

Turns one form submission into one Zoho CRM lead and maps every outcome
onto an HTTP status and JSON body.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from pydantic import ValidationError

from ..shared.exceptions import InvalidSubmissionError, ZohoAuthError, ZohoLeadError
from ..shared.models import ErrorResponse, IntakeResponse, Submission, SUCCESS_MESSAGE
from .zoho_client import CRMGateway

ALLOWED_METHODS = "POST, OPTIONS"
ALLOWED_HEADERS = "Content-Type"


@dataclass
class HandlerResult:
    """HTTP status, JSON body and headers for one invocation"""
    status_code: int
    body: Optional[Dict[str, Any]] = None
    headers: Dict[str, str] = field(default_factory=dict)


class LeadIntakeHandler:
    """Validates a submission, authenticates with Zoho and creates the lead"""

    def __init__(self, gateway: Optional[CRMGateway], cors_origin: str = "*",
                 debug: bool = False, logger: Optional[logging.Logger] = None):
        """
        Initialize the handler

        Args:
            gateway (CRMGateway, optional): CRM to write to. None if configuration failed.
            cors_origin (str, optional): Value for Access-Control-Allow-Origin. Defaults to "*".
            debug (bool, optional): Include exception text in internal errors. Defaults to False.
            logger (logging.Logger, optional): Logger to use. Defaults to None.
        """
        self.gateway = gateway
        self.debug = debug
        self.logger = logger or logging.getLogger(__name__)
        self.cors_headers = {
            "Access-Control-Allow-Origin": cors_origin,
            "Access-Control-Allow-Methods": ALLOWED_METHODS,
            "Access-Control-Allow-Headers": ALLOWED_HEADERS,
        }

    def handle(self, method: str, payload: Any) -> HandlerResult:
        """
        Handle one request to the intake endpoint

        Args:
            method (str): HTTP method
            payload (Any): Decoded JSON body, or None

        Returns:
            HandlerResult: Response to send
        """
        method = (method or "").upper()

        if method == "OPTIONS":
            return self._result(200)

        if method != "POST":
            return self._error(405, "Method not allowed")

        try:
            submission = self._parse_submission(payload)
        except InvalidSubmissionError as e:
            return self._error(400, str(e))

        self.logger.info(f"Form submission received: {submission.model_dump()}")

        if self.gateway is None:
            self.logger.error("Missing Zoho configuration, cannot forward submission")
            return self._error(500, "Server configuration error")

        try:
            access_token = self.gateway.get_access_token()
            lead_id = self.gateway.create_lead(access_token, submission.to_lead())
        except ZohoAuthError as e:
            self.logger.error(f"Authentication failed: {e}")
            return self._error(500, "Authentication failed")
        except ZohoLeadError as e:
            self.logger.error(f"Failed to create lead: {e}")
            return self._error(500, "Failed to create lead")
        except Exception as e:
            self.logger.exception(f"Webhook error: {e}")
            details = str(e) if self.debug else None
            return self._error(500, "Internal server error", details)

        response = IntakeResponse(success=True, message=SUCCESS_MESSAGE, leadId=lead_id)
        return self._result(200, response.model_dump(exclude_none=True))

    def _parse_submission(self, payload: Any) -> Submission:
        if not isinstance(payload, dict):
            raise InvalidSubmissionError("Invalid request body")

        try:
            submission = Submission.model_validate(payload)
        except ValidationError as e:
            self.logger.warning(f"Rejected submission: {e}")
            raise InvalidSubmissionError("Invalid request body") from e

        if not submission.email:
            raise InvalidSubmissionError("Email is required")

        return submission

    def _error(self, status_code: int, message: str, details: Optional[str] = None) -> HandlerResult:
        body = ErrorResponse(error=message, details=details).model_dump(exclude_none=True)
        return self._result(status_code, body)

    def _result(self, status_code: int, body: Optional[Dict[str, Any]] = None) -> HandlerResult:
        return HandlerResult(status_code=status_code, body=body, headers=dict(self.cors_headers))
