import logging
from abc import ABC, abstractmethod
from typing import Optional

from ..shared.config import ZohoConfig
from ..shared.exceptions import ZohoAuthError, ZohoLeadError
from ..shared.models import LeadRecord
from ..shared.utils import APIClient, extract_lead_id

TOKEN_ENDPOINT = "oauth/v2/token"
LEADS_ENDPOINT = "crm/v2/Leads"


class CRMGateway(ABC):
    """Abstract base class for the CRM the intake service writes to"""

    @abstractmethod
    def get_access_token(self) -> str:
        """
        Exchange the refresh credential for a short-lived access token

        Raises:
            ZohoAuthError: If the exchange fails
        """
        pass

    @abstractmethod
    def create_lead(self, access_token: str, lead: LeadRecord) -> Optional[str]:
        """
        Create a lead record

        Args:
            access_token (str): Access token from get_access_token()
            lead (LeadRecord): Lead data

        Returns:
            Optional[str]: Lead ID if the CRM returned one

        Raises:
            ZohoLeadError: If the CRM rejects the lead
        """
        pass


class ZohoClient(CRMGateway):
    """Client for the Zoho OAuth and CRM Leads APIs"""

    def __init__(self, config: ZohoConfig, logger: Optional[logging.Logger] = None,
                 timeout: Optional[float] = None):
        """
        Initialize the Zoho client

        Args:
            config (ZohoConfig): Zoho credentials and domains
            logger (logging.Logger, optional): Logger to use. Defaults to None.
            timeout (float, optional): Per-request timeout in seconds. Defaults to None.
        """
        self.logger = logger or logging.getLogger(__name__)
        self.client_id = config.client_id
        self.client_secret = config.client_secret
        self.refresh_token = config.refresh_token
        self.timeout = timeout
        self.auth_client = APIClient(config.domain, logger=self.logger)
        self.crm_client = APIClient(config.api_domain, logger=self.logger)

    def get_access_token(self) -> str:
        """Get access token using refresh token"""
        data = {
            "refresh_token": self.refresh_token,
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "grant_type": "refresh_token"
        }

        response = self.auth_client.request(
            method="POST",
            endpoint=TOKEN_ENDPOINT,
            data=data,
            timeout=self.timeout
        )

        if not 200 <= response.status_code < 300:
            self.logger.error(f"Token response error: {response.status_code} - {response.text}")
            raise ZohoAuthError(
                f"Failed to get access token: {response.status_code}",
                status_code=response.status_code,
                body=response.text
            )

        token_data = response.json()
        access_token = token_data.get("access_token") if isinstance(token_data, dict) else None

        if not access_token:
            self.logger.error(f"No access token received: {token_data}")
            raise ZohoAuthError("No access token in Zoho response", status_code=response.status_code)

        self.logger.debug(f"Zoho authentication successful. Token expires in {token_data.get('expires_in', 'unknown')} seconds")
        return access_token

    def create_lead(self, access_token: str, lead: LeadRecord) -> Optional[str]:
        """
        Create a new lead in Zoho CRM

        Args:
            access_token (str): Zoho OAuth access token
            lead (LeadRecord): Lead data

        Returns:
            Optional[str]: Lead ID if Zoho returned one, None otherwise
        """
        headers = {
            "Authorization": f"Zoho-oauthtoken {access_token}",
            "Content-Type": "application/json"
        }

        data = {
            "data": [lead.to_zoho()]
        }

        response = self.crm_client.request(
            method="POST",
            endpoint=LEADS_ENDPOINT,
            headers=headers,
            json_data=data,
            timeout=self.timeout
        )

        if not 200 <= response.status_code < 300:
            self.logger.error(f"CRM response error: {response.status_code} - {response.text}")
            raise ZohoLeadError(
                f"Error creating lead: {response.status_code}",
                status_code=response.status_code,
                body=response.text
            )

        result = response.json()
        lead_id = extract_lead_id(result)

        if lead_id:
            self.logger.info(f"Created lead with ID: {lead_id}")
        else:
            self.logger.warning(f"No lead ID returned in response: {result}")

        return lead_id
