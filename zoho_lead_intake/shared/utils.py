import logging
from pathlib import Path
from typing import Any, Optional
import requests
import re

ZOHO_ACCOUNTS_HOST_PREFIX = "accounts.zoho."
ZOHO_API_HOST_PREFIX = "www.zohoapis."

# Configure logging
def setup_logging(service_name, log_level=logging.INFO, log_dir="logs"):
    """
    Configure logging with consistent format and handlers

    Args:
        service_name (str): Name of the service for the logger
        log_level (int): Logging level (default: logging.INFO)
        log_dir (str, optional): Directory for the log file. Console only when empty.

    Returns:
        logging.Logger: Configured logger instance
    """
    logger = logging.getLogger(service_name)

    # Check if logger already has handlers to avoid duplicate output
    if logger.handlers:
        return logger

    logger.setLevel(log_level)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    handlers = [logging.StreamHandler()]
    if log_dir:
        logs_dir = Path(log_dir)
        logs_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(logs_dir / f'{service_name}.log'))

    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger

# Zoho domain utilities
def derive_crm_domain(auth_domain):
    """
    Derive the Zoho CRM API domain from the accounts (OAuth) domain.
    E.g., https://accounts.zoho.eu -> https://www.zohoapis.eu

    Args:
        auth_domain (str): Zoho accounts domain

    Returns:
        str: CRM API domain, or the input unchanged if it is not a Zoho accounts domain
    """
    if not auth_domain:
        return auth_domain

    pattern = r'^(https?://)' + re.escape(ZOHO_ACCOUNTS_HOST_PREFIX)
    return re.sub(pattern, r'\g<1>' + ZOHO_API_HOST_PREFIX, auth_domain, count=1)

def extract_lead_id(payload: Any) -> Optional[str]:
    """
    Get the id of the first record from a Zoho CRM insert response

    Args:
        payload: Parsed response body, e.g. {"data": [{"details": {"id": "..."}}]}

    Returns:
        Optional[str]: Record ID, or None if any part of the path is missing
    """
    if not isinstance(payload, dict):
        return None

    data = payload.get('data')
    if not isinstance(data, list) or not data:
        return None

    first = data[0]
    if not isinstance(first, dict):
        return None

    details = first.get('details')
    if not isinstance(details, dict):
        return None

    lead_id = details.get('id')
    return str(lead_id) if lead_id is not None else None

# HTTP utilities
class APIClient:
    """Base API client with error logging"""

    def __init__(self, base_url, logger=None, session=None):
        self.base_url = base_url.rstrip('/')
        self.logger = logger or logging.getLogger(__name__)
        self.session = session or requests.Session()

    def request(self, method, endpoint, headers=None, params=None, data=None, json_data=None,
                timeout=None):
        """
        Make a single HTTP request

        Args:
            method (str): HTTP method (GET, POST, etc.)
            endpoint (str): API endpoint (will be appended to base_url)
            headers (dict, optional): HTTP headers
            params (dict, optional): Query parameters
            data (dict, optional): Form data
            json_data (dict, optional): JSON data
            timeout (float, optional): Request timeout in seconds

        Returns:
            requests.Response: Response object
        """
        url = f"{self.base_url}/{endpoint.lstrip('/')}"

        try:
            return self.session.request(
                method=method,
                url=url,
                headers=headers,
                params=params,
                data=data,
                json=json_data,
                timeout=timeout
            )
        except requests.exceptions.RequestException as e:
            self.logger.error(f"Request error ({method} {url}): {e}")
            raise
