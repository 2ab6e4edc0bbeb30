from typing import List, Optional

import pytest

from zoho_lead_intake.intake_service.zoho_client import CRMGateway
from zoho_lead_intake.shared.config import AppConfig, ServiceConfig, ZohoConfig
from zoho_lead_intake.shared.exceptions import ZohoAuthError, ZohoLeadError
from zoho_lead_intake.shared.models import LeadRecord

ZOHO_ENV_VARS = [
    "ZOHO_CLIENT_ID",
    "ZOHO_CLIENT_SECRET",
    "ZOHO_REFRESH_TOKEN",
    "ZOHO_DOMAIN",
    "ZOHO_CRM_DOMAIN",
]

SERVICE_ENV_VARS = [
    "INTAKE_SERVICE_HOST",
    "INTAKE_SERVICE_PORT",
    "INTAKE_SERVICE_LOG_LEVEL",
    "INTAKE_SERVICE_DEBUG",
    "INTAKE_SERVICE_CORS_ORIGIN",
    "INTAKE_SERVICE_LOG_DIR",
]


class FakeGateway(CRMGateway):
    """In-memory CRM gateway recording every call"""

    def __init__(self, token: str = "token-123", lead_id: Optional[str] = "5725767000000419001",
                 auth_error: Optional[Exception] = None, lead_error: Optional[Exception] = None):
        self.token = token
        self.lead_id = lead_id
        self.auth_error = auth_error
        self.lead_error = lead_error
        self.token_calls = 0
        self.created: List[tuple] = []

    def get_access_token(self) -> str:
        self.token_calls += 1
        if self.auth_error:
            raise self.auth_error
        return self.token

    def create_lead(self, access_token: str, lead: LeadRecord) -> Optional[str]:
        self.created.append((access_token, lead))
        if self.lead_error:
            raise self.lead_error
        return self.lead_id


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ZOHO_ENV_VARS + SERVICE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("INTAKE_SERVICE_LOG_DIR", "")


@pytest.fixture
def zoho_env(monkeypatch):
    monkeypatch.setenv("ZOHO_CLIENT_ID", "1000.CLIENT")
    monkeypatch.setenv("ZOHO_CLIENT_SECRET", "secret")
    monkeypatch.setenv("ZOHO_REFRESH_TOKEN", "1000.refresh")


@pytest.fixture
def zoho_config():
    return ZohoConfig(client_id="1000.CLIENT", client_secret="secret", refresh_token="1000.refresh")


@pytest.fixture
def app_config(zoho_config):
    return AppConfig(zoho=zoho_config, service=ServiceConfig(log_dir=""))


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def auth_failure():
    return FakeGateway(auth_error=ZohoAuthError("Failed to get access token: 401", status_code=401))


@pytest.fixture
def lead_failure():
    return FakeGateway(lead_error=ZohoLeadError("Error creating lead: 400", status_code=400))
