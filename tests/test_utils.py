import logging
from unittest.mock import MagicMock

import pytest
import requests

from zoho_lead_intake.shared.utils import APIClient, derive_crm_domain, extract_lead_id, setup_logging


@pytest.mark.parametrize("auth_domain, crm_domain", [
    ("https://accounts.zoho.com", "https://www.zohoapis.com"),
    ("https://accounts.zoho.eu", "https://www.zohoapis.eu"),
    ("https://accounts.zoho.in", "https://www.zohoapis.in"),
    ("https://accounts.zoho.com.au", "https://www.zohoapis.com.au"),
    ("https://crm.example.test", "https://crm.example.test"),
])
def test_derive_crm_domain(auth_domain, crm_domain):
    assert derive_crm_domain(auth_domain) == crm_domain


@pytest.mark.parametrize("payload", [
    None,
    "oops",
    {},
    {"data": []},
    {"data": "x"},
    {"data": [None]},
    {"data": [{}]},
    {"data": [{"details": None}]},
    {"data": [{"details": {}}]},
])
def test_extract_lead_id_missing_path_returns_none(payload):
    assert extract_lead_id(payload) is None


def test_extract_lead_id_reads_first_record():
    payload = {"data": [
        {"code": "SUCCESS", "details": {"id": "111"}},
        {"code": "SUCCESS", "details": {"id": "222"}},
    ]}

    assert extract_lead_id(payload) == "111"


def test_api_client_joins_base_url_and_endpoint():
    session = MagicMock()
    client = APIClient("https://accounts.zoho.com/", session=session)

    client.request("POST", "/oauth/v2/token", data={"a": "b"})

    session.request.assert_called_once_with(
        method="POST",
        url="https://accounts.zoho.com/oauth/v2/token",
        headers=None,
        params=None,
        data={"a": "b"},
        json=None,
        timeout=None,
    )


def test_api_client_makes_a_single_attempt_and_reraises():
    session = MagicMock()
    session.request.side_effect = requests.exceptions.ConnectionError("refused")
    client = APIClient("https://www.zohoapis.com", session=session)

    with pytest.raises(requests.exceptions.ConnectionError):
        client.request("POST", "crm/v2/Leads", json_data={})

    assert session.request.call_count == 1


def test_setup_logging_does_not_duplicate_handlers(tmp_path):
    logger = setup_logging("test_setup_logging", log_level=logging.DEBUG, log_dir=str(tmp_path))
    again = setup_logging("test_setup_logging", log_dir=str(tmp_path))

    assert again is logger
    assert len(logger.handlers) == 2
    assert (tmp_path / "test_setup_logging.log").exists()

    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
