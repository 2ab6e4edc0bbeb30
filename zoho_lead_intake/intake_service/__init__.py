"""
Intake Service for website form submissions.

This service receives contact and newsletter form submissions and creates leads in Zoho CRM.
"""

from .zoho_client import CRMGateway, ZohoClient
from .handler import LeadIntakeHandler, HandlerResult
from .service import IntakeService, create_app

__all__ = [
    'CRMGateway',
    'ZohoClient',
    'LeadIntakeHandler',
    'HandlerResult',
    'IntakeService',
    'create_app'
]
