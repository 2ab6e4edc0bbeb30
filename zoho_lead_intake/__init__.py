"""
Zoho Lead Intake.

This package forwards website form submissions to Zoho CRM as leads.
"""

__version__ = "1.0.0"

from . import shared
from . import intake_service

__all__ = [
    'shared',
    'intake_service'
]
