from pydantic import BaseModel, ConfigDict, field_validator
from typing import Optional, Dict, Any
from enum import Enum

DEFAULT_LAST_NAME = "Website Lead"
SUCCESS_MESSAGE = "Form submitted successfully"


class FormType(str, Enum):
    """Form type enum"""
    NEWSLETTER = "newsletter"
    CONTACT = "contact"


class LeadSource(str, Enum):
    """Lead source enum"""
    NEWSLETTER = "Newsletter"
    WEBSITE_CONTACT_FORM = "Website Contact Form"


class LeadRecord(BaseModel):
    """Lead as it is sent to Zoho CRM"""
    last_name: str
    email: str
    phone: str = ""
    company: str = ""
    description: str = ""
    lead_source: LeadSource = LeadSource.WEBSITE_CONTACT_FORM

    def to_zoho(self) -> Dict[str, Any]:
        """Map the record onto Zoho CRM Leads field names"""
        return {
            "Last_Name": self.last_name,
            "Email": self.email,
            "Phone": self.phone,
            "Company": self.company,
            "Description": self.description,
            "Lead_Source": self.lead_source.value,
        }


class Submission(BaseModel):
    """Website form submission"""
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    company: Optional[str] = None
    message: Optional[str] = None
    form_type: Optional[str] = None

    @field_validator("name", "email", "phone", "company", "message", "form_type")
    @classmethod
    def strip_value(cls, v):
        """Strip surrounding whitespace"""
        if v is None:
            return v
        return v.strip()

    @property
    def lead_source(self) -> LeadSource:
        if self.form_type == FormType.NEWSLETTER.value:
            return LeadSource.NEWSLETTER
        return LeadSource.WEBSITE_CONTACT_FORM

    def to_lead(self) -> LeadRecord:
        """
        Build the CRM lead for this submission

        Returns:
            LeadRecord: Lead with defaults applied to absent fields
        """
        return LeadRecord(
            last_name=self.name or DEFAULT_LAST_NAME,
            email=self.email or "",
            phone=self.phone or "",
            company=self.company or "",
            description=self.message or "",
            lead_source=self.lead_source,
        )


class IntakeResponse(BaseModel):
    """Response for an accepted submission"""
    success: bool
    message: str
    leadId: Optional[str] = None


class ErrorResponse(BaseModel):
    """Response for a rejected or failed submission"""
    error: str
    details: Optional[str] = None
