"""Contact inquiry models."""

from enum import Enum
from typing import Any, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator


class InquiryStatus(str, Enum):
    """Triage status of a customer inquiry."""
    NEW = "new"
    CONTACTED = "contacted"
    CLOSED = "closed"


class Inquiry(BaseModel):
    """Lead captured through the contact form (``contact_inquiries`` table)."""
    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str = Field(..., description="Inquiry ID")
    property_id: Optional[str] = Field(None, description="Referenced listing; null for a general inquiry")
    name: str = Field(..., description="Sender name")
    email: str = Field(..., description="Sender email")
    phone: Optional[str] = Field(None, description="Sender phone")
    message: str = Field("", description="Free-text message")
    status: InquiryStatus = Field(default=InquiryStatus.NEW)
    created_at: Optional[datetime] = None

    @property
    def is_general(self) -> bool:
        return not self.property_id


class InquiryInput(BaseModel):
    """Public contact form payload."""
    name: str
    email: str
    message: str
    phone: Optional[str] = None
    property_id: Optional[str] = None

    @field_validator("name", "email", "message", "phone", "property_id", mode="before")
    @classmethod
    def strip_text(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("name", "message")
    @classmethod
    def require_text(cls, value: str) -> str:
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("email")
    @classmethod
    def email_shape(cls, value: str) -> str:
        local, at, domain = value.partition("@")
        if not at or not local or "." not in domain:
            raise ValueError("must be a valid email address")
        return value.lower()

    @field_validator("phone", "property_id")
    @classmethod
    def blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None

    def to_record(self) -> dict:
        """Row payload for ``contact_inquiries``; new inquiries always start as ``new``."""
        record = self.model_dump()
        record["status"] = InquiryStatus.NEW.value
        return record
