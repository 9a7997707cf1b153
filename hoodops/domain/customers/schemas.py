"""Customer domain schemas - Pydantic models for validation"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...models import FrequencyType
from ...shared.validators import validate_email, validate_us_phone, validate_us_state


def _validate_frequency(v):
    if v is None:
        return v
    v = v.strip().upper()
    if v not in FrequencyType.ALL:
        raise ValueError(f"frequencyType must be one of {', '.join(FrequencyType.ALL)}")
    return v


def _normalize_service_date(v):
    # Only the calendar day matters for scheduling
    if isinstance(v, str) and "T" in v:
        v = datetime.fromisoformat(v.replace("Z", "+00:00"))
    if isinstance(v, datetime):
        return v.date()
    return v


class CustomerCreate(BaseModel):
    """Schema for creating a new customer"""

    name: str = Field(..., min_length=1)
    addressLine1: str = Field(..., min_length=1)
    addressLine2: Optional[str] = None
    city: str = Field(..., min_length=1)
    state: str
    zip: str = Field(..., min_length=1)
    contactName: str = Field(..., min_length=1)
    contactPhone: str
    contactEmail: Optional[str] = None
    hoodLengthFt: int = Field(10, gt=0)
    notes: Optional[str] = None
    frequencyType: str = FrequencyType.QUARTERLY
    customIntervalDays: Optional[int] = Field(None, gt=0)
    firstServiceDate: Optional[date] = None
    assignedOperator: Optional[str] = None
    salesPartner: Optional[str] = None
    generateSchedule: bool = True

    @field_validator("contactPhone")
    @classmethod
    def validate_phone(cls, v):
        return validate_us_phone(v)

    @field_validator("contactEmail")
    @classmethod
    def validate_contact_email(cls, v):
        return validate_email(v)

    @field_validator("state")
    @classmethod
    def validate_state(cls, v):
        return validate_us_state(v)

    @field_validator("frequencyType")
    @classmethod
    def validate_frequency(cls, v):
        return _validate_frequency(v)

    @field_validator("firstServiceDate", mode="before")
    @classmethod
    def normalize_first_service_date(cls, v):
        return _normalize_service_date(v)


class CustomerUpdate(BaseModel):
    """Schema for updating an existing customer"""

    name: Optional[str] = None
    addressLine1: Optional[str] = None
    addressLine2: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    contactName: Optional[str] = None
    contactPhone: Optional[str] = None
    contactEmail: Optional[str] = None
    hoodLengthFt: Optional[int] = Field(None, gt=0)
    notes: Optional[str] = None
    frequencyType: Optional[str] = None
    customIntervalDays: Optional[int] = Field(None, gt=0)
    firstServiceDate: Optional[date] = None
    assignedOperator: Optional[str] = None
    salesPartner: Optional[str] = None

    @field_validator("contactPhone")
    @classmethod
    def validate_phone(cls, v):
        if v:
            return validate_us_phone(v)
        return v

    @field_validator("contactEmail")
    @classmethod
    def validate_contact_email(cls, v):
        return validate_email(v)

    @field_validator("state")
    @classmethod
    def validate_state(cls, v):
        return validate_us_state(v)

    @field_validator("frequencyType")
    @classmethod
    def validate_frequency(cls, v):
        return _validate_frequency(v)

    @field_validator("firstServiceDate", mode="before")
    @classmethod
    def normalize_first_service_date(cls, v):
        return _normalize_service_date(v)


class CustomerResponse(BaseModel):
    """Schema for customer response"""

    id: int
    name: str
    addressLine1: str
    addressLine2: Optional[str]
    city: str
    state: str
    zip: str
    contactName: str
    contactPhone: str
    contactEmail: Optional[str]
    hoodLengthFt: int
    notes: Optional[str]
    frequencyType: str
    customIntervalDays: Optional[int]
    firstServiceDate: Optional[date]
    assignedOperator: Optional[str]
    salesPartner: Optional[str]
    jobCount: int = 0
    created_at: Optional[datetime] = None
