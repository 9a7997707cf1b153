"""Scheduling domain schemas - Pydantic models for validation"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from ...config import DEFAULT_HORIZON_MONTHS, MAX_HORIZON_MONTHS


class GenerateScheduleRequest(BaseModel):
    """Horizon for a schedule generation run"""

    months: int = Field(DEFAULT_HORIZON_MONTHS, ge=0, le=MAX_HORIZON_MONTHS)


class ScheduleFailure(BaseModel):
    customerId: int
    error: str


class GenerateAllSchedulesResponse(BaseModel):
    success: bool
    totalJobsCreated: int
    customersProcessed: int
    months: int
    failures: list[ScheduleFailure] = []


class GenerateCustomerScheduleResponse(BaseModel):
    success: bool
    customerId: int
    jobsCreated: int
    months: int


class SchedulePreviewResponse(BaseModel):
    customerId: int
    months: int
    dates: list[date]


class JobResponse(BaseModel):
    """Schema for job response"""

    id: int
    customerId: int
    scheduledDate: date
    status: str
    price: float
    operatorShare: float
    adminShare: float
    salesShare: float
    operatorName: Optional[str] = None
    salesName: Optional[str] = None
    adminName: Optional[str] = None
