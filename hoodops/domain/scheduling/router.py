"""Scheduling router - FastAPI endpoints for recurring job generation"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ...config import DEFAULT_HORIZON_MONTHS, MAX_HORIZON_MONTHS
from ...database import get_db
from .repository import JobRepository
from .schemas import (
    GenerateAllSchedulesResponse,
    GenerateCustomerScheduleResponse,
    GenerateScheduleRequest,
    JobResponse,
    ScheduleFailure,
    SchedulePreviewResponse,
)
from .service import CustomerNotFoundError, ScheduleService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/schedule", tags=["Schedule"])


def get_schedule_service(db: Session = Depends(get_db)) -> ScheduleService:
    """Dependency injection for ScheduleService"""
    return ScheduleService(db)


@router.post("", response_model=GenerateAllSchedulesResponse)
async def generate_all_schedules(
    data: GenerateScheduleRequest = GenerateScheduleRequest(),
    service: ScheduleService = Depends(get_schedule_service),
):
    """Generate schedules for all customers (12 months by default, 24 offered in the UI)"""
    try:
        result = service.generate_schedule_for_all_customers(data.months)
    except Exception as e:
        logger.error(f"❌ Error generating schedules: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate schedules") from e

    return GenerateAllSchedulesResponse(
        success=not result.failures,
        totalJobsCreated=result.total_jobs_created,
        customersProcessed=result.customers_processed,
        months=data.months,
        failures=[
            ScheduleFailure(customerId=f.customer_id, error=f.error) for f in result.failures
        ],
    )


@router.post("/customers/{customer_id}", response_model=GenerateCustomerScheduleResponse)
async def generate_customer_schedule(
    customer_id: int,
    data: GenerateScheduleRequest = GenerateScheduleRequest(),
    service: ScheduleService = Depends(get_schedule_service),
):
    """Regenerate the schedule for one customer"""
    try:
        created = service.generate_schedule_for_customer_id(customer_id, data.months)
    except CustomerNotFoundError:
        raise HTTPException(status_code=404, detail="Customer not found")
    except Exception as e:
        logger.error(f"❌ Error generating schedule for customer {customer_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate schedule") from e

    return GenerateCustomerScheduleResponse(
        success=True, customerId=customer_id, jobsCreated=created, months=data.months
    )


@router.get("/customers/{customer_id}/preview", response_model=SchedulePreviewResponse)
async def preview_customer_schedule(
    customer_id: int,
    months: int = Query(DEFAULT_HORIZON_MONTHS, ge=0, le=MAX_HORIZON_MONTHS),
    service: ScheduleService = Depends(get_schedule_service),
):
    """Dates a regeneration would create, without creating them"""
    try:
        dates = service.preview_schedule(customer_id, months)
    except CustomerNotFoundError:
        raise HTTPException(status_code=404, detail="Customer not found")

    return SchedulePreviewResponse(customerId=customer_id, months=months, dates=dates)


@router.get("/customers/{customer_id}/jobs", response_model=list[JobResponse])
async def get_customer_jobs(customer_id: int, db: Session = Depends(get_db)):
    """All jobs for a customer ordered by date"""
    repo = JobRepository()
    if not repo.get_customer(db, customer_id):
        raise HTTPException(status_code=404, detail="Customer not found")

    return [
        JobResponse(
            id=j.id,
            customerId=j.customer_id,
            scheduledDate=j.scheduled_date,
            status=j.status,
            price=j.price,
            operatorShare=j.operator_share,
            adminShare=j.admin_share,
            salesShare=j.sales_share,
            operatorName=j.operator_name,
            salesName=j.sales_name,
            adminName=j.admin_name,
        )
        for j in repo.get_jobs_for_customer(db, customer_id)
    ]
