"""Customer service - Business logic for customer operations"""

import logging
from datetime import date
from typing import Callable, Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...config import DEFAULT_HORIZON_MONTHS
from ...models import Customer, FrequencyType
from ..scheduling.policy import SchedulePolicy, default_schedule_policy
from ..scheduling.service import ScheduleService
from .repository import CustomerRepository
from .schemas import CustomerCreate, CustomerResponse, CustomerUpdate

logger = logging.getLogger(__name__)

# Request field -> column
FIELD_MAP = {
    "name": "name",
    "addressLine1": "address_line1",
    "addressLine2": "address_line2",
    "city": "city",
    "state": "state",
    "zip": "zip",
    "contactName": "contact_name",
    "contactPhone": "contact_phone",
    "contactEmail": "contact_email",
    "hoodLengthFt": "hood_length_ft",
    "notes": "notes",
    "frequencyType": "frequency_type",
    "customIntervalDays": "custom_interval_days",
    "firstServiceDate": "first_service_date",
    "assignedOperator": "assigned_operator",
    "salesPartner": "sales_partner",
}


def to_response(customer: Customer, job_count: int = 0) -> CustomerResponse:
    return CustomerResponse(
        id=customer.id,
        name=customer.name,
        addressLine1=customer.address_line1,
        addressLine2=customer.address_line2,
        city=customer.city,
        state=customer.state,
        zip=customer.zip,
        contactName=customer.contact_name,
        contactPhone=customer.contact_phone,
        contactEmail=customer.contact_email,
        hoodLengthFt=customer.hood_length_ft,
        notes=customer.notes,
        frequencyType=customer.frequency_type,
        customIntervalDays=customer.custom_interval_days,
        firstServiceDate=customer.first_service_date,
        assignedOperator=customer.assigned_operator,
        salesPartner=customer.sales_partner,
        jobCount=job_count,
        created_at=customer.created_at,
    )


class CustomerService:
    """Service layer for customer business logic"""

    def __init__(
        self,
        db: Session,
        policy: Optional[SchedulePolicy] = None,
        today: Callable[[], date] = date.today,
    ):
        self.db = db
        self.policy = policy or default_schedule_policy()
        self.today = today
        self.repo = CustomerRepository()

    def get_customers(self, search: Optional[str] = None) -> list[CustomerResponse]:
        customers = self.repo.get_customers(self.db, search)
        counts = self.repo.get_job_counts(self.db, [c.id for c in customers])
        return [to_response(c, counts.get(c.id, 0)) for c in customers]

    def get_customer(self, customer_id: int) -> Customer:
        customer = self.repo.get_customer_by_id(self.db, customer_id)
        if not customer:
            raise HTTPException(status_code=404, detail="Customer not found")
        return customer

    def get_customer_response(self, customer_id: int) -> CustomerResponse:
        customer = self.get_customer(customer_id)
        counts = self.repo.get_job_counts(self.db, [customer.id])
        return to_response(customer, counts.get(customer.id, 0))

    def create_customer(self, data: CustomerCreate) -> CustomerResponse:
        """
        Create a customer and, unless disabled, its first 12 months of jobs.

        A failed schedule run does not undo the customer; it is logged and
        can be retried through the schedule endpoints.
        """
        logger.info(f"📥 Creating customer: {data.name}")

        customer_data = {
            column: getattr(data, field) for field, column in FIELD_MAP.items()
        }
        customer_data["first_service_date"] = data.firstServiceDate or self.today()
        customer_data["assigned_operator"] = (
            data.assignedOperator or self.policy.default_operator_name
        )
        customer_data["sales_partner"] = data.salesPartner or self.policy.default_sales_name
        if data.frequencyType != FrequencyType.CUSTOM:
            customer_data["custom_interval_days"] = None

        customer = self.repo.create_customer(self.db, **customer_data)

        job_count = 0
        if data.generateSchedule:
            scheduler = ScheduleService(self.db, self.policy, self.today)
            try:
                job_count = scheduler.generate_schedule(customer, DEFAULT_HORIZON_MONTHS)
            except Exception as e:
                logger.error(f"❌ Initial schedule failed for customer {customer.id}: {e}")

        return to_response(customer, job_count)

    def update_customer(self, customer_id: int, data: CustomerUpdate) -> CustomerResponse:
        """Update a customer. Existing jobs are left as they are."""
        customer = self.get_customer(customer_id)

        updates = {
            column: getattr(data, field)
            for field, column in FIELD_MAP.items()
            if getattr(data, field) is not None
        }
        frequency_type = updates.get("frequency_type", customer.frequency_type)
        if frequency_type != FrequencyType.CUSTOM:
            updates.pop("custom_interval_days", None)
            customer.custom_interval_days = None

        customer = self.repo.update_customer(self.db, customer, **updates)

        counts = self.repo.get_job_counts(self.db, [customer.id])
        return to_response(customer, counts.get(customer.id, 0))

    def delete_customer(self, customer_id: int) -> dict:
        customer = self.get_customer(customer_id)
        self.repo.delete_customer(self.db, customer)
        logger.info(f"🗑️ Deleted customer {customer_id}")
        return {"message": "Customer deleted"}
