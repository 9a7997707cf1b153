"""Schedule service - Generates recurring jobs for customers"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Optional

from sqlalchemy.orm import Session

from ...config import DEFAULT_HORIZON_MONTHS
from ...models import Customer, JobStatus
from .generator import compute_schedule_dates, horizon_end, normalize_date
from .policy import SchedulePolicy, default_schedule_policy
from .repository import JobRepository

logger = logging.getLogger(__name__)


class CustomerNotFoundError(LookupError):
    """Raised when a schedule is requested for an unknown customer"""

    def __init__(self, customer_id: int):
        super().__init__(f"Customer {customer_id} not found")
        self.customer_id = customer_id


@dataclass
class CustomerScheduleFailure:
    customer_id: int
    error: str


@dataclass
class BatchScheduleResult:
    total_jobs_created: int = 0
    customers_processed: int = 0
    failures: list[CustomerScheduleFailure] = field(default_factory=list)


class ScheduleService:
    """
    Expands customer frequency policies into SCHEDULED jobs.

    Each customer is handled in its own transaction: the occupied-date read
    and the bulk insert either both land or are rolled back together.
    """

    def __init__(
        self,
        db: Session,
        policy: Optional[SchedulePolicy] = None,
        today: Callable[[], date] = date.today,
    ):
        self.db = db
        self.policy = policy or default_schedule_policy()
        self.today = today
        self.repo = JobRepository()

    def _anchor_date(self, customer: Customer) -> date:
        if customer.first_service_date is None:
            return self.today()
        return normalize_date(customer.first_service_date)

    def _get_customer(self, customer_id: int) -> Customer:
        customer = self.repo.get_customer(self.db, customer_id)
        if not customer:
            raise CustomerNotFoundError(customer_id)
        return customer

    def _build_job_records(self, customer: Customer, dates: list[date]) -> list[dict]:
        shares = self.policy.calculate_shares(self.policy.default_price)
        return [
            {
                "customer_id": customer.id,
                "scheduled_date": scheduled_date,
                "status": JobStatus.SCHEDULED,
                "price": shares.price,
                "operator_share": shares.operator_share,
                "admin_share": shares.admin_share,
                "sales_share": shares.sales_share,
                "operator_name": customer.assigned_operator or self.policy.default_operator_name,
                "sales_name": customer.sales_partner or self.policy.default_sales_name,
                "admin_name": self.policy.admin_name,
            }
            for scheduled_date in dates
        ]

    def plan_dates(
        self, customer: Customer, horizon_months: int = DEFAULT_HORIZON_MONTHS
    ) -> list[date]:
        """Dates that still need a job for this customer (read only)"""
        start_date = self._anchor_date(customer)
        end_date = horizon_end(start_date, horizon_months)

        occupied = []
        if start_date <= end_date:
            occupied = self.repo.find_job_dates(self.db, customer.id, start_date, end_date)

        return compute_schedule_dates(
            start_date,
            customer.frequency_type,
            customer.custom_interval_days,
            horizon_months,
            occupied=occupied,
            shift_weekends=self.policy.shift_weekends,
        )

    def generate_schedule(
        self, customer: Customer, horizon_months: int = DEFAULT_HORIZON_MONTHS
    ) -> int:
        """
        Create the missing jobs for one customer within the horizon.

        Returns the number of jobs actually inserted. Existing jobs are never
        touched, so calling this again for the same horizon creates nothing.
        Store errors roll back this customer's work and propagate.
        """
        try:
            dates = self.plan_dates(customer, horizon_months)
            records = self._build_job_records(customer, dates)
            created = self.repo.bulk_insert_jobs(self.db, records)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        if created:
            logger.info(
                f"📅 Created {created} jobs for customer {customer.id} "
                f"({customer.frequency_type}, {horizon_months} months)"
            )
        else:
            logger.debug(f"Schedule for customer {customer.id} already up to date")
        return created

    def generate_schedule_for_customer_id(
        self, customer_id: int, horizon_months: int = DEFAULT_HORIZON_MONTHS
    ) -> int:
        """Regenerate the schedule for one stored customer"""
        customer = self._get_customer(customer_id)
        return self.generate_schedule(customer, horizon_months)

    def preview_schedule(
        self, customer_id: int, horizon_months: int = DEFAULT_HORIZON_MONTHS
    ) -> list[date]:
        """Dates a regeneration would create right now, without writing"""
        customer = self._get_customer(customer_id)
        return self.plan_dates(customer, horizon_months)

    def generate_schedule_for_all_customers(
        self, horizon_months: int = DEFAULT_HORIZON_MONTHS
    ) -> BatchScheduleResult:
        """
        Generate schedules for every customer.

        A failing customer is rolled back and recorded in ``failures``; the
        remaining customers are still processed.
        """
        result = BatchScheduleResult()
        customers = self.repo.list_customers(self.db)
        logger.info(
            f"🔄 Generating {horizon_months}-month schedules for {len(customers)} customers"
        )

        for customer in customers:
            customer_id = customer.id
            try:
                result.total_jobs_created += self.generate_schedule(customer, horizon_months)
                result.customers_processed += 1
            except Exception as e:
                logger.error(f"❌ Schedule generation failed for customer {customer_id}: {e}")
                result.failures.append(
                    CustomerScheduleFailure(customer_id=customer_id, error=str(e))
                )

        logger.info(
            f"✅ Schedule batch finished: {result.total_jobs_created} jobs created, "
            f"{len(result.failures)} customers failed"
        )
        return result
