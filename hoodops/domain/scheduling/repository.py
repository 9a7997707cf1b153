"""Job repository - Database operations used by the schedule generator"""

import logging
from datetime import date
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...models import Customer, Job

logger = logging.getLogger(__name__)


class JobRepository:
    """
    Repository for job database operations.

    Nothing here commits; the caller owns the transaction so that the
    occupied-date read and the insert succeed or fail together.
    """

    @staticmethod
    def find_job_dates(
        db: Session, customer_id: int, start_date: date, end_date: date
    ) -> list[date]:
        """Scheduled dates of a customer's jobs within [start_date, end_date]"""
        rows = (
            db.query(Job.scheduled_date)
            .filter(
                Job.customer_id == customer_id,
                Job.scheduled_date >= start_date,
                Job.scheduled_date <= end_date,
            )
            .order_by(Job.scheduled_date)
            .all()
        )
        return [row.scheduled_date for row in rows]

    @staticmethod
    def get_jobs_for_customer(db: Session, customer_id: int) -> list[Job]:
        """All jobs for a customer ordered by date"""
        return (
            db.query(Job)
            .filter(Job.customer_id == customer_id)
            .order_by(Job.scheduled_date)
            .all()
        )

    @staticmethod
    def bulk_insert_jobs(db: Session, records: list[dict]) -> int:
        """
        Insert new job rows in one batch and return how many were written.

        A unique-constraint hit means another writer created one of these
        dates after we read the occupied set. In that case the batch is
        replayed row by row and conflicting dates are skipped.
        """
        if not records:
            return 0

        try:
            with db.begin_nested():
                db.add_all([Job(**record) for record in records])
            return len(records)
        except IntegrityError:
            logger.warning(
                f"⚠️ Duplicate job dates detected for customer {records[0].get('customer_id')}, "
                f"inserting {len(records)} jobs one at a time"
            )

        inserted = 0
        for record in records:
            try:
                with db.begin_nested():
                    db.add(Job(**record))
                inserted += 1
            except IntegrityError:
                logger.info(
                    f"Skipping {record['scheduled_date']} for customer {record['customer_id']}: "
                    "job already exists"
                )
        return inserted

    @staticmethod
    def list_customers(db: Session) -> list[Customer]:
        """Every customer, oldest first"""
        return db.query(Customer).order_by(Customer.id).all()

    @staticmethod
    def get_customer(db: Session, customer_id: int) -> Optional[Customer]:
        return db.query(Customer).filter(Customer.id == customer_id).first()
