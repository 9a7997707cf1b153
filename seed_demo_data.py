#!/usr/bin/env python3
"""
Seed the database with demo customers and their first year of jobs

Usage: python seed_demo_data.py
"""

import logging
from datetime import date, datetime, time, timedelta

from hoodops import models  # noqa: F401
from hoodops.database import Base, SessionLocal, engine
from hoodops.domain.scheduling.service import ScheduleService
from hoodops.models import Customer, FrequencyType, Job, JobStatus

logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger(__name__)

DEMO_CUSTOMERS = [
    {
        "name": "Mario's Italian Kitchen",
        "address_line1": "123 Main Street",
        "city": "Houston",
        "state": "TX",
        "zip": "77001",
        "contact_name": "Mario Rossi",
        "contact_phone": "+17135550101",
        "contact_email": "mario@marioskitchen.com",
        "hood_length_ft": 12,
        "frequency_type": FrequencyType.QUARTERLY,
    },
    {
        "name": "Golden Dragon Chinese",
        "address_line1": "456 Oak Avenue",
        "address_line2": "Suite 100",
        "city": "Houston",
        "state": "TX",
        "zip": "77002",
        "contact_name": "David Chen",
        "contact_phone": "+17135550102",
        "contact_email": "david@goldendragon.com",
        "hood_length_ft": 16,
        "frequency_type": FrequencyType.QUARTERLY,
    },
    {
        "name": "Tex-Mex Cantina",
        "address_line1": "789 Elm Boulevard",
        "city": "Houston",
        "state": "TX",
        "zip": "77003",
        "contact_name": "Carlos Garcia",
        "contact_phone": "+17135550103",
        "contact_email": "carlos@texmexcantina.com",
        "hood_length_ft": 14,
        "frequency_type": FrequencyType.SEMIANNUAL,
    },
    {
        "name": "BBQ Smokehouse",
        "address_line1": "321 Pine Road",
        "city": "Sugar Land",
        "state": "TX",
        "zip": "77478",
        "contact_name": "Jim Wilson",
        "contact_phone": "+12815550104",
        "contact_email": "jim@bbqsmokehouse.com",
        "hood_length_ft": 20,
        "frequency_type": FrequencyType.QUARTERLY,
    },
    {
        "name": "Sushi Paradise",
        "address_line1": "555 Cedar Lane",
        "city": "Katy",
        "state": "TX",
        "zip": "77449",
        "contact_name": "Yuki Tanaka",
        "contact_phone": "+12815550105",
        "contact_email": "yuki@sushiparadise.com",
        "hood_length_ft": 10,
        "frequency_type": FrequencyType.CUSTOM,
        "custom_interval_days": 60,
    },
]


def seed():
    Base.metadata.create_all(bind=engine, checkfirst=True)
    db = SessionLocal()
    today = date.today()

    try:
        logger.info("🌱 Seeding database...\n")
        scheduler = ScheduleService(db)

        for customer_data in DEMO_CUSTOMERS:
            existing = db.query(Customer).filter(Customer.name == customer_data["name"]).first()
            if existing:
                logger.info(f"ℹ️  Customer {customer_data['name']} already exists, skipping...")
                continue

            customer = Customer(
                first_service_date=today,
                assigned_operator=scheduler.policy.default_operator_name,
                sales_partner=scheduler.policy.default_sales_name,
                **customer_data,
            )
            db.add(customer)
            db.commit()
            db.refresh(customer)

            created = scheduler.generate_schedule(customer)

            # First visit already done, for the dashboard demo
            first_job = (
                db.query(Job)
                .filter(Job.customer_id == customer.id)
                .order_by(Job.scheduled_date)
                .first()
            )
            if first_job:
                first_job.status = JobStatus.COMPLETED
                first_job.completed_at = datetime.combine(
                    first_job.scheduled_date + timedelta(days=1), time.min
                )
                db.commit()

            logger.info(f"✅ Created {customer.name} with {created} jobs")

        logger.info("\n✅ Seeding completed!")
    except Exception as e:
        db.rollback()
        logger.error(f"❌ Seeding failed: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed()
