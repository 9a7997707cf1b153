from sqlalchemy import (
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base


class FrequencyType:
    """Service frequency policies a customer can be on"""

    QUARTERLY = "QUARTERLY"
    SEMIANNUAL = "SEMIANNUAL"
    CUSTOM = "CUSTOM"

    ALL = (QUARTERLY, SEMIANNUAL, CUSTOM)


class JobStatus:
    """Job workflow: SCHEDULED → COMPLETED → INVOICED → PAID (or CANCELLED)"""

    SCHEDULED = "SCHEDULED"
    COMPLETED = "COMPLETED"
    INVOICED = "INVOICED"
    PAID = "PAID"
    CANCELLED = "CANCELLED"

    ALL = (SCHEDULED, COMPLETED, INVOICED, PAID, CANCELLED)


class Customer(Base):
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)

    # Location
    address_line1 = Column(String(255), nullable=False)
    address_line2 = Column(String(255), nullable=True)
    city = Column(String(100), nullable=False)
    state = Column(String(50), nullable=False)
    zip = Column(String(20), nullable=False)

    # Contact
    contact_name = Column(String(255), nullable=False)
    contact_phone = Column(String(50), nullable=False)
    contact_email = Column(String(255), nullable=True)

    hood_length_ft = Column(Integer, default=10, nullable=False)
    notes = Column(Text, nullable=True)

    # Recurrence policy
    frequency_type = Column(String(20), default=FrequencyType.QUARTERLY, nullable=False)
    custom_interval_days = Column(Integer, nullable=True)  # Only used for CUSTOM
    first_service_date = Column(Date, nullable=True)  # Anchor for recurrence

    # Crew labels copied onto generated jobs
    assigned_operator = Column(String(100), nullable=True)
    sales_partner = Column(String(100), nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    jobs = relationship(
        "Job",
        back_populates="customer",
        cascade="all, delete-orphan",
        order_by="Job.scheduled_date",
    )


class Job(Base):
    __tablename__ = "jobs"
    # At most one job per customer per calendar day
    __table_args__ = (
        UniqueConstraint("customer_id", "scheduled_date", name="uq_jobs_customer_scheduled_date"),
    )

    id = Column(Integer, primary_key=True, index=True)
    customer_id = Column(
        Integer, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True
    )

    scheduled_date = Column(Date, nullable=False, index=True)
    status = Column(String(20), default=JobStatus.SCHEDULED, nullable=False, index=True)

    # Revenue, frozen when the job is created
    price = Column(Numeric(10, 2), nullable=False)
    operator_share = Column(Numeric(10, 2), nullable=False)
    admin_share = Column(Numeric(10, 2), nullable=False)
    sales_share = Column(Numeric(10, 2), nullable=False)

    operator_name = Column(String(100), nullable=True)
    sales_name = Column(String(100), nullable=True)
    admin_name = Column(String(100), nullable=True)

    completed_at = Column(DateTime, nullable=True)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    customer = relationship("Customer", back_populates="jobs")
