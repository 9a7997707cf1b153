from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError

from hoodops.domain.scheduling.policy import SchedulePolicy
from hoodops.domain.scheduling.repository import JobRepository
from hoodops.domain.scheduling.service import CustomerNotFoundError, ScheduleService
from hoodops.models import FrequencyType, Job, JobStatus

QUARTERLY_2025 = [
    date(2025, 1, 1),
    date(2025, 4, 2),
    date(2025, 7, 2),
    date(2025, 10, 1),
    date(2025, 12, 31),
]


def job_dates(db, customer_id):
    return [
        row.scheduled_date
        for row in db.query(Job.scheduled_date)
        .filter(Job.customer_id == customer_id)
        .order_by(Job.scheduled_date)
    ]


def add_job(db, customer_id, scheduled_date, **extra):
    job = Job(
        customer_id=customer_id,
        scheduled_date=scheduled_date,
        status=extra.pop("status", JobStatus.SCHEDULED),
        price=extra.pop("price", 500.0),
        operator_share=400.0,
        admin_share=50.0,
        sales_share=50.0,
        **extra,
    )
    db.add(job)
    db.commit()
    return job


def test_generates_quarterly_jobs(db, make_customer):
    customer = make_customer()
    service = ScheduleService(db, SchedulePolicy())

    created = service.generate_schedule(customer, 12)

    assert created == 5
    assert job_dates(db, customer.id) == QUARTERLY_2025


def test_second_run_creates_nothing(db, make_customer):
    customer = make_customer()
    service = ScheduleService(db, SchedulePolicy())

    assert service.generate_schedule(customer, 12) == 5
    assert service.generate_schedule(customer, 12) == 0
    assert db.query(Job).count() == 5


def test_longer_horizon_only_adds_new_dates(db, make_customer):
    customer = make_customer()
    service = ScheduleService(db, SchedulePolicy())

    service.generate_schedule(customer, 12)
    # 24 months from 2025-01-01 reaches 2026-12-30 at a 91 day step
    assert service.generate_schedule(customer, 24) == 4
    assert db.query(Job).count() == 9


def test_existing_job_dates_are_skipped(db, make_customer):
    customer = make_customer()
    add_job(db, customer.id, date(2025, 4, 2), status=JobStatus.COMPLETED, price=650.0)
    service = ScheduleService(db, SchedulePolicy())

    assert service.generate_schedule(customer, 12) == 4

    assert job_dates(db, customer.id) == QUARTERLY_2025
    # The pre-existing job is left untouched
    existing = db.query(Job).filter(Job.scheduled_date == date(2025, 4, 2)).one()
    assert existing.status == JobStatus.COMPLETED
    assert existing.price == 650.0


def test_generated_jobs_carry_policy_values(db, make_customer):
    customer = make_customer(assigned_operator="Ali", sales_partner="Deniz")
    policy = SchedulePolicy(default_price=650.0, admin_name="Kazim")
    ScheduleService(db, policy).generate_schedule(customer, 6)

    jobs = db.query(Job).all()
    assert jobs
    for job in jobs:
        assert job.status == JobStatus.SCHEDULED
        assert job.price == 650.0
        assert job.operator_share == 520.0
        assert job.admin_share == 65.0
        assert job.sales_share == 65.0
        assert job.operator_share + job.admin_share + job.sales_share == job.price
        assert job.operator_name == "Ali"
        assert job.sales_name == "Deniz"
        assert job.admin_name == "Kazim"


def test_stored_shares_add_up_to_price(db, make_customer):
    customer = make_customer()
    ScheduleService(db, SchedulePolicy(default_price=333.33)).generate_schedule(customer, 12)

    db.expire_all()
    jobs = db.query(Job).all()
    assert len(jobs) == 5
    for job in jobs:
        assert job.price == Decimal("333.33")
        assert job.operator_share + job.admin_share + job.sales_share == job.price


def test_missing_crew_names_fall_back_to_policy(db, make_customer):
    customer = make_customer(assigned_operator=None, sales_partner=None)
    ScheduleService(db, SchedulePolicy()).generate_schedule(customer, 0)

    job = db.query(Job).one()
    assert job.operator_name == "Baha"
    assert job.sales_name == "Eren"


def test_price_change_does_not_touch_existing_jobs(db, make_customer):
    customer = make_customer()
    ScheduleService(db, SchedulePolicy(default_price=500.0)).generate_schedule(customer, 12)
    ScheduleService(db, SchedulePolicy(default_price=800.0)).generate_schedule(customer, 24)

    prices = {job.scheduled_date: job.price for job in db.query(Job).all()}
    assert all(prices[d] == 500.0 for d in QUARTERLY_2025)
    assert sorted(p for p in prices.values() if p == 800.0) == [800.0] * 4


def test_invalid_custom_interval_uses_ninety_days(db, make_customer):
    customer = make_customer(frequency_type=FrequencyType.CUSTOM, custom_interval_days=0)

    ScheduleService(db, SchedulePolicy()).generate_schedule(customer, 12)

    dates = job_dates(db, customer.id)
    assert dates[:3] == [date(2025, 1, 1), date(2025, 4, 1), date(2025, 6, 30)]


def test_missing_anchor_uses_today(db, make_customer):
    customer = make_customer(first_service_date=None, frequency_type=FrequencyType.SEMIANNUAL)
    service = ScheduleService(db, SchedulePolicy(), today=lambda: date(2025, 3, 10))

    assert service.generate_schedule_for_customer_id(customer.id, 12) == 3
    assert job_dates(db, customer.id) == [date(2025, 3, 10), date(2025, 9, 8), date(2026, 3, 9)]


def test_weekend_shift_policy(db, make_customer):
    # 2025-01-04 is a Saturday
    customer = make_customer(
        first_service_date=date(2025, 1, 4),
        frequency_type=FrequencyType.CUSTOM,
        custom_interval_days=7,
    )
    service = ScheduleService(db, SchedulePolicy(shift_weekends=True))

    service.generate_schedule(customer, 1)

    dates = job_dates(db, customer.id)
    assert dates[0] == date(2025, 1, 6)
    assert all(d.weekday() == 0 for d in dates)


def test_unknown_customer_raises(db):
    service = ScheduleService(db, SchedulePolicy())

    with pytest.raises(CustomerNotFoundError):
        service.generate_schedule_for_customer_id(999, 12)
    with pytest.raises(CustomerNotFoundError):
        service.preview_schedule(999, 12)


def test_preview_does_not_write(db, make_customer):
    customer = make_customer()
    add_job(db, customer.id, date(2025, 7, 2))
    service = ScheduleService(db, SchedulePolicy())

    dates = service.preview_schedule(customer.id, 12)

    assert dates == [d for d in QUARTERLY_2025 if d != date(2025, 7, 2)]
    assert db.query(Job).count() == 1


def test_stale_occupied_snapshot_does_not_duplicate(db, make_customer, monkeypatch):
    customer = make_customer()
    add_job(db, customer.id, date(2025, 7, 2))
    service = ScheduleService(db, SchedulePolicy())
    # Simulate a concurrent writer: the read misses the job that already exists
    monkeypatch.setattr(service.repo, "find_job_dates", lambda *args: [])

    assert service.generate_schedule(customer, 12) == 4
    assert job_dates(db, customer.id) == QUARTERLY_2025


def test_bulk_insert_skips_conflicting_rows(db, make_customer):
    customer = make_customer()
    add_job(db, customer.id, date(2025, 4, 2))
    records = [
        {
            "customer_id": customer.id,
            "scheduled_date": d,
            "status": JobStatus.SCHEDULED,
            "price": 500.0,
            "operator_share": 400.0,
            "admin_share": 50.0,
            "sales_share": 50.0,
        }
        for d in (date(2025, 1, 1), date(2025, 4, 2), date(2025, 7, 2))
    ]

    inserted = JobRepository.bulk_insert_jobs(db, records)
    db.commit()

    assert inserted == 2
    assert db.query(Job).count() == 3


def test_bulk_insert_of_nothing(db):
    assert JobRepository.bulk_insert_jobs(db, []) == 0


def test_store_failure_rolls_back_and_propagates(db, make_customer, monkeypatch):
    customer = make_customer()
    service = ScheduleService(db, SchedulePolicy())

    def failing_insert(session, records):
        session.add_all([Job(**record) for record in records])
        session.flush()
        raise OperationalError("INSERT INTO jobs", {}, Exception("connection lost"))

    monkeypatch.setattr(service.repo, "bulk_insert_jobs", failing_insert)

    with pytest.raises(OperationalError):
        service.generate_schedule(customer, 12)

    assert db.query(Job).count() == 0


def test_all_customers_total_is_sum_of_each(db, make_customer):
    quarterly = make_customer(name="Quarterly Grill")
    semiannual = make_customer(name="Semiannual Diner", frequency_type=FrequencyType.SEMIANNUAL)
    custom = make_customer(
        name="Custom Cafe",
        frequency_type=FrequencyType.CUSTOM,
        custom_interval_days=45,
    )
    service = ScheduleService(db, SchedulePolicy())

    result = service.generate_schedule_for_all_customers(12)

    per_customer = [len(job_dates(db, c.id)) for c in (quarterly, semiannual, custom)]
    assert per_customer == [5, 3, 9]
    assert result.total_jobs_created == sum(per_customer)
    assert result.customers_processed == 3
    assert result.failures == []

    again = service.generate_schedule_for_all_customers(12)
    assert again.total_jobs_created == 0


def test_all_customers_continues_after_failure(db, make_customer, monkeypatch):
    good = make_customer(name="Good Grill")
    bad = make_customer(name="Broken Bistro")
    bad_id = bad.id
    service = ScheduleService(db, SchedulePolicy())
    find_job_dates = service.repo.find_job_dates

    def flaky_find(session, customer_id, start_date, end_date):
        if customer_id == bad_id:
            raise OperationalError("SELECT", {}, Exception("timeout"))
        return find_job_dates(session, customer_id, start_date, end_date)

    monkeypatch.setattr(service.repo, "find_job_dates", flaky_find)

    result = service.generate_schedule_for_all_customers(12)

    assert result.total_jobs_created == 5
    assert result.customers_processed == 1
    assert [f.customer_id for f in result.failures] == [bad_id]
    assert "timeout" in result.failures[0].error
    assert len(job_dates(db, good.id)) == 5
    assert job_dates(db, bad_id) == []
