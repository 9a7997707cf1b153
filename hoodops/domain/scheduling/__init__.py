"""
Scheduling Domain

Expands a customer's service frequency into concrete SCHEDULED jobs over a
rolling horizon of calendar months.

- generator.py   Pure recurrence expansion (interval, horizon end, weekend shift)
- policy.py      Price, revenue split and crew defaults stamped onto new jobs
- repository.py  Job store queries and the duplicate-safe bulk insert
- service.py     Per-customer and all-customer generation, preview
- router.py      /schedule endpoints

Frequencies:
- QUARTERLY   every 91 days
- SEMIANNUAL  every 182 days
- CUSTOM      every custom_interval_days (90 when missing or not positive)

At most one job exists per customer per day (uq_jobs_customer_scheduled_date),
so repeated runs over the same horizon never create duplicates.
"""
