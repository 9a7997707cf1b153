"""
Add a unique index on jobs (customer_id, scheduled_date)

Databases created before the constraint existed can hold two jobs for the
same customer on the same day. The migration refuses to run until those
duplicates are cleaned up, and lists them.

Run with: python migrations/add_job_schedule_unique_constraint.py
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import text

from hoodops.database import engine

INDEX_NAME = "uq_jobs_customer_scheduled_date"


def find_duplicates(conn):
    result = conn.execute(text("""
        SELECT customer_id, scheduled_date, COUNT(*) AS job_count
        FROM jobs
        GROUP BY customer_id, scheduled_date
        HAVING COUNT(*) > 1
        ORDER BY customer_id, scheduled_date
    """))
    return result.fetchall()


def upgrade():
    """Create the unique index"""
    with engine.connect() as conn:
        duplicates = find_duplicates(conn)
        if duplicates:
            print(f"❌ Found {len(duplicates)} customer/date pairs with more than one job:")
            for customer_id, scheduled_date, job_count in duplicates:
                print(f"   customer {customer_id} on {scheduled_date}: {job_count} jobs")
            print("\nRemove the extra jobs and run the migration again.")
            return False

        conn.execute(text(f"""
            CREATE UNIQUE INDEX IF NOT EXISTS {INDEX_NAME}
            ON jobs (customer_id, scheduled_date)
        """))
        conn.commit()
        print(f"✅ Created unique index {INDEX_NAME}")
        return True


def downgrade():
    """Drop the unique index"""
    with engine.connect() as conn:
        conn.execute(text(f"DROP INDEX IF EXISTS {INDEX_NAME}"))
        conn.commit()
        print("✅ Migration rolled back successfully!")


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Manage the job schedule unique index")
    parser.add_argument("--down", action="store_true", help="Rollback the migration")
    args = parser.parse_args()

    if args.down:
        print("Rolling back migration...")
        downgrade()
    else:
        print("Running migration...")
        if not upgrade():
            sys.exit(1)
