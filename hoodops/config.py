import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./hoodops.db")

# Pricing defaults used when the scheduler stages new jobs
DEFAULT_JOB_PRICE = float(os.getenv("DEFAULT_JOB_PRICE", "500"))

# Revenue split applied to every generated job (must add up to 1.0)
OPERATOR_SPLIT = float(os.getenv("OPERATOR_SPLIT", "0.8"))
ADMIN_SPLIT = float(os.getenv("ADMIN_SPLIT", "0.1"))
SALES_SPLIT = float(os.getenv("SALES_SPLIT", "0.1"))

# Default crew names copied onto generated jobs
DEFAULT_OPERATOR_NAME = os.getenv("DEFAULT_OPERATOR_NAME", "Baha")
DEFAULT_SALES_NAME = os.getenv("DEFAULT_SALES_NAME", "Eren")
ADMIN_NAME = os.getenv("ADMIN_NAME", "Kazim")

# Schedule generation
DEFAULT_HORIZON_MONTHS = int(os.getenv("DEFAULT_HORIZON_MONTHS", "12"))
MAX_HORIZON_MONTHS = int(os.getenv("MAX_HORIZON_MONTHS", "120"))
# Move Saturday/Sunday service dates to the following Monday
SCHEDULE_SHIFT_WEEKENDS = os.getenv("SCHEDULE_SHIFT_WEEKENDS", "false").lower() == "true"

# Comma separated list of frontend origins
ALLOWED_ORIGINS = os.getenv(
    "ALLOWED_ORIGINS",
    "http://localhost:3000,http://localhost:5173",
).split(",")
