"""Pricing and crew defaults applied to generated jobs"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from ... import config

MONEY = Decimal("0.01")


def qmoney(x: Decimal) -> Decimal:
    return x.quantize(MONEY, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class JobShares:
    price: Decimal
    operator_share: Decimal
    admin_share: Decimal
    sales_share: Decimal


@dataclass(frozen=True)
class SchedulePolicy:
    """
    Immutable settings the scheduler stamps onto every job it creates.

    Prices and splits are frozen onto the job at insert time, so changing the
    policy later never alters jobs that already exist.
    """

    default_price: float = 500.0
    operator_split: float = 0.8
    admin_split: float = 0.1
    sales_split: float = 0.1
    admin_name: str = "Kazim"
    default_operator_name: str = "Baha"
    default_sales_name: str = "Eren"
    shift_weekends: bool = False

    def __post_init__(self):
        if self.default_price < 0:
            raise ValueError("Default price cannot be negative")

        splits = (self.operator_split, self.admin_split, self.sales_split)
        if any(split < 0 for split in splits):
            raise ValueError("Revenue splits cannot be negative")

        total = sum(Decimal(str(split)) for split in splits)
        if total != Decimal("1"):
            raise ValueError(f"Revenue splits must add up to 1.0 (got {total})")

    def calculate_shares(self, price: float) -> JobShares:
        """
        Split a job price into operator/admin/sales shares.

        Shares are rounded to cents. The largest split takes the rounding
        remainder, so the three add back up to the price exactly and none
        of them goes below zero.
        """
        amount = qmoney(Decimal(str(price)))
        splits = {
            "operator_share": Decimal(str(self.operator_split)),
            "admin_share": Decimal(str(self.admin_split)),
            "sales_share": Decimal(str(self.sales_split)),
        }
        # Ties go to the first listed share
        remainder_field = max(splits, key=splits.get)

        shares = {
            name: qmoney(amount * split)
            for name, split in splits.items()
            if name != remainder_field
        }
        shares[remainder_field] = amount - sum(shares.values())

        return JobShares(price=amount, **shares)


def default_schedule_policy() -> SchedulePolicy:
    """Build the policy from environment configuration"""
    return SchedulePolicy(
        default_price=config.DEFAULT_JOB_PRICE,
        operator_split=config.OPERATOR_SPLIT,
        admin_split=config.ADMIN_SPLIT,
        sales_split=config.SALES_SPLIT,
        admin_name=config.ADMIN_NAME,
        default_operator_name=config.DEFAULT_OPERATOR_NAME,
        default_sales_name=config.DEFAULT_SALES_NAME,
        shift_weekends=config.SCHEDULE_SHIFT_WEEKENDS,
    )
