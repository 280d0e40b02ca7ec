"""
Lease Amortization Schedule Generator
ASC 842 and IFRS 16 schedules built on a shared liability roll-forward

Each period:
  - interest accrues on the opening liability
  - the payment settles interest first, the rest reduces principal
  - the ROU asset is amortized straight-line over the term
  - ASC 842 additionally splits the closing liability into current
    (next period's principal) and non-current portions

On the final period the payment becomes a balloon: it settles the remaining
liability plus that period's interest, so the closing balance is exactly zero
and principal = payment - interest holds on every row.
"""

import logging
import math
from datetime import date
from typing import List, Optional, Sequence, Tuple

from lease_compliance.lease_accounting.core.exceptions import InvalidLeaseParameters, UnsupportedStandard
from lease_compliance.lease_accounting.core.models import (
    ASC842,
    IFRS16,
    LeaseEconomics,
    ScheduleEntry,
)
from lease_compliance.lease_accounting.utils.date_utils import add_years, schedule_anchor
from lease_compliance.lease_accounting.utils.finance import present_value, round_currency

logger = logging.getLogger(__name__)

# Residual liability tolerated on the final period before it is reported
SETTLEMENT_TOLERANCE = 0.01


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def validate_lease_parameters(
    lease_amount: float,
    annual_payment: float,
    lease_term_years: int,
    annual_discount_rate: float
) -> int:
    """
    Check lease economics before any computation

    Returns:
        Lease term as an int
    Raises:
        InvalidLeaseParameters listing every violated precondition
    """
    errors = []
    if not _is_number(lease_amount) or lease_amount <= 0:
        errors.append(f"lease amount must be greater than zero (got {lease_amount!r})")
    if not _is_number(annual_payment) or annual_payment <= 0:
        errors.append(f"payment must be greater than zero (got {annual_payment!r})")
    if (not _is_number(lease_term_years) or lease_term_years < 1
            or not float(lease_term_years).is_integer()):
        errors.append(f"lease term must be a whole number of at least one period (got {lease_term_years!r})")
    if not _is_number(annual_discount_rate) or annual_discount_rate < 0:
        errors.append(f"discount rate cannot be negative (got {annual_discount_rate!r})")

    if errors:
        raise InvalidLeaseParameters(errors)
    return int(lease_term_years)


def _settle_period(opening: float, interest: float, payment: float, is_final: bool) -> Tuple[float, float]:
    """
    Payment and principal for one period
    The final period pays a balloon of the opening balance plus interest
    """
    if not is_final:
        return payment, payment - interest

    balloon = round_currency(round_currency(opening) + round_currency(interest))
    residual = balloon - payment
    if abs(residual) > SETTLEMENT_TOLERANCE:
        logger.warning(
            f"⚠️  Final payment adjusted by {residual:,.2f} to settle the residual liability "
            f"(level payment {payment:,.2f}, balloon {balloon:,.2f})"
        )
    return balloon, opening


def _current_portion(closing: float, payment: float, rate: float, period: int, term: int) -> float:
    """
    Portion of the closing liability due within the next period
    Look-ahead: next period's principal payment on the closing balance
    """
    if period >= term:
        return 0.0
    if period + 1 == term:
        next_principal = closing
    else:
        next_principal = payment - closing * rate
    return min(max(next_principal, 0.0), closing)


def _build_schedule(
    lease_amount: float,
    payment: float,
    term: int,
    period_rate: float,
    annual_amortization: float,
    start_date: Optional[date],
    split_liability: bool
) -> List[ScheduleEntry]:
    """Roll the liability and ROU asset forward period by period"""
    anchor = schedule_anchor(start_date)
    schedule: List[ScheduleEntry] = []

    liability = lease_amount
    cumulative_amortization = 0.0
    cumulative_interest = 0.0

    for period in range(1, term + 1):
        is_final = period == term
        opening = liability

        interest = opening * period_rate
        period_payment, principal = _settle_period(opening, interest, payment, is_final)
        liability = 0.0 if is_final else max(0.0, opening - principal)

        if payment < interest:
            logger.warning(f"⚠️  Period {period}: payment {payment:,.2f} does not cover interest {interest:,.2f}")

        previous_cumulative = cumulative_amortization
        cumulative_amortization = lease_amount if is_final else annual_amortization * period
        rou_asset = max(0.0, lease_amount - cumulative_amortization)
        cumulative_interest += interest

        closing = round_currency(liability)
        if split_liability:
            short_term = round_currency(_current_portion(liability, payment, period_rate, period, term))
            long_term = round_currency(closing - short_term)
        else:
            short_term = 0.0
            long_term = 0.0

        schedule.append(ScheduleEntry(
            period=period,
            payment_date=add_years(anchor, period),
            lease_payment=round_currency(period_payment),
            interest_expense=round_currency(interest),
            principal_payment=round_currency(principal),
            beginning_lease_liability=round_currency(opening),
            ending_lease_liability=closing,
            rou_asset_value=round_currency(rou_asset),
            rou_asset_amortization=round_currency(cumulative_amortization - previous_cumulative),
            cumulative_amortization=round_currency(cumulative_amortization),
            short_term_liability=short_term,
            long_term_liability=long_term,
            interest_amortized=round_currency(cumulative_interest),
            accrued_interest=0.0,
            prepaid_rent=0.0,
        ))

    return schedule


def generate_asc842_schedule(
    lease_amount: float,
    annual_payment: float,
    lease_term_years: int,
    annual_discount_rate: float,
    start_date: Optional[date] = None
) -> List[ScheduleEntry]:
    """
    Generate an ASC 842 amortization schedule (annual periods)

    Args:
        lease_amount: Initial lease liability / ROU asset
        annual_payment: Payment due each year
        lease_term_years: Number of annual periods
        annual_discount_rate: Annual rate as a fraction (0.05 = 5%)
        start_date: Lease commencement; payment N falls N years later.
                    Defaults to today when unknown.
    Returns:
        One ScheduleEntry per year, including the current/non-current split
    """
    term = validate_lease_parameters(lease_amount, annual_payment, lease_term_years, annual_discount_rate)
    logger.debug(f"📅 ASC842 schedule: amount={lease_amount:,.2f}, payment={annual_payment:,.2f}, "
                 f"term={term}y, rate={annual_discount_rate}")

    return _build_schedule(
        lease_amount=float(lease_amount),
        payment=float(annual_payment),
        term=term,
        period_rate=annual_discount_rate,
        annual_amortization=lease_amount / term,
        start_date=start_date,
        split_liability=True,
    )


def generate_ifrs16_schedule(
    lease_amount: float,
    annual_payment: float,
    lease_term_years: int,
    annual_discount_rate: float,
    start_date: Optional[date] = None
) -> List[ScheduleEntry]:
    """
    Generate an IFRS 16 amortization schedule (annual periods)

    Interest accrues at annual_discount_rate / 12 per ANNUAL period. This is
    a monthly rate applied to a yearly step and does not match the ASC 842
    path; it is kept as-is pending a decision on whether the approximation
    is intended. Depreciation is the monthly straight-line charge times 12.
    No current/non-current split is produced.
    """
    term = validate_lease_parameters(lease_amount, annual_payment, lease_term_years, annual_discount_rate)
    logger.debug(f"📅 IFRS16 schedule: amount={lease_amount:,.2f}, payment={annual_payment:,.2f}, "
                 f"term={term}y, rate={annual_discount_rate}")

    monthly_depreciation = lease_amount / (term * 12)
    return _build_schedule(
        lease_amount=float(lease_amount),
        payment=float(annual_payment),
        term=term,
        period_rate=annual_discount_rate / 12,
        annual_amortization=monthly_depreciation * 12,
        start_date=start_date,
        split_liability=False,
    )


def generate_schedule(standard: str, economics: LeaseEconomics) -> List[ScheduleEntry]:
    """Dispatch on the accounting standard selector"""
    if standard == ASC842:
        generator = generate_asc842_schedule
    elif standard == IFRS16:
        generator = generate_ifrs16_schedule
    else:
        raise UnsupportedStandard(standard)

    return generator(
        economics.principal,
        economics.periodic_payment,
        economics.term_periods,
        economics.discount_rate,
        start_date=economics.start_date,
    )


def schedule_present_value(schedule: Sequence[ScheduleEntry], rate: float) -> float:
    """Present value of a schedule's payments, discounting entry N by N periods"""
    return present_value(
        [entry.lease_payment for entry in schedule],
        rate,
        [entry.period for entry in schedule],
    )
