"""
Financial calculation utilities
Present value and payment sizing used by the schedule generators
"""

from typing import Optional, Sequence

from lease_compliance.lease_accounting.core.exceptions import InvalidLeaseParameters


def round_currency(value: float) -> float:
    """Round to cents, normalising -0.0 to 0.0"""
    rounded = round(value, 2)
    return rounded + 0.0 if rounded == 0 else rounded


def present_value(
    cash_flows: Sequence[float],
    rate: float,
    periods: Optional[Sequence[int]] = None
) -> float:
    """
    Discount a stream of cash flows

    Each cash flow cf at index i contributes cf / (1 + rate) ** periods[i].
    A missing period index (no periods given, list too short, or a falsy
    value) falls back to i + 1. Rate and periods must be in matching units:
    annual rate with annual periods, monthly rate with monthly periods.

    Args:
        cash_flows: Amounts in period order
        rate: Discount rate per period
        periods: Period index of each cash flow
    Returns:
        Present value (0.0 for no cash flows)
    """
    periods = periods or []
    pv = 0.0
    for i, cash_flow in enumerate(cash_flows):
        period = periods[i] if i < len(periods) and periods[i] else i + 1
        pv += cash_flow / ((1 + rate) ** period)
    return pv


def annuity_present_value(monthly_payment: float, term_months: int, annual_rate_percent: float) -> float:
    """
    Present value of a level monthly payment stream

    Note the rate here is a PERCENTAGE (3.5 means 3.5%), converted to a
    monthly rate. Schedule generators take the annual rate as a fraction.

    Args:
        monthly_payment: Payment due each month
        term_months: Number of monthly payments
        annual_rate_percent: Annual discount rate in percent
    Returns:
        Present value of the payments
    """
    errors = []
    if monthly_payment is None or monthly_payment <= 0:
        errors.append("monthly payment must be greater than zero")
    if term_months is None or term_months <= 0:
        errors.append("term must be at least one month")
    if annual_rate_percent is None or annual_rate_percent < 0:
        errors.append("discount rate cannot be negative")
    if errors:
        raise InvalidLeaseParameters(errors)

    monthly_rate = annual_rate_percent / 100 / 12
    if monthly_rate == 0:
        return monthly_payment * term_months

    return monthly_payment * ((1 - (1 + monthly_rate) ** -term_months) / monthly_rate)


def level_payment(principal: float, rate: float, periods: int) -> float:
    """
    Payment that fully amortizes principal over periods at rate
    Same formula as Excel PMT() for an ordinary annuity, returned as a positive amount
    """
    if periods <= 0:
        raise InvalidLeaseParameters("number of periods must be at least one")
    if rate == 0:
        return principal / periods
    return principal * rate / (1 - (1 + rate) ** -periods)
