"""
Present value and payment sizing tests
"""
import pytest

from lease_compliance.lease_accounting.core.exceptions import InvalidLeaseParameters
from lease_compliance.lease_accounting.utils.finance import (
    annuity_present_value,
    level_payment,
    present_value,
    round_currency,
)


def test_zero_rate_is_plain_sum():
    assert present_value([100, 250.5, 49.5], 0.0) == pytest.approx(400.0)


def test_single_period_discount():
    assert present_value([105], 0.05) == pytest.approx(100.0)


def test_empty_cash_flows():
    assert present_value([], 0.05) == 0.0


def test_default_periods_start_at_one():
    expected = 1000 / 1.1 + 1000 / 1.1 ** 2
    assert present_value([1000, 1000], 0.1) == pytest.approx(expected)


def test_explicit_periods():
    expected = 1000 / 1.1 ** 3 + 1000 / 1.1 ** 5
    assert present_value([1000, 1000], 0.1, [3, 5]) == pytest.approx(expected)


def test_short_or_falsy_periods_fall_back_to_position():
    expected = 1000 / 1.1 ** 4 + 1000 / 1.1 ** 2 + 1000 / 1.1 ** 3
    assert present_value([1000, 1000, 1000], 0.1, [4, 0]) == pytest.approx(expected)


def test_negative_rate_passes_through():
    assert present_value([100], -0.5) == pytest.approx(200.0)


def test_annuity_present_value_matches_closed_form():
    monthly_rate = 3.5 / 100 / 12
    expected = 5000 * (1 - (1 + monthly_rate) ** -60) / monthly_rate

    assert annuity_present_value(5000, 60, 3.5) == pytest.approx(expected)
    assert 274000 < annuity_present_value(5000, 60, 3.5) < 276000


def test_annuity_present_value_zero_rate():
    assert annuity_present_value(1000, 12, 0) == 12000


@pytest.mark.parametrize("payment,months,rate", [
    (0, 12, 3.5),
    (1000, 0, 3.5),
    (1000, 12, -1),
])
def test_annuity_present_value_rejects_bad_inputs(payment, months, rate):
    with pytest.raises(InvalidLeaseParameters):
        annuity_present_value(payment, months, rate)


def test_level_payment_amortizes_principal():
    payment = level_payment(100000, 0.05, 5)

    assert payment == pytest.approx(23097.48, abs=0.01)
    # Discounting the payments back recovers the principal
    assert present_value([payment] * 5, 0.05) == pytest.approx(100000)


def test_level_payment_zero_rate():
    assert level_payment(1200, 0.0, 3) == 400.0


def test_level_payment_requires_periods():
    with pytest.raises(InvalidLeaseParameters):
        level_payment(1000, 0.05, 0)


def test_round_currency_normalises_negative_zero():
    assert str(round_currency(-0.001)) == '0.0'
    assert round_currency(1234.5678) == 1234.57
