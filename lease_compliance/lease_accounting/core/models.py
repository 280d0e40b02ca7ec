"""
Data models for lease compliance calculations
Lease economics in, schedule entries and journal postings out
"""

from dataclasses import dataclass
from typing import Optional, Any
from datetime import date, datetime


ASC842 = "ASC842"
IFRS16 = "IFRS16"
SUPPORTED_STANDARDS = (ASC842, IFRS16)


@dataclass(frozen=True)
class LeaseEconomics:
    """Inputs for one schedule calculation"""
    principal: float
    periodic_payment: float
    term_periods: int
    discount_rate: float  # Annual rate as a fraction (0.05 = 5%)
    start_date: Optional[date] = None


@dataclass(frozen=True)
class ScheduleEntry:
    """Single period of an amortization schedule - one row of the exported sheet"""
    period: int
    payment_date: date
    lease_payment: float = 0.0
    interest_expense: float = 0.0
    principal_payment: float = 0.0
    beginning_lease_liability: float = 0.0
    ending_lease_liability: float = 0.0

    # ROU asset (straight-line)
    rou_asset_value: float = 0.0
    rou_asset_amortization: float = 0.0
    cumulative_amortization: float = 0.0

    # Current / non-current split of the ending liability (ASC 842 only)
    short_term_liability: float = 0.0
    long_term_liability: float = 0.0

    interest_amortized: float = 0.0
    accrued_interest: float = 0.0
    prepaid_rent: float = 0.0

    @property
    def lease_liability(self) -> float:
        """Closing liability, the figure reported for the period"""
        return self.ending_lease_liability

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization"""
        return {
            'period': self.period,
            'payment_date': self.payment_date.isoformat() if self.payment_date else None,
            'lease_payment': self.lease_payment,
            'interest_expense': self.interest_expense,
            'principal_payment': self.principal_payment,
            'beginning_lease_liability': self.beginning_lease_liability,
            'ending_lease_liability': self.ending_lease_liability,
            'rou_asset_value': self.rou_asset_value,
            'rou_asset_amortization': self.rou_asset_amortization,
            'cumulative_amortization': self.cumulative_amortization,
            'short_term_liability': self.short_term_liability,
            'long_term_liability': self.long_term_liability,
            'interest_amortized': self.interest_amortized,
            'accrued_interest': self.accrued_interest,
            'prepaid_rent': self.prepaid_rent,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ScheduleEntry":
        """Rebuild an entry from its persisted dict"""
        payment_date = data.get('payment_date')
        if isinstance(payment_date, str):
            payment_date = date.fromisoformat(payment_date[:10])

        return cls(
            period=int(data['period']),
            payment_date=payment_date,
            **{
                name: float(data.get(name) or 0.0)
                for name in (
                    'lease_payment', 'interest_expense', 'principal_payment',
                    'beginning_lease_liability', 'ending_lease_liability',
                    'rou_asset_value', 'rou_asset_amortization', 'cumulative_amortization',
                    'short_term_liability', 'long_term_liability',
                    'interest_amortized', 'accrued_interest', 'prepaid_rent',
                )
            }
        )


@dataclass(frozen=True)
class JournalPosting:
    """Standalone debit/credit record - no running balance"""
    entry_date: datetime
    description: str
    debit_account: str
    credit_account: str
    amount: float
    reference: str = ""

    def to_dict(self) -> dict:
        return {
            'entry_date': self.entry_date.isoformat(),
            'description': self.description,
            'debit_account': self.debit_account,
            'credit_account': self.credit_account,
            'amount': self.amount,
            'reference': self.reference,
        }


@dataclass
class LeaseContract:
    """Contract record as seen by the journal generator"""
    id: Any
    name: str
    amount: float
    vendor: str = ""
    type: str = ""
    payment_terms: str = ""
    status: str = "Active"

    @classmethod
    def from_record(cls, record: dict) -> "LeaseContract":
        """Map a database row dict to a LeaseContract"""
        return cls(
            id=record.get('id'),
            name=record.get('name', ''),
            amount=float(record.get('amount', 0) or 0),
            vendor=record.get('vendor', '') or '',
            type=record.get('type', '') or '',
            payment_terms=record.get('payment_terms', '') or '',
            status=record.get('status', 'Active') or 'Active',
        )
