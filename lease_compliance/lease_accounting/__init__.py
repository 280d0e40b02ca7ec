"""
Lease accounting engine
Amortization schedules, present value and journal postings
"""

from lease_compliance.lease_accounting.core.exceptions import (
    LeaseAccountingError,
    InvalidLeaseParameters,
    UnsupportedStandard,
)
from lease_compliance.lease_accounting.core.models import (
    ASC842,
    IFRS16,
    LeaseEconomics,
    ScheduleEntry,
    JournalPosting,
    LeaseContract,
)
from lease_compliance.lease_accounting.schedule.generator import (
    generate_asc842_schedule,
    generate_ifrs16_schedule,
    generate_schedule,
    schedule_present_value,
    validate_lease_parameters,
)
from lease_compliance.lease_accounting.utils.finance import present_value
from lease_compliance.lease_accounting.utils.journal_generator import generate_journal_entries

__all__ = [
    'LeaseAccountingError',
    'InvalidLeaseParameters',
    'UnsupportedStandard',
    'ASC842',
    'IFRS16',
    'LeaseEconomics',
    'ScheduleEntry',
    'JournalPosting',
    'LeaseContract',
    'generate_asc842_schedule',
    'generate_ifrs16_schedule',
    'generate_schedule',
    'schedule_present_value',
    'validate_lease_parameters',
    'present_value',
    'generate_journal_entries',
]
