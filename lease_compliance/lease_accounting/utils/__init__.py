"""
Utility functions for lease accounting
"""

from .date_utils import (
    add_months,
    add_years,
    parse_date,
    schedule_anchor,
)

from .finance import (
    present_value,
    annuity_present_value,
    level_payment,
    round_currency,
)

from .journal_generator import (
    JournalGenerator,
    generate_journal_entries,
)

from .schedule_export import (
    SCHEDULE_EXPORT_COLUMNS,
    schedule_to_dataframe,
    export_schedule_workbook,
)

__all__ = [
    # Date utilities
    'add_months',
    'add_years',
    'parse_date',
    'schedule_anchor',

    # Finance utilities
    'present_value',
    'annuity_present_value',
    'level_payment',
    'round_currency',

    # Journal generation
    'JournalGenerator',
    'generate_journal_entries',

    # Export
    'SCHEDULE_EXPORT_COLUMNS',
    'schedule_to_dataframe',
    'export_schedule_workbook',
]
