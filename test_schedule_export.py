"""
Excel export tests - 14-column ASC 842 layout
"""
from datetime import date

import pandas as pd

from lease_compliance.lease_accounting.schedule.generator import generate_asc842_schedule
from lease_compliance.lease_accounting.utils.schedule_export import (
    SCHEDULE_EXPORT_COLUMNS,
    SHEET_NAME,
    export_schedule_workbook,
    schedule_to_dataframe,
)

EXPECTED_HEADERS = [
    'Period', 'Payment Date', 'Lease Payment', 'Interest Expense', 'Principal Payment',
    'Lease Liability', 'ROU Asset Value', 'ROU Asset Amortization', 'Cumulative Amortization',
    'Short-term Liability', 'Long-term Liability', 'Interest Amortized', 'Accrued Interest',
    'Prepaid Rent',
]


def _rows():
    schedule = generate_asc842_schedule(100000, 20000, 5, 0.05, start_date=date(2024, 1, 1))
    return [entry.to_dict() for entry in schedule]


def test_column_layout():
    assert [header for header, _, _ in SCHEDULE_EXPORT_COLUMNS] == EXPECTED_HEADERS


def test_dataframe_uses_ending_liability():
    df = schedule_to_dataframe(_rows())

    assert list(df.columns) == EXPECTED_HEADERS
    assert len(df) == 5
    assert df.loc[0, 'Lease Liability'] == 85000.0
    assert df.loc[0, 'Payment Date'] == '2025-01-01'


def test_missing_fields_default():
    df = schedule_to_dataframe([{'interest_expense': 12.5}])

    assert df.loc[0, 'Period'] == ''
    assert df.loc[0, 'Payment Date'] == ''
    assert df.loc[0, 'Interest Expense'] == 12.5
    assert df.loc[0, 'Prepaid Rent'] == 0


def test_workbook_round_trip():
    output = export_schedule_workbook(_rows())
    df = pd.read_excel(output, sheet_name=SHEET_NAME)

    assert list(df.columns) == EXPECTED_HEADERS
    assert df['Period'].tolist() == [1, 2, 3, 4, 5]
    assert df.loc[0, 'Short-term Liability'] == 15750.0
    assert df.loc[4, 'ROU Asset Value'] == 0


def test_empty_schedule_exports_headers_only():
    df = pd.read_excel(export_schedule_workbook([]), sheet_name=SHEET_NAME)

    assert list(df.columns) == EXPECTED_HEADERS
    assert df.empty
