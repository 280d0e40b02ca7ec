"""
Schedule export
Flattens a persisted ASC 842 schedule into the fixed 14-column sheet layout
"""

from io import BytesIO
from typing import Iterable, List, Tuple

import pandas as pd

SHEET_NAME = 'ASC 842 Schedule'

# (column header, schedule field, column width)
SCHEDULE_EXPORT_COLUMNS: List[Tuple[str, str, int]] = [
    ('Period', 'period', 8),
    ('Payment Date', 'payment_date', 12),
    ('Lease Payment', 'lease_payment', 15),
    ('Interest Expense', 'interest_expense', 15),
    ('Principal Payment', 'principal_payment', 15),
    ('Lease Liability', 'ending_lease_liability', 15),
    ('ROU Asset Value', 'rou_asset_value', 15),
    ('ROU Asset Amortization', 'rou_asset_amortization', 18),
    ('Cumulative Amortization', 'cumulative_amortization', 18),
    ('Short-term Liability', 'short_term_liability', 15),
    ('Long-term Liability', 'long_term_liability', 15),
    ('Interest Amortized', 'interest_amortized', 15),
    ('Accrued Interest', 'accrued_interest', 12),
    ('Prepaid Rent', 'prepaid_rent', 12),
]


def schedule_to_dataframe(schedule_rows: Iterable[dict]) -> pd.DataFrame:
    """
    Build the export table from schedule dicts (ScheduleEntry.to_dict() shape)
    Missing numeric fields export as 0, missing period/date as ''
    """
    records = []
    for row in schedule_rows:
        record = {}
        for header, key, _ in SCHEDULE_EXPORT_COLUMNS:
            value = row.get(key)
            if value is None:
                value = '' if key in ('period', 'payment_date') else 0
            record[header] = value
        records.append(record)

    return pd.DataFrame(records, columns=[header for header, _, _ in SCHEDULE_EXPORT_COLUMNS])


def export_schedule_workbook(schedule_rows: Iterable[dict]) -> BytesIO:
    """Write the schedule to an in-memory .xlsx workbook"""
    schedule_df = schedule_to_dataframe(schedule_rows)

    output = BytesIO()
    with pd.ExcelWriter(output, engine='openpyxl') as writer:
        schedule_df.to_excel(writer, sheet_name=SHEET_NAME, index=False)

        worksheet = writer.sheets[SHEET_NAME]
        for idx, (_, _, width) in enumerate(SCHEDULE_EXPORT_COLUMNS):
            column_letter = worksheet.cell(row=1, column=idx + 1).column_letter
            worksheet.column_dimensions[column_letter].width = width

    output.seek(0)
    return output
