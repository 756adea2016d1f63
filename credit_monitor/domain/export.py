"""CSV export of application records"""

from typing import Sequence

import pandas as pd

from credit_monitor.domain.models import ApplicationRecord
from credit_monitor.utils.date_utils import format_locale_date

EXPORT_COLUMNS = [
    "Application ID",
    "Applicant Name",
    "Credit Score",
    "Risk Level",
    "Status",
    "Loan Amount",
    "Application Date",
]


def records_to_csv(records: Sequence[ApplicationRecord]) -> str:
    """Render records as CSV, one row per record, header first"""
    rows = [
        (
            record.id,
            record.applicant_name,
            record.credit_score,
            record.risk_level,
            record.status,
            record.loan_amount,
            format_locale_date(record.application_date),
        )
        for record in records
    ]
    df = pd.DataFrame(rows, columns=EXPORT_COLUMNS)
    return df.to_csv(index=False, lineterminator="\n")
