"""Unit tests for CSV export"""

from credit_monitor.domain.export import records_to_csv

HEADER = "Application ID,Applicant Name,Credit Score,Risk Level,Status,Loan Amount,Application Date"


def test_records_to_csv(make_record):
    """Test header and unformatted row values"""
    lines = records_to_csv([make_record("app_7")]).splitlines()

    assert lines == [HEADER, "app_7,John Smith,650,Medium,Pending,100000,3/15/2024"]


def test_records_to_csv_empty():
    """Test empty subset exports only the header"""
    assert records_to_csv([]).splitlines() == [HEADER]


def test_records_to_csv_quotes_commas(make_record):
    """Test names containing commas stay in one column"""
    lines = records_to_csv([make_record(applicant_name="Smith, John")]).splitlines()

    assert lines[1].startswith('app_1,"Smith, John",650')
