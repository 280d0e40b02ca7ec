"""
Journal entry generator tests
"""
from datetime import date, datetime

import pytest

from lease_compliance.lease_accounting.core.models import LeaseContract
from lease_compliance.lease_accounting.schedule.generator import generate_asc842_schedule, generate_ifrs16_schedule
from lease_compliance.lease_accounting.utils.journal_generator import (
    CASH,
    INTEREST_EXPENSE,
    LEASE_LIABILITY,
    ROU_ASSET,
    JournalGenerator,
    generate_journal_entries,
)

ENTRY_DATE = datetime(2024, 1, 31, 9, 0)


def test_asc842_legacy_postings(contract):
    postings = generate_journal_entries(contract, 'ASC842', entry_date=ENTRY_DATE)

    assert len(postings) == 2
    recognition, payment = postings

    assert recognition.debit_account == ROU_ASSET
    assert recognition.credit_account == LEASE_LIABILITY
    assert recognition.amount == 50000.0
    assert recognition.description == 'Initial recognition of lease - Warehouse Lease'
    assert recognition.reference == 'ASC842-7'
    assert recognition.entry_date == ENTRY_DATE

    assert payment.debit_account == LEASE_LIABILITY
    assert payment.credit_account == CASH
    # Blended posting for the full contract amount
    assert payment.amount == 50000.0
    assert payment.reference == 'ASC842-PMT-7'
    # One month later, clamped to month end
    assert payment.entry_date == datetime(2024, 2, 29, 9, 0)


def test_ifrs16_recognition_only(contract):
    postings = generate_journal_entries(contract, 'IFRS16', entry_date=ENTRY_DATE)

    assert len(postings) == 1
    assert postings[0].description == 'IFRS 16 lease recognition - Warehouse Lease'
    assert postings[0].reference == 'IFRS16-7'
    assert postings[0].amount == 50000.0


@pytest.mark.parametrize("schedule_type", ['GAAP', '', None, 'asc842'])
def test_unknown_standard_yields_nothing(contract, schedule_type):
    generator = JournalGenerator(schedule_type=schedule_type)

    assert not generator.is_supported
    assert generator.generate_journals(contract) == []


def test_entry_date_defaults_to_now(contract):
    before = datetime.now()
    postings = generate_journal_entries(contract, 'IFRS16')
    assert before <= postings[0].entry_date <= datetime.now()


def test_per_period_postings_follow_schedule():
    contract = LeaseContract(id=3, name='Office Lease', amount=100000.0)
    schedule = generate_asc842_schedule(100000, 20000, 5, 0.05, start_date=date(2024, 1, 1))

    postings = generate_journal_entries(contract, 'ASC842', schedule, per_period=True, entry_date=ENTRY_DATE)

    # Recognition + interest/principal pair for each of 5 periods
    assert len(postings) == 11
    interest = [p for p in postings if p.debit_account == INTEREST_EXPENSE]
    principal = [p for p in postings if p.debit_account == LEASE_LIABILITY]

    assert [p.amount for p in interest] == [e.interest_expense for e in schedule]
    assert sum(p.amount for p in principal) == pytest.approx(100000, abs=0.02)
    assert interest[0].reference == 'ASC842-INT-3-1'
    assert principal[4].reference == 'ASC842-PRN-3-5'
    assert interest[0].entry_date == datetime(2025, 1, 1)


def test_per_period_skips_zero_interest_legs():
    contract = LeaseContract(id=4, name='Storage Unit', amount=3000.0)
    schedule = generate_ifrs16_schedule(3000, 1000, 3, 0.0, start_date=date(2024, 1, 1))

    postings = generate_journal_entries(contract, 'IFRS16', schedule, per_period=True)

    assert len(postings) == 4
    assert not any(p.debit_account == INTEREST_EXPENSE for p in postings)


def test_per_period_without_schedule_posts_recognition_only(contract):
    postings = generate_journal_entries(contract, 'ASC842', per_period=True)
    assert len(postings) == 1


def test_account_totals_and_balance(contract):
    generator = JournalGenerator(schedule_type='ASC842')
    generator.generate_journals(contract, entry_date=ENTRY_DATE)

    totals = generator.get_account_totals()
    assert totals[ROU_ASSET] == {'debit': 50000.0, 'credit': 0.0}
    assert totals[LEASE_LIABILITY] == {'debit': 50000.0, 'credit': 50000.0}
    assert totals[CASH] == {'debit': 0.0, 'credit': 50000.0}
    assert generator.verify_balance()


def test_generator_resets_between_calls(contract):
    generator = JournalGenerator(schedule_type='ASC842')
    generator.generate_journals(contract)
    assert len(generator.generate_journals(contract)) == 2


def test_posting_to_dict(contract):
    data = generate_journal_entries(contract, 'IFRS16', entry_date=ENTRY_DATE)[0].to_dict()

    assert data['entry_date'] == '2024-01-31T09:00:00'
    assert data['debit_account'] == ROU_ASSET
    assert data['amount'] == 50000.0


def test_contract_from_record():
    contract = LeaseContract.from_record({
        'id': 12, 'name': 'Retail Unit', 'amount': '75000.50', 'vendor': None, 'status': None,
    })

    assert contract.id == 12
    assert contract.amount == 75000.5
    assert contract.vendor == ''
    assert contract.status == 'Active'


def test_per_period_cash_matches_schedule_payments():
    contract = LeaseContract(id=3, name='Office Lease', amount=100000.0)
    # Underpaying schedule: the final period carries a balloon payment
    schedule = generate_asc842_schedule(100000, 20000, 5, 0.05, start_date=date(2024, 1, 1))

    generator = JournalGenerator(schedule_type='ASC842')
    generator.generate_journals(contract, schedule, per_period=True)

    cash_paid = generator.get_account_totals()[CASH]['credit']
    assert cash_paid == pytest.approx(sum(e.lease_payment for e in schedule), abs=0.05)
    assert generator.verify_balance()


def test_contract_carries_only_record_fields():
    contract = LeaseContract.from_record({'id': 1, 'name': 'Kiosk', 'amount': 900, 'notes': 'ignored'})

    assert not hasattr(contract, 'extra')
    assert not hasattr(contract, 'notes')
